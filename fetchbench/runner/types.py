from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping

from fetchbench.errors import HarnessError

Clock = Callable[[], float]
Timing = dict[str, float]


@dataclass(frozen=True)
class RunResult:
    strategy: str
    order: tuple[str, ...]
    results: Mapping[str, Any]
    timing: Mapping[str, float]
    total_elapsed: float

    def __post_init__(self) -> None:
        # Read-only views over private copies.
        object.__setattr__(self, "results", MappingProxyType(dict(self.results)))
        object.__setattr__(self, "timing", MappingProxyType(dict(self.timing)))


class BatchTimeout(HarnessError):
    def __init__(self, timeout: float):
        super().__init__(f"Concurrent batch abandoned after {timeout:.3f}s")
        self.timeout = timeout
