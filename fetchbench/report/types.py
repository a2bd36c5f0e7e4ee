from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from fetchbench.errors import HarnessError


@dataclass(frozen=True)
class Bar:
    name: str
    elapsed: float
    fraction: float


@dataclass(frozen=True)
class Speedup:
    percentage_reduction: float
    speedup_ratio: float


@dataclass(frozen=True)
class UndefinedRatio:
    """Marker for a comparison whose ratio can't be computed."""

    reason: str


@dataclass(frozen=True)
class ComparisonReport:
    sequential_total: float
    concurrent_total: float
    speedup: Speedup | UndefinedRatio
    completion_order: tuple[tuple[str, float], ...]
    sequential_timeline: tuple[Bar, ...]
    concurrent_timeline: tuple[Bar, ...]

    @property
    def computable(self) -> bool:
        return isinstance(self.speedup, Speedup)

    def to_dict(self) -> dict[str, Any]:
        if isinstance(self.speedup, Speedup):
            speedup: dict[str, Any] = asdict(self.speedup)
        else:
            speedup = {"undefined": self.speedup.reason}

        return {
            "sequential_total": self.sequential_total,
            "concurrent_total": self.concurrent_total,
            "speedup": speedup,
            "completion_order": [
                {"name": name, "elapsed": elapsed}
                for name, elapsed in self.completion_order
            ],
            "sequential_timeline": [asdict(bar) for bar in self.sequential_timeline],
            "concurrent_timeline": [asdict(bar) for bar in self.concurrent_timeline],
        }


class IncomparableRunsError(HarnessError):
    def __init__(self, missing: list[str], extra: list[str]):
        parts = []
        if missing:
            parts.append("missing from concurrent run: " + ", ".join(missing))
        if extra:
            parts.append("not in sequential run: " + ", ".join(extra))
        if not parts:
            parts.append("fetches declared in a different order")
        super().__init__("Runs are not comparable (" + "; ".join(parts) + ")")
        self.missing = missing
        self.extra = extra
