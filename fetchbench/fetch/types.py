from __future__ import annotations

from typing import Any, Protocol

from fetchbench.errors import HarnessError


class Fetcher(Protocol):
    """Blocking and awaitable access to a single remote resource.

    Both calls return the decoded payload or raise ``FetchFailure``.
    """

    def fetch(self, locator: str) -> Any: ...

    async def afetch(self, locator: str) -> Any: ...

    def close(self) -> None: ...

    async def aclose(self) -> None: ...


class FetchFailure(HarnessError):
    def __init__(
        self,
        locator: str,
        reason: str,
        name: str | None = None,
        elapsed: float | None = None,
    ) -> None:
        super().__init__(locator, reason)
        self.locator = locator
        self.reason = reason
        self.name = name
        self.elapsed = elapsed

    def __str__(self) -> str:
        label = self.name if self.name is not None else self.locator
        return f"Fetch failed for {label}: {self.reason}"
