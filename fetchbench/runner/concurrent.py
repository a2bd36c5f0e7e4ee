import asyncio
import logging
import time
from typing import Any

from fetchbench.config import FetchEntry, FetchSpec
from fetchbench.fetch import Fetcher, FetchFailure

from .types import BatchTimeout, Clock, RunResult, Timing

logger = logging.getLogger(__name__)


class ConcurrentRunner:
    """Dispatch every fetch at once and wait for the whole batch to settle.

    Each task stamps its own completion time into the timing map, so the
    recorded values follow real completion order rather than declaration
    order. A single failure cancels the rest of the batch and no RunResult is
    produced, the same as when ``batch_timeout`` expires.
    """

    strategy = "concurrent"

    def __init__(
        self,
        fetcher: Fetcher,
        clock: Clock = time.monotonic,
        *,
        batch_timeout: float | None = None,
    ):
        self.fetcher = fetcher
        self.clock = clock
        self.batch_timeout = batch_timeout

    def run(self, spec: FetchSpec, *, start: float) -> RunResult:
        return asyncio.run(self.run_async(spec, start=start))

    async def run_async(self, spec: FetchSpec, *, start: float) -> RunResult:
        results: dict[str, Any] = {}
        timing: Timing = {}

        logger.debug("dispatching %d fetches", len(spec))
        try:
            async with asyncio.timeout(self.batch_timeout):
                async with asyncio.TaskGroup() as group:
                    for entry in spec:
                        group.create_task(
                            self._settle(entry, start, results, timing),
                            name=f"fetch:{entry.name}",
                        )
                    logger.debug("awaiting all %d fetches", len(spec))
        except TimeoutError as exc:
            logger.debug("batch done-with-error: timed out")
            raise BatchTimeout(self.batch_timeout) from exc
        except ExceptionGroup as eg:
            failures, rest = eg.split(FetchFailure)
            if failures is None or rest is not None:
                raise
            first = min(
                (exc for exc in failures.exceptions if isinstance(exc, FetchFailure)),
                key=lambda exc: exc.elapsed if exc.elapsed is not None else 0.0,
            )
            logger.debug("batch done-with-error: %s", first)
            raise first
        finally:
            await self.fetcher.aclose()

        total = max(timing.values()) if timing else 0.0
        logger.debug("batch done")
        logger.info("concurrent run finished in %.3fs", total)

        ordered = {name: results[name] for name in spec.names()}
        return RunResult(self.strategy, spec.names(), ordered, dict(timing), total)

    async def _settle(
        self,
        entry: FetchEntry,
        start: float,
        results: dict[str, Any],
        timing: Timing,
    ) -> None:
        try:
            payload = await self.fetcher.afetch(entry.locator)
        except FetchFailure as exc:
            exc.name = entry.name
            exc.elapsed = self.clock() - start
            logger.debug("%s failed at %.3fs", entry.name, exc.elapsed)
            raise

        # Each task writes only its own key.
        timing[entry.name] = self.clock() - start
        results[entry.name] = payload
        logger.debug("%s settled at %.3fs", entry.name, timing[entry.name])
