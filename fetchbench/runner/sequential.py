import logging
import time
from typing import Any

from fetchbench.config import FetchSpec
from fetchbench.fetch import Fetcher, FetchFailure

from .types import Clock, RunResult, Timing

logger = logging.getLogger(__name__)


class SequentialRunner:
    strategy = "sequential"

    def __init__(self, fetcher: Fetcher, clock: Clock = time.monotonic):
        self.fetcher = fetcher
        self.clock = clock

    def run(self, spec: FetchSpec, *, start: float) -> RunResult:
        results: dict[str, Any] = {}
        timing: Timing = {}

        for entry in spec:
            logger.debug("fetching %s", entry.name)
            try:
                results[entry.name] = self.fetcher.fetch(entry.locator)
            except FetchFailure as exc:
                # Abort the rest of the sequence, nothing partial is returned.
                exc.name = entry.name
                exc.elapsed = self.clock() - start
                logger.debug("%s failed after %.3fs", entry.name, exc.elapsed)
                raise
            timing[entry.name] = self.clock() - start
            logger.debug("%s settled at %.3fs", entry.name, timing[entry.name])

        total = timing[spec.entries[-1].name] if spec.entries else 0.0
        logger.info("sequential run finished in %.3fs", total)

        return RunResult(self.strategy, spec.names(), results, timing, total)
