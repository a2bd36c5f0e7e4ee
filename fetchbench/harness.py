from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from fetchbench.config import FetchSpec
from fetchbench.fetch import Fetcher
from fetchbench.report import ComparisonReport, compare
from fetchbench.runner import Clock, ConcurrentRunner, RunResult, SequentialRunner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Comparison:
    spec: FetchSpec
    sequential: RunResult
    concurrent: RunResult
    report: ComparisonReport


class Harness:
    """Run one sequential and one concurrent pass over a fetch set and compare them."""

    def __init__(
        self,
        fetcher: Fetcher,
        clock: Clock = time.monotonic,
        *,
        batch_timeout: float | None = None,
    ):
        self.sequential = SequentialRunner(fetcher, clock)
        self.concurrent = ConcurrentRunner(fetcher, clock, batch_timeout=batch_timeout)
        self.clock = clock

    def run(self, spec: FetchSpec) -> Comparison:
        logger.info("running %d fetches sequentially", len(spec))
        sequential = self.sequential.run(spec, start=self.clock())

        logger.info("running %d fetches concurrently", len(spec))
        concurrent = self.concurrent.run(spec, start=self.clock())

        return Comparison(spec, sequential, concurrent, compare(sequential, concurrent))
