from __future__ import annotations

import asyncio

import pytest

from fetchbench.config.types import FetchSpec
from fetchbench.fetch.types import FetchFailure
from fetchbench.harness import Harness
from fetchbench.report.types import Speedup


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class ScenarioFetcher:
    """
    Fixed latencies (virtual seconds) per locator; see tests/test_runners.py
    for the way the async side maps real sleeps onto the fake clock.
    """

    def __init__(self, clock: FakeClock, latencies: dict[str, float], failing: set[str] = frozenset()):
        self.clock = clock
        self.latencies = latencies
        self.failing = failing
        self.async_calls: list[str] = []
        self._origin: float | None = None

    def fetch(self, locator: str) -> dict:
        self.clock.now += self.latencies[locator]
        if locator in self.failing:
            raise FetchFailure(locator, "boom")
        return {"locator": locator}

    async def afetch(self, locator: str) -> dict:
        if self._origin is None:
            self._origin = self.clock.now
        self.async_calls.append(locator)
        await asyncio.sleep(self.latencies[locator] * 0.1)
        self.clock.now = self._origin + self.latencies[locator]
        if locator in self.failing:
            raise FetchFailure(locator, "boom")
        return {"locator": locator}

    def close(self) -> None:
        pass

    async def aclose(self) -> None:
        self._origin = None


def _spec() -> FetchSpec:
    return FetchSpec.from_pairs([("a", "a"), ("b", "b"), ("c", "c")])


def test_harness_runs_both_strategies_and_compares() -> None:
    clock = FakeClock()
    fetcher = ScenarioFetcher(clock, {"a": 0.1, "b": 0.2, "c": 0.05})

    comparison = Harness(fetcher, clock).run(_spec())

    assert comparison.sequential.timing == pytest.approx({"a": 0.1, "b": 0.3, "c": 0.35})
    assert comparison.concurrent.timing == pytest.approx({"a": 0.1, "b": 0.2, "c": 0.05})
    assert comparison.sequential.total_elapsed == pytest.approx(0.35)
    assert comparison.concurrent.total_elapsed == pytest.approx(0.2)

    report = comparison.report
    assert isinstance(report.speedup, Speedup)
    assert report.speedup.speedup_ratio == pytest.approx(1.75)
    assert report.speedup.percentage_reduction == pytest.approx(42.857, abs=1e-3)
    assert [name for name, _ in report.completion_order] == ["c", "a", "b"]


def test_sequential_failure_stops_before_concurrent_run() -> None:
    clock = FakeClock()
    fetcher = ScenarioFetcher(clock, {"a": 0.1, "b": 0.2, "c": 0.05}, failing={"a"})

    with pytest.raises(FetchFailure) as e:
        Harness(fetcher, clock).run(_spec())

    assert e.value.name == "a"
    assert fetcher.async_calls == []
