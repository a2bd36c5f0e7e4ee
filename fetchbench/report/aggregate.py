from __future__ import annotations

from typing import Sequence

from fetchbench.runner import RunResult

from .types import Bar, ComparisonReport, IncomparableRunsError, Speedup, UndefinedRatio


def compare(sequential: RunResult, concurrent: RunResult) -> ComparisonReport:
    """Compare a sequential and a concurrent run over the same fetches.

    Pure function of its inputs: neither RunResult is modified, and comparing
    the same pair twice yields equal reports.
    """
    _check_comparable(sequential, concurrent)

    order = completion_order(concurrent)

    return ComparisonReport(
        sequential_total=sequential.total_elapsed,
        concurrent_total=concurrent.total_elapsed,
        speedup=compute_speedup(sequential.total_elapsed, concurrent.total_elapsed),
        completion_order=tuple(order),
        sequential_timeline=tuple(timeline(sequential)),
        concurrent_timeline=tuple(timeline(concurrent, order=[name for name, _ in order])),
    )


def completion_order(run: RunResult) -> list[tuple[str, float]]:
    """(name, elapsed) pairs by ascending completion time.

    Ties keep declaration order.
    """
    pairs = [(name, run.timing[name]) for name in run.order]
    return sorted(pairs, key=lambda pair: pair[1])


def compute_speedup(sequential_total: float, concurrent_total: float) -> Speedup | UndefinedRatio:
    if sequential_total <= 0:
        return UndefinedRatio("sequential run took no measurable time")

    if concurrent_total <= 0:
        return UndefinedRatio("concurrent run took no measurable time")

    reduction = (sequential_total - concurrent_total) / sequential_total * 100
    return Speedup(
        percentage_reduction=reduction,
        speedup_ratio=sequential_total / concurrent_total,
    )


def timeline(run: RunResult, order: Sequence[str] | None = None) -> list[Bar]:
    """One bar per fetch, sized as a fraction of the run's total time."""
    names = run.order if order is None else order
    total = run.total_elapsed

    bars = []
    for name in names:
        elapsed = run.timing[name]
        fraction = elapsed / total if total > 0 else 0.0
        bars.append(Bar(name, elapsed, fraction))
    return bars


def _check_comparable(sequential: RunResult, concurrent: RunResult) -> None:
    if sequential.order == concurrent.order:
        return

    seq_names = set(sequential.order)
    conc_names = set(concurrent.order)
    missing = [name for name in sequential.order if name not in conc_names]
    extra = [name for name in concurrent.order if name not in seq_names]
    raise IncomparableRunsError(missing, extra)
