from .aggregate import compare, completion_order, compute_speedup, timeline
from .types import Bar, ComparisonReport, IncomparableRunsError, Speedup, UndefinedRatio

__all__ = [
    "compare",
    "completion_order",
    "compute_speedup",
    "timeline",
    "Bar",
    "ComparisonReport",
    "IncomparableRunsError",
    "Speedup",
    "UndefinedRatio",
]
