from .concurrent import ConcurrentRunner
from .sequential import SequentialRunner
from .types import BatchTimeout, Clock, RunResult, Timing

__all__ = [
    "SequentialRunner",
    "ConcurrentRunner",
    "RunResult",
    "Timing",
    "Clock",
    "BatchTimeout",
]
