from .http import HttpFetcher
from .types import Fetcher, FetchFailure

__all__ = ["Fetcher", "FetchFailure", "HttpFetcher"]
