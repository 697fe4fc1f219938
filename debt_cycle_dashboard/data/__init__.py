"""Data fetching and caching."""

from .fred_fetcher import FredFetcher, FetchResult
from .cache import DataCache
from .freshness import FreshnessPolicy

__all__ = ["FredFetcher", "FetchResult", "DataCache", "FreshnessPolicy"]
