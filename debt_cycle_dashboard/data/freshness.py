"""Decide whether cached series data can be served or must be refetched."""

from datetime import datetime, timedelta

from debt_cycle_dashboard.data.cache import DataCache


DEFAULT_TTL = timedelta(hours=24)


class FreshnessPolicy:
    """
    Time-to-live check over the cache's fetch log.

    A series is fresh only when it was fetched within the TTL *and* still has
    observations stored. The fetch timestamp and the observation rows are
    written by different statements, so a timestamp on its own is not proof
    that data exists.
    """

    def __init__(self, cache: DataCache, ttl: timedelta = DEFAULT_TTL) -> None:
        self.cache = cache
        self.ttl = ttl

    def should_fetch(self, series_id: str, now: datetime | None = None) -> bool:
        last_fetched = self.cache.get_last_fetched(series_id)
        if last_fetched is None:
            return True

        now = now or datetime.now()
        if now - last_fetched > self.ttl:
            return True

        return self.cache.count(series_id) == 0

    def is_fresh(self, series_id: str, now: datetime | None = None) -> bool:
        return not self.should_fetch(series_id, now)
