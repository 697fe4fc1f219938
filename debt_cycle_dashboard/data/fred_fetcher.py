"""FRED API data fetcher with TTL-based caching."""

import logging
import threading
from dataclasses import dataclass, field
from datetime import date, datetime

import httpx
import numpy as np
import pandas as pd

from debt_cycle_dashboard.config import Settings, FRED_SERIES_MAP, series_info
from debt_cycle_dashboard.data.cache import DataCache
from debt_cycle_dashboard.data.freshness import FreshnessPolicy
from debt_cycle_dashboard.data.proxy import apply_proxy
from debt_cycle_dashboard.models.metrics import Provenance
from debt_cycle_dashboard.models.series import Observation, SeriesMetadata, from_series


logger = logging.getLogger(__name__)

EARLIEST_DATE = date(1900, 1, 1)
MISSING_VALUES = {".", "N/A", ""}


@dataclass
class FetchResult:
    """Observations for one series and where they came from."""

    series_id: str
    observations: list[Observation] = field(default_factory=list)
    provenance: Provenance = Provenance.LIVE_FETCH

    @property
    def from_cache(self) -> bool:
        return self.provenance is Provenance.CACHE_HIT


def parse_observations(raw: list) -> list[Observation]:
    """
    Normalize FRED's observation list.

    Entries with a missing marker, a non-numeric or non-finite value, or an
    unparseable date are dropped. Duplicate dates keep the last entry.
    """
    rows = [
        {"date": obs.get("date"), "value": obs.get("value")}
        for obs in raw
        if isinstance(obs, dict) and isinstance(obs.get("value"), str)
    ]
    if not rows:
        return []

    df = pd.DataFrame(rows)
    df["value"] = df["value"].str.strip()
    df = df[~df["value"].isin(MISSING_VALUES)].copy()
    df["date"] = pd.to_datetime(df["date"], errors="coerce", format="%Y-%m-%d")
    df["value"] = pd.to_numeric(df["value"], errors="coerce")
    df = df.dropna()
    df = df[np.isfinite(df["value"].astype(float))]
    if df.empty:
        return []

    series = df.set_index("date")["value"].astype(float)
    series = series[~series.index.duplicated(keep="last")]
    return from_series(series)


class FredFetcher:
    """Fetches data from FRED API with local caching."""

    OBSERVATIONS_URL = "https://api.stlouisfed.org/fred/series/observations"

    def __init__(
        self,
        settings: Settings | None = None,
        cache: DataCache | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.cache = cache or DataCache(self.settings.db_path)
        self.freshness = FreshnessPolicy(self.cache, self.settings.cache_ttl)
        self._client = client
        self._client_lock = threading.Lock()

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize HTTP client, once across threads."""
        with self._client_lock:
            if self._client is None:
                self._client = httpx.Client(timeout=self.settings.request_timeout)
            return self._client

    def close(self) -> None:
        """Close HTTP client."""
        with self._client_lock:
            if self._client is not None:
                self._client.close()
                self._client = None

    def __enter__(self) -> "FredFetcher":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _request_url(
        self, series_id: str, from_date: date | None, to_date: date | None
    ) -> str:
        params = {
            "series_id": series_id,
            "api_key": self.settings.fred_api_key,
            "file_type": "json",
            "observation_start": (from_date or EARLIEST_DATE).isoformat(),
            "observation_end": (to_date or date.today()).isoformat(),
        }
        url = str(httpx.URL(self.OBSERVATIONS_URL, params=params))
        return apply_proxy(url, self.settings.proxy_url)

    def _fetch_observations(
        self, series_id: str, from_date: date | None = None, to_date: date | None = None
    ) -> list[Observation]:
        """
        Fetch observations from FRED API.

        Raises:
            httpx.HTTPError: on transport failure or a non-2xx response
            ValueError: if the body is not JSON
        """
        response = self.client.get(
            self._request_url(series_id, from_date, to_date),
            headers={"Accept": "application/json"},
        )
        response.raise_for_status()
        data = response.json()

        raw = data.get("observations") if isinstance(data, dict) else None
        if not isinstance(raw, list):
            logger.warning(f"No observation list in response for {series_id}")
            return []

        return parse_observations(raw)

    def _store(self, series_id: str, observations: list[Observation]) -> None:
        info = series_info(series_id)
        metadata = SeriesMetadata(
            series_id=series_id,
            name=info.name,
            description=info.description,
            unit=info.unit,
            frequency=info.frequency,
        )
        try:
            rows_stored = self.cache.put(series_id, observations, metadata, datetime.now())
            logger.info(f"  Stored {rows_stored} observations for {series_id}")
        except Exception as e:
            logger.error(f"Error caching FRED data for {series_id}: {e}")

    def fetch_result(
        self,
        series_id: str,
        from_date: date | None = None,
        to_date: date | None = None,
        force: bool = False,
    ) -> FetchResult:
        """
        Fetch a single series, serving the cache while it is fresh.

        Args:
            series_id: FRED series ID
            from_date: First observation date (default: earliest available)
            to_date: Last observation date (default: today)
            force: If True, ignore the cache and go to the API

        Returns:
            FetchResult; its observations are empty when nothing could be
            retrieved (no API key, network error, no valid observations)
        """
        if not series_id:
            raise ValueError("series_id is required")

        if not force and self.freshness.is_fresh(series_id):
            cached = self.cache.get(series_id, from_date, to_date) or []
            logger.info(f"Using cached data for {series_id} ({len(cached)} points)")
            return FetchResult(series_id, cached, Provenance.CACHE_HIT)

        if not self.settings.has_fred_api_key():
            logger.warning(f"No API key available for series {series_id}")
            return FetchResult(series_id)

        logger.info(f"Fetching {series_id}...")
        try:
            observations = self._fetch_observations(series_id, from_date, to_date)
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error fetching {series_id}: {e.response.status_code}")
            return FetchResult(series_id)
        except httpx.HTTPError as e:
            logger.error(f"Network error fetching {series_id}: {e}")
            return FetchResult(series_id)
        except ValueError as e:
            logger.error(f"Invalid response for {series_id}: {e}")
            return FetchResult(series_id)

        if not observations:
            logger.warning(f"No valid observations found for series {series_id}")
            return FetchResult(series_id)

        self._store(series_id, observations)
        return FetchResult(series_id, observations, Provenance.LIVE_FETCH)

    def fetch(
        self,
        series_id: str,
        from_date: date | None = None,
        to_date: date | None = None,
        force: bool = False,
    ) -> list[Observation]:
        """Observations for a series; empty means "use a fallback"."""
        return self.fetch_result(series_id, from_date, to_date, force).observations

    def seed(self, keys: list[str] | None = None, force: bool = False) -> dict[str, int]:
        """
        Warm the cache for every mapped series.

        Args:
            keys: Internal keys from FRED_SERIES_MAP (default: all of them)
            force: If True, refetch series that already hold data

        Returns:
            Dict mapping series_id to stored observation count
        """
        keys = keys or list(FRED_SERIES_MAP)
        series_ids = list(dict.fromkeys(FRED_SERIES_MAP.get(k, k) for k in keys))
        results = {}

        for series_id in series_ids:
            existing = self.cache.count(series_id)
            if existing and not force:
                logger.info(f"Series {series_id} already has {existing} data points. Skipping.")
                results[series_id] = existing
                continue

            observations = self.fetch(series_id, force=force)
            if not observations:
                logger.warning(f"No data returned for series {series_id}")
            results[series_id] = len(observations)

        return results

    def get_status(self) -> dict:
        """Get cache status for all mapped series."""
        status = self.cache.get_cache_status()

        for series_id in dict.fromkeys(FRED_SERIES_MAP.values()):
            if series_id not in status:
                status[series_id] = {
                    "name": series_info(series_id).name,
                    "observation_count": 0,
                    "first_date": None,
                    "last_date": None,
                    "last_fetched": None,
                }

        return status


def main() -> None:
    """CLI entry point for seeding the cache."""
    import argparse
    import sys

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Seed the FRED data cache")
    parser.add_argument(
        "--full",
        action="store_true",
        help="Refetch series that are already cached",
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="Show cache status and exit",
    )
    parser.add_argument(
        "--series",
        type=str,
        help="Fetch specific series only (internal key or FRED ID)",
    )
    args = parser.parse_args()

    try:
        with FredFetcher() as fetcher:
            if args.status:
                status = fetcher.get_status()
                print("\nCache Status:")
                print("-" * 70)
                for series_id, info in sorted(status.items()):
                    count = info["observation_count"]
                    last = info["last_date"] or "N/A"
                    name = info.get("name") or series_info(series_id).name
                    print(f"{series_id:20} | {count:6} obs | Last: {last:10} | {name}")
                return

            fetcher.settings.validate()
            keys = [args.series] if args.series else None
            results = fetcher.seed(keys, force=args.full)

            print("\nDone. Cache status:")
            for series_id, count in results.items():
                print(f"  {series_id}: {count} observations")

    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
