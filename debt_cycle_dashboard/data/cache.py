"""SQLite cache for FRED observations."""

import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Iterable

import pandas as pd

from debt_cycle_dashboard.models.series import (
    FreshnessRecord,
    Observation,
    SeriesMetadata,
    from_series,
    sort_observations,
)


class DataCache:
    """SQLite-based cache for FRED data."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        """Get database connection with row factory."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS observations (
                    series_id TEXT NOT NULL,
                    date TEXT NOT NULL,
                    value REAL NOT NULL,
                    PRIMARY KEY (series_id, date)
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS series_metadata (
                    series_id TEXT PRIMARY KEY,
                    name TEXT,
                    description TEXT,
                    unit TEXT,
                    frequency TEXT,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS fetch_log (
                    series_id TEXT PRIMARY KEY,
                    last_fetched TEXT NOT NULL
                )
            """)

    def get(
        self, series_id: str, start_date: date | None = None, end_date: date | None = None
    ) -> list[Observation] | None:
        """
        Retrieve cached observations for a series.

        Returns:
            Observations ascending by date, or None if nothing is cached
        """
        query = "SELECT date, value FROM observations WHERE series_id = ?"
        params: list = [series_id]

        if start_date:
            query += " AND date >= ?"
            params.append(start_date.isoformat())
        if end_date:
            query += " AND date <= ?"
            params.append(end_date.isoformat())

        query += " ORDER BY date"

        with self._get_connection() as conn:
            df = pd.read_sql_query(query, conn, params=params)

        if df.empty:
            return None

        df["date"] = pd.to_datetime(df["date"])
        return from_series(df.set_index("date")["value"])

    def put(
        self,
        series_id: str,
        observations: Iterable[Observation],
        metadata: SeriesMetadata,
        fetched_at: datetime | None = None,
    ) -> int:
        """
        Replace everything stored for a series in one transaction.

        Prior observations are deleted before the new ones are inserted, then
        the metadata and fetch timestamp are upserted. Either all of it lands
        or none of it does.

        Returns:
            Number of observations stored
        """
        fetched_at = fetched_at or datetime.now()
        rows = [
            (series_id, obs.date.isoformat(), float(obs.value))
            for obs in sort_observations(observations)
        ]

        with self._get_connection() as conn:
            conn.execute("DELETE FROM observations WHERE series_id = ?", (series_id,))
            conn.executemany(
                "INSERT INTO observations (series_id, date, value) VALUES (?, ?, ?)",
                rows,
            )
            conn.execute(
                """
                INSERT OR REPLACE INTO series_metadata
                (series_id, name, description, unit, frequency, updated_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    series_id,
                    metadata.name,
                    metadata.description,
                    metadata.unit,
                    metadata.frequency,
                    fetched_at.isoformat(),
                ),
            )
            conn.execute(
                "INSERT OR REPLACE INTO fetch_log (series_id, last_fetched) VALUES (?, ?)",
                (series_id, fetched_at.isoformat()),
            )
        return len(rows)

    def count(self, series_id: str) -> int:
        """Number of observations stored for a series."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT COUNT(*) AS n FROM observations WHERE series_id = ?",
                (series_id,),
            ).fetchone()
        return int(row["n"])

    def get_metadata(self, series_id: str) -> SeriesMetadata | None:
        with self._get_connection() as conn:
            row = conn.execute(
                """
                SELECT name, description, unit, frequency
                FROM series_metadata WHERE series_id = ?
                """,
                (series_id,),
            ).fetchone()
        if row is None:
            return None
        return SeriesMetadata(
            series_id=series_id,
            name=row["name"],
            description=row["description"],
            unit=row["unit"],
            frequency=row["frequency"],
        )

    def get_last_fetched(self, series_id: str) -> datetime | None:
        """When the series was last stored, or None if never fetched."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT last_fetched FROM fetch_log WHERE series_id = ?",
                (series_id,),
            ).fetchone()
        if row is None:
            return None
        return datetime.fromisoformat(row["last_fetched"])

    def get_freshness(self, series_id: str) -> FreshnessRecord | None:
        last_fetched = self.get_last_fetched(series_id)
        if last_fetched is None:
            return None
        return FreshnessRecord(series_id=series_id, last_fetched_at=last_fetched)

    def get_cache_status(self) -> dict[str, dict]:
        """Get status of cached data for each series."""
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT
                    o.series_id,
                    COUNT(*) as observation_count,
                    MIN(o.date) as first_date,
                    MAX(o.date) as last_date,
                    m.name,
                    f.last_fetched
                FROM observations o
                LEFT JOIN series_metadata m ON o.series_id = m.series_id
                LEFT JOIN fetch_log f ON o.series_id = f.series_id
                GROUP BY o.series_id
            """).fetchall()

        return {
            row["series_id"]: {
                "observation_count": row["observation_count"],
                "first_date": row["first_date"],
                "last_date": row["last_date"],
                "name": row["name"],
                "last_fetched": row["last_fetched"],
            }
            for row in rows
        }
