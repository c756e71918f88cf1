"""SQLite store for daily weather records.

One table, ``daily_weather``, with a unique key on ``(location_id, date)``.
Writes are upserts: storing a day that already exists overwrites its values
(last write wins) and never adds a second row, so repeated or overlapping
ingestions converge.

Each operation opens its own short-lived connection. ``upsert_daily`` commits
day by day; if it fails partway, the days already written stay written.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import closing, contextmanager
from datetime import UTC, date, datetime
from pathlib import Path  # noqa: TC003 - used at runtime, not just annotations
from typing import TYPE_CHECKING

from vineyard_planner.errors import PersistenceFailure
from vineyard_planner.schemas import DailyWeatherRecord

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS daily_weather (
    location_id TEXT NOT NULL,
    date        TEXT NOT NULL,
    temp_high   REAL NOT NULL,
    temp_low    REAL NOT NULL,
    rainfall    REAL NOT NULL DEFAULT 0,
    gdd         REAL NOT NULL,
    created_at  TEXT NOT NULL,
    UNIQUE (location_id, date)
)
"""

UPSERT_SQL = """
INSERT INTO daily_weather (location_id, date, temp_high, temp_low, rainfall, gdd, created_at)
VALUES (?, ?, ?, ?, ?, ?, ?)
ON CONFLICT (location_id, date) DO UPDATE SET
    temp_high = excluded.temp_high,
    temp_low = excluded.temp_low,
    rainfall = excluded.rainfall,
    gdd = excluded.gdd
"""


class WeatherStore:
    """Reads and upserts ``DailyWeatherRecord`` rows in a SQLite file."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            with closing(sqlite3.connect(self.db_path)) as conn:
                conn.execute(SCHEMA)
                yield conn
        except (sqlite3.Error, OSError) as e:
            msg = f"Weather store {self.db_path}: {e}"
            raise PersistenceFailure(msg) from e

    def upsert_daily(self, records: Iterable[DailyWeatherRecord]) -> int:
        """Insert or overwrite records keyed by ``(location_id, date)``.

        Returns:
            Number of records written.

        Raises:
            PersistenceFailure: If a write fails. Earlier days stay committed.
        """
        written = 0
        created_at = datetime.now(UTC).isoformat()
        with self._connect() as conn:
            for record in records:
                with conn:
                    conn.execute(
                        UPSERT_SQL,
                        (
                            record.location_id,
                            record.date.isoformat(),
                            record.temp_high,
                            record.temp_low,
                            record.rainfall,
                            record.gdd,
                            created_at,
                        ),
                    )
                written += 1
        logger.info("Upserted %d weather records into %s", written, self.db_path)
        return written

    def read_daily(
        self,
        location_id: str,
        start: date | None = None,
        end: date | None = None,
    ) -> list[DailyWeatherRecord]:
        """Records for a location, ascending by date, optionally bounded.

        Returns an empty list when nothing is stored.
        """
        sql = (
            "SELECT location_id, date, temp_high, temp_low, rainfall, gdd "
            "FROM daily_weather WHERE location_id = ?"
        )
        params: list[str] = [location_id]
        if start is not None:
            sql += " AND date >= ?"
            params.append(start.isoformat())
        if end is not None:
            sql += " AND date <= ?"
            params.append(end.isoformat())
        sql += " ORDER BY date ASC"

        with self._connect() as conn:
            rows = conn.execute(sql, params).fetchall()

        return [
            DailyWeatherRecord(
                location_id=row[0],
                date=date.fromisoformat(row[1]),
                temp_high=row[2],
                temp_low=row[3],
                rainfall=row[4],
                gdd=row[5],
            )
            for row in rows
        ]

    def count(self, location_id: str) -> int:
        """Number of stored days for a location."""
        with self._connect() as conn:
            (n,) = conn.execute(
                "SELECT COUNT(*) FROM daily_weather WHERE location_id = ?", (location_id,)
            ).fetchone()
        return int(n)
