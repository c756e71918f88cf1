"""
Prefect flow for ingesting weather and GDD for one site.

Steps run strictly in sequence: fetch (archive + forecast), compute GDD,
upsert into the store, then re-read the cumulative series. Tasks do not
retry; a failure aborts the flow with ``IngestionError`` and leaves any
days already upserted in place.

Run locally:
    python -m vineyard_planner.flows.ingest
"""

from __future__ import annotations

from datetime import date

from prefect import flow, task
from prefect.cache_policies import NONE
from pydantic import ValidationError

from vineyard_planner.analysis import get_cumulative_gdd
from vineyard_planner.config import get_settings
from vineyard_planner.datasources import gdd, weather
from vineyard_planner.datasources.weather import DailyWeather
from vineyard_planner.errors import IngestionError, PersistenceFailure, UpstreamUnavailable
from vineyard_planner.schemas import CumulativeGDDPoint, DailyWeatherRecord
from vineyard_planner.store import WeatherStore

store = WeatherStore(get_settings().db_path)


@task(name="fetch-daily-weather", cache_policy=NONE)
def fetch_weather(lat: float, lon: float, start: date, end: date) -> list[DailyWeather]:
    """Fetch archive + forecast daily weather for the range."""
    return weather.fetch_daily_weather(lat, lon, start, end)


@task(name="compute-gdd")
def compute_gdd(
    location_id: str, days: list[DailyWeather], base_temp: float
) -> list[DailyWeatherRecord]:
    """Recompute GDD for every day, ignoring any upstream value."""
    return gdd.build_daily_records(location_id, days, base_temp)


@task(name="upsert-weather", cache_policy=NONE)
def save_weather(records: list[DailyWeatherRecord]) -> int:
    """Upsert records keyed by (location_id, date)."""
    return store.upsert_daily(records)


@task(name="load-cumulative-gdd", cache_policy=NONE)
def load_cumulative_gdd(location_id: str, start: date) -> list[CumulativeGDDPoint]:
    """Read the running GDD total back from the store."""
    return get_cumulative_gdd(store, location_id, start)


@flow(name="ingest-weather", log_prints=True)
def ingest_weather(
    location_id: str,
    lat: float,
    lon: float,
    start_date: str,
    end_date: str | None = None,
) -> list[CumulativeGDDPoint]:
    """
    Fetch, compute, store and re-read GDD for a site.

    Args:
        location_id: Site identifier; the caller has already checked access.
        lat: Latitude of the site.
        lon: Longitude of the site.
        start_date: First day to ingest (ISO ``YYYY-MM-DD``).
        end_date: Last day to ingest; defaults to today in the configured timezone.

    Returns:
        Cumulative GDD series for the site from ``start_date`` forward.

    Raises:
        ValueError: If a date string is not ISO formatted.
        IngestionError: If the weather provider or the store fails.
    """
    settings = get_settings()
    start = date.fromisoformat(start_date)
    end = date.fromisoformat(end_date) if end_date else weather.local_today(settings)

    try:
        print(f"Fetching weather for {location_id} ({lat}, {lon}) {start}..{end}...")
        days = fetch_weather(lat, lon, start, end)
        records = compute_gdd(location_id, days, settings.base_temp)
        written = save_weather(records)
        print(f"Stored {written} days of weather for {location_id}")
        points = load_cumulative_gdd(location_id, start)
    except (UpstreamUnavailable, PersistenceFailure, ValidationError) as e:
        raise IngestionError(location_id, str(e)) from e

    total = points[-1].cumulative_gdd if points else 0.0
    print(f"Cumulative GDD since {start}: {total:.1f}")
    return points


if __name__ == "__main__":
    s = get_settings()
    result = ingest_weather(s.location_id, s.lat, s.lon, date(date.today().year, 3, 1).isoformat())
    print(f"Flow complete: {len(result)} days")
