"""Historical + forecast daily weather, merged into one date-ordered series.

A requested range is split at "today" (in the configured timezone): days
strictly before today come from the archive API, today onward from the
forecast API. The two sub-ranges never overlap.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo

from vineyard_planner.config import get_settings
from vineyard_planner.datasources.weather.client import (
    DEFAULT_RAINFALL,
    DEFAULT_TEMP_HIGH,
    DEFAULT_TEMP_LOW,
)
from vineyard_planner.datasources.weather.forecast import fetch_forecast_daily
from vineyard_planner.datasources.weather.historical import fetch_historical_daily
from vineyard_planner.datasources.weather.models import DailyWeather, DateRange

if TYPE_CHECKING:
    from vineyard_planner.config import Settings

logger = logging.getLogger(__name__)


def local_today(settings: Settings | None = None) -> date:
    """Current calendar date in the configured timezone."""
    settings = settings or get_settings()
    return datetime.now(ZoneInfo(settings.timezone)).date()


def split_date_range(
    start: date, end: date, today: date
) -> tuple[DateRange | None, DateRange | None]:
    """Split ``[start, end]`` into (historical, forecast) sub-ranges.

    Historical covers ``[start, today)``, forecast covers ``[today, end]``.
    Either side is None when the range does not reach it.
    """
    if start > end:
        return None, None

    historical = None
    if start < today:
        historical = DateRange(start, min(end, today - timedelta(days=1)))

    forecast = None
    if end >= today:
        forecast = DateRange(max(start, today), end)

    return historical, forecast


def _is_missing(values: list[Any], i: int) -> bool:
    return i >= len(values) or values[i] is None


def _value_at(values: list[Any], i: int, default: float) -> float:
    """Return ``values[i]`` as float, or ``default`` when absent or null."""
    return default if _is_missing(values, i) else float(values[i])


def normalize_daily(payload: dict[str, Any]) -> list[DailyWeather]:
    """Convert an Open-Meteo ``daily`` block into DailyWeather rows.

    A payload without ``daily.time`` yields no rows. Missing values fall back
    to 70 high / 50 low / 0 rainfall instead of dropping the day.
    """
    daily = payload.get("daily")
    if not isinstance(daily, dict):
        daily = {}
    dates = daily.get("time") or []
    if not dates:
        logger.warning("Weather payload has no daily data")
        return []

    tmax_values = daily.get("temperature_2m_max") or []
    tmin_values = daily.get("temperature_2m_min") or []
    precip_values = daily.get("precipitation_sum") or []

    rows: list[DailyWeather] = []
    for i, date_str in enumerate(dates):
        temp_high = _value_at(tmax_values, i, DEFAULT_TEMP_HIGH)
        temp_low = _value_at(tmin_values, i, DEFAULT_TEMP_LOW)
        rainfall = _value_at(precip_values, i, DEFAULT_RAINFALL)
        if any(_is_missing(v, i) for v in (tmax_values, tmin_values, precip_values)):
            logger.debug("Filled missing weather fields for %s", date_str)
        if temp_high < temp_low:
            logger.warning(
                "High %.1f below low %.1f on %s; keeping values as reported",
                temp_high,
                temp_low,
                date_str,
            )
        rows.append(
            DailyWeather(
                date=date.fromisoformat(date_str),
                temp_high=temp_high,
                temp_low=temp_low,
                rainfall=rainfall,
            )
        )
    return rows


def fetch_daily_weather(
    lat: float,
    lon: float,
    start: date,
    end: date,
    *,
    today: date | None = None,
    settings: Settings | None = None,
) -> list[DailyWeather]:
    """Fetch daily high/low/rainfall for ``[start, end]`` from both sources.

    Args:
        lat: Latitude.
        lon: Longitude.
        start: First day (inclusive).
        end: Last day (inclusive).
        today: Split point; defaults to today in ``settings.timezone``.
        settings: Host, unit and timezone configuration.

    Returns:
        Rows sorted ascending by date. Duplicate dates are left in place.

    Raises:
        UpstreamUnavailable: If either request fails. No retry is attempted.
    """
    settings = settings or get_settings()
    today = today or local_today(settings)
    historical, forecast = split_date_range(start, end, today)

    rows: list[DailyWeather] = []
    if historical is not None:
        logger.info(
            "Fetching archive weather %s..%s (%d days)",
            historical.start,
            historical.end,
            historical.days,
        )
        payload = fetch_historical_daily(
            lat, lon, historical.start, historical.end, settings=settings
        )
        rows.extend(normalize_daily(payload))

    if forecast is not None:
        logger.info(
            "Fetching forecast weather %s..%s (%d days)",
            forecast.start,
            forecast.end,
            forecast.days,
        )
        payload = fetch_forecast_daily(lat, lon, forecast.start, forecast.end, settings=settings)
        rows.extend(normalize_daily(payload))

    rows.sort(key=lambda r: r.date)
    return rows
