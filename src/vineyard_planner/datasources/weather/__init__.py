"""Open-Meteo weather data source.

Fetches daily high/low temperature and precipitation (free, no API key).

Public API:
  - daily: fetch_daily_weather (archive + forecast split at today), split_date_range
  - historical: fetch_historical_daily (archive API for past dates)
  - forecast: fetch_forecast_daily (forecast API, today onward)
  - models: DailyWeather, DateRange
"""

from vineyard_planner.datasources.weather.daily import (
    fetch_daily_weather,
    local_today,
    normalize_daily,
    split_date_range,
)
from vineyard_planner.datasources.weather.forecast import fetch_forecast_daily
from vineyard_planner.datasources.weather.historical import fetch_historical_daily
from vineyard_planner.datasources.weather.models import DailyWeather, DateRange

__all__ = [
    "DailyWeather",
    "DateRange",
    "fetch_daily_weather",
    "fetch_forecast_daily",
    "fetch_historical_daily",
    "local_today",
    "normalize_daily",
    "split_date_range",
]
