"""Open-Meteo API client constants and shared request handling.

API docs:
  - Forecast: https://open-meteo.com/en/docs
  - Archive: https://open-meteo.com/en/docs/historical-weather-api
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import requests

from vineyard_planner.errors import UpstreamUnavailable
from vineyard_planner.services.http import session

if TYPE_CHECKING:
    from vineyard_planner.config import Settings

ARCHIVE_PATH = "/v1/archive"
FORECAST_PATH = "/v1/forecast"

# Daily variables we request from Open-Meteo
DAILY_VARS = [
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
]

# Fill-ins for days the provider returns without a value
DEFAULT_TEMP_HIGH = 70.0
DEFAULT_TEMP_LOW = 50.0
DEFAULT_RAINFALL = 0.0


def daily_params(lat: float, lon: float, settings: Settings) -> dict[str, Any]:
    """Query parameters shared by the archive and forecast endpoints."""
    return {
        "latitude": lat,
        "longitude": lon,
        "daily": ",".join(DAILY_VARS),
        "temperature_unit": settings.temperature_unit,
        "precipitation_unit": settings.precipitation_unit,
        "timezone": "auto",
    }


def get_json(url: str, params: dict[str, Any]) -> dict[str, Any]:
    """GET ``url`` and decode the JSON body.

    Raises:
        UpstreamUnavailable: On network failure, non-2xx status, or a body
            that is not JSON.
    """
    try:
        resp = session.get(url, params=params)
        resp.raise_for_status()
        result: dict[str, Any] = resp.json()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise UpstreamUnavailable(url, status, str(e)) from e
    except requests.RequestException as e:
        raise UpstreamUnavailable(url, None, str(e)) from e
    return result
