"""Pure GDD computation functions (no I/O).

Formula (simple average method, no upper cutoff):

    GDD_daily = max(0, (T_high + T_low) / 2 - base_temp)

``compute_daily_gdd`` is the only place a GDD value is derived. Ingestion,
metrics and any recomputation go through it so stored and displayed values
cannot drift apart.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from vineyard_planner.datasources.gdd.models import DEFAULT_BASE_TEMP_F
from vineyard_planner.schemas import CumulativeGDDPoint, DailyWeatherRecord, WeatherMetrics

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from vineyard_planner.datasources.weather.models import DailyWeather


def compute_daily_gdd(
    temp_high: float,
    temp_low: float,
    base_temp: float = DEFAULT_BASE_TEMP_F,
) -> float:
    """Compute GDD for a single day.

    No ordering check is made on ``temp_high``/``temp_low``; the average is
    symmetric so swapped inputs give the same result.

    Args:
        temp_high: Daily maximum temperature.
        temp_low: Daily minimum temperature.
        base_temp: Base development temperature (default 50 F).

    Returns:
        Growing degree days for the day (>= 0).
    """
    avg = (temp_high + temp_low) / 2
    return max(0.0, avg - base_temp)


def build_daily_records(
    location_id: str,
    days: Iterable[DailyWeather],
    base_temp: float = DEFAULT_BASE_TEMP_F,
) -> list[DailyWeatherRecord]:
    """Attach a freshly computed GDD to each day of provider data."""
    return [
        DailyWeatherRecord(
            location_id=location_id,
            date=day.date,
            temp_high=day.temp_high,
            temp_low=day.temp_low,
            rainfall=day.rainfall,
            gdd=compute_daily_gdd(day.temp_high, day.temp_low, base_temp),
        )
        for day in days
    ]


def compute_cumulative_gdd(records: Iterable[DailyWeatherRecord]) -> list[CumulativeGDDPoint]:
    """Running GDD sum over records already ordered by date.

    Args:
        records: Stored daily records, ascending by date.

    Returns:
        One point per record; ``cumulative_gdd`` starts at the first record's
        GDD and never decreases.
    """
    points: list[CumulativeGDDPoint] = []
    accumulated = 0.0
    for record in records:
        accumulated += record.gdd
        points.append(
            CumulativeGDDPoint(
                date=record.date, daily_gdd=record.gdd, cumulative_gdd=accumulated
            )
        )
    return points


def _round_half_up(value: float, ndigits: int = 0) -> float:
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def compute_weather_metrics(records: Sequence[DailyWeatherRecord]) -> WeatherMetrics:
    """Summarize a run of daily records for the metrics card.

    Totals GDD and rainfall and averages highs/lows. GDD and temperatures are
    rounded to whole numbers, rainfall to hundredths.
    """
    if not records:
        return WeatherMetrics()

    n = len(records)
    return WeatherMetrics(
        total_gdd=int(_round_half_up(sum(r.gdd for r in records))),
        total_rainfall=_round_half_up(sum(r.rainfall for r in records), 2),
        avg_high_temp=int(_round_half_up(sum(r.temp_high for r in records) / n)),
        avg_low_temp=int(_round_half_up(sum(r.temp_low for r in records) / n)),
    )
