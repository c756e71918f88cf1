"""Growing Degree Days (GDD) computation.

GDD measures accumulated heat over a growing season - the standard metric
for predicting vine development (budbreak, flowering, veraison, harvest).

Public API:
  - models: DEFAULT_BASE_TEMP_F
  - compute: compute_daily_gdd, build_daily_records, compute_cumulative_gdd,
             compute_weather_metrics
"""

from vineyard_planner.datasources.gdd.compute import (
    build_daily_records,
    compute_cumulative_gdd,
    compute_daily_gdd,
    compute_weather_metrics,
)
from vineyard_planner.datasources.gdd.models import DEFAULT_BASE_TEMP_F

__all__ = [
    "DEFAULT_BASE_TEMP_F",
    "build_daily_records",
    "compute_cumulative_gdd",
    "compute_daily_gdd",
    "compute_weather_metrics",
]
