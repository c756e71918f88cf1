"""
Domain models for vineyard planner.

Pydantic models shared by the store, the analysis layer and the renderers.
These define the canonical schema - the weather adapter output is normalized
into ``DailyWeatherRecord`` before it is stored.
"""

from __future__ import annotations

from datetime import date  # noqa: TC003 - pydantic resolves annotations at runtime
from enum import StrEnum

from pydantic import BaseModel, Field

# =============================================================================
# Weather / GDD
# =============================================================================


class DailyWeatherRecord(BaseModel):
    """One stored day of weather for a site. Unique per (location_id, date)."""

    location_id: str
    date: date
    temp_high: float
    temp_low: float
    rainfall: float = Field(default=0.0, ge=0)
    gdd: float = Field(..., ge=0)


class CumulativeGDDPoint(BaseModel):
    """Running GDD total for one day, derived from stored records."""

    date: date
    daily_gdd: float = Field(..., ge=0)
    cumulative_gdd: float = Field(..., ge=0)


class ChartPoint(BaseModel):
    """Minimal shape consumed by the chart."""

    date: date
    value: float


class WeatherMetrics(BaseModel):
    """Season summary shown next to the GDD chart."""

    total_gdd: int = 0
    total_rainfall: float = 0.0
    avg_high_temp: int = 0
    avg_low_temp: int = 0


# =============================================================================
# Phenology
# =============================================================================


class PhenologyStage(StrEnum):
    """Grapevine growth stages, in seasonal order."""

    BUDBREAK = "budbreak"
    FLOWERING = "flowering"
    FRUITSET = "fruitset"
    VERAISON = "veraison"
    HARVEST = "harvest"
    OTHER = "other"


class PhenologyEvent(BaseModel):
    """A recorded growth-stage observation for a site."""

    model_config = {"str_strip_whitespace": True}

    location_id: str
    event_type: PhenologyStage
    event_date: date
    end_date: date | None = None
    notes: str | None = None


class PhenologyGDD(BaseModel):
    """A phenology event paired with the cumulative GDD reached on its date."""

    event: PhenologyEvent
    cumulative_gdd: float | None = None
