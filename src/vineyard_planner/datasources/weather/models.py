"""Weather data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date


@dataclass
class DailyWeather:
    """One day of normalized provider data (historical or forecast)."""

    date: date
    temp_high: float
    temp_low: float
    rainfall: float


@dataclass
class DateRange:
    """Inclusive range of calendar days."""

    start: date
    end: date

    @property
    def days(self) -> int:
        """Number of days covered."""
        return (self.end - self.start).days + 1
