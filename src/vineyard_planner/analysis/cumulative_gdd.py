"""Cumulative GDD series read back from the weather store."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from vineyard_planner.datasources.gdd import compute_cumulative_gdd

if TYPE_CHECKING:
    from vineyard_planner.schemas import CumulativeGDDPoint
    from vineyard_planner.store import WeatherStore


def get_cumulative_gdd(
    store: WeatherStore,
    location_id: str,
    start_date: date | str,
) -> list[CumulativeGDDPoint]:
    """Running GDD total for a location from ``start_date`` forward.

    Args:
        store: Weather store to read from.
        location_id: Site identifier.
        start_date: First day counted (``date`` or ISO string).

    Returns:
        Points ascending by date; empty when nothing is stored.
    """
    if isinstance(start_date, str):
        start_date = date.fromisoformat(start_date)
    return compute_cumulative_gdd(store.read_daily(location_id, start=start_date))
