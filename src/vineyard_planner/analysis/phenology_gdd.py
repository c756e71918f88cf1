"""Phenology events cross-referenced with cumulative GDD.

Growers record when each block reaches budbreak, flowering, fruitset,
veraison and harvest. Pairing those dates with the heat accumulated so far
gives the GDD at which each stage arrived this season.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import TYPE_CHECKING

from vineyard_planner.reference.phenology import STAGE_ORDER, next_stage
from vineyard_planner.schemas import PhenologyGDD

if TYPE_CHECKING:
    from datetime import date

    from vineyard_planner.schemas import CumulativeGDDPoint, PhenologyEvent, PhenologyStage


def correlate_phenology_with_gdd(
    events: list[PhenologyEvent],
    points: list[CumulativeGDDPoint],
) -> list[PhenologyGDD]:
    """Look up the cumulative GDD reached on each event's date.

    Uses the latest point on or before the event date, so an event on a day
    with no stored weather still picks up the running total. Events before
    the first point get ``cumulative_gdd=None``.

    Args:
        events: Phenology events in any order.
        points: Cumulative series ascending by date.

    Returns:
        One entry per event, ordered by event date.
    """
    dates = [p.date for p in points]
    results: list[PhenologyGDD] = []
    for event in sorted(events, key=lambda e: e.event_date):
        idx = bisect.bisect_right(dates, event.event_date) - 1
        gdd = points[idx].cumulative_gdd if idx >= 0 else None
        results.append(PhenologyGDD(event=event, cumulative_gdd=gdd))
    return results


@dataclass
class PhaseStatus:
    """Where a block is in the seasonal stage sequence."""

    current: PhenologyStage
    upcoming: PhenologyStage
    started_on: date
    days_in_phase: int


def current_phase(events: list[PhenologyEvent], today: date) -> PhaseStatus | None:
    """Most recent growth stage reached on or before ``today``.

    Events of type ``other`` and events dated after today are ignored.
    Returns None when no stage has been recorded yet.
    """
    reached = [e for e in events if e.event_type in STAGE_ORDER and e.event_date <= today]
    if not reached:
        return None
    latest = max(reached, key=lambda e: e.event_date)
    return PhaseStatus(
        current=latest.event_type,
        upcoming=next_stage(latest.event_type),
        started_on=latest.event_date,
        days_in_phase=(today - latest.event_date).days,
    )
