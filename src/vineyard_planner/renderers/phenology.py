"""Growth stage card: current phase, next phase and days in phase."""

from __future__ import annotations

from typing import TYPE_CHECKING

from vineyard_planner.reference.phenology import DEFAULT_STAGE_COLOR, STAGE_COLORS
from vineyard_planner.renderers import render_template

if TYPE_CHECKING:
    from vineyard_planner.analysis import PhaseStatus


def build_phase_card_html(status: PhaseStatus | None) -> str:
    """Build the growth stage card.

    Renders an empty-state card when no stage has been recorded yet.
    """
    if status is None:
        return render_template("phase_card.html.j2", status=None)
    return render_template(
        "phase_card.html.j2",
        status=status,
        current_label=status.current.value.capitalize(),
        upcoming_label=status.upcoming.value.capitalize(),
        color=STAGE_COLORS.get(status.current, DEFAULT_STAGE_COLOR),
        started_label=status.started_on.strftime("%b %d, %Y"),
    )
