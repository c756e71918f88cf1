"""Grapevine growth stage order and display colors."""

from __future__ import annotations

from vineyard_planner.schemas import PhenologyStage

# Seasonal order; after harvest the cycle restarts at budbreak.
STAGE_ORDER: tuple[PhenologyStage, ...] = (
    PhenologyStage.BUDBREAK,
    PhenologyStage.FLOWERING,
    PhenologyStage.FRUITSET,
    PhenologyStage.VERAISON,
    PhenologyStage.HARVEST,
)

# Marker colors on the GDD chart
STAGE_COLORS: dict[PhenologyStage, str] = {
    PhenologyStage.BUDBREAK: "#ca8a04",
    PhenologyStage.FLOWERING: "#16a34a",
    PhenologyStage.FRUITSET: "#2563eb",
    PhenologyStage.VERAISON: "#9333ea",
    PhenologyStage.HARVEST: "#d97706",
}
DEFAULT_STAGE_COLOR = "#6b7280"


def next_stage(stage: PhenologyStage) -> PhenologyStage:
    """Stage that follows ``stage`` (wrapping from harvest to budbreak)."""
    idx = STAGE_ORDER.index(stage)
    return STAGE_ORDER[(idx + 1) % len(STAGE_ORDER)]
