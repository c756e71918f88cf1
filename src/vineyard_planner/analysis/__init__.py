"""Cross-datasource analysis: stored weather -> derived series.

Analysis modules read from the store and from caller-supplied records and
produce derived data for renderers. No HTTP, no rendering.

Public API:
  - cumulative_gdd: get_cumulative_gdd
  - phenology_gdd: correlate_phenology_with_gdd, current_phase, PhaseStatus
"""

from vineyard_planner.analysis.cumulative_gdd import get_cumulative_gdd
from vineyard_planner.analysis.phenology_gdd import (
    PhaseStatus,
    correlate_phenology_with_gdd,
    current_phase,
)

__all__ = [
    "PhaseStatus",
    "correlate_phenology_with_gdd",
    "current_phase",
    "get_cumulative_gdd",
]
