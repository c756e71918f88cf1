"""Exception types raised by the weather ingestion pipeline.

Empty upstream payloads and missing per-day fields are recovered with
documented defaults and never reach these types.
"""

from __future__ import annotations


class VineyardPlannerError(Exception):
    """Base class for errors raised by vineyard_planner."""


class UpstreamUnavailable(VineyardPlannerError):
    """The weather provider failed or answered with a non-success status."""

    def __init__(self, url: str, status: int | None, detail: str) -> None:
        self.url = url
        self.status = status
        self.detail = detail
        status_part = f"HTTP {status}" if status is not None else "network error"
        super().__init__(f"Weather provider unavailable ({status_part}): {detail}")


class PersistenceFailure(VineyardPlannerError):
    """A storage read or write failed."""


class IngestionError(VineyardPlannerError):
    """Weather ingestion aborted; days written before the failure remain stored."""

    def __init__(self, location_id: str, message: str) -> None:
        self.location_id = location_id
        super().__init__(f"Weather ingestion failed for {location_id!r}: {message}")


class InvalidInputFile(VineyardPlannerError):
    """A preferences or phenology events file could not be parsed."""

    def __init__(self, path: object, detail: str) -> None:
        self.path = path
        super().__init__(f"Could not read {path}: {detail}")
