"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from prefect.testing.utilities import prefect_test_harness


@pytest.fixture(autouse=True, scope="session")
def prefect_backend() -> Iterator[None]:
    """Run flows against a throwaway Prefect database."""
    with prefect_test_harness():
        yield
