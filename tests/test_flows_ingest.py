"""
Tests for the ingest flow module.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from vineyard_planner.datasources.weather import DailyWeather
from vineyard_planner.errors import IngestionError, UpstreamUnavailable
from vineyard_planner.flows import ingest
from vineyard_planner.store import WeatherStore

if TYPE_CHECKING:
    from pathlib import Path

SCENARIO = [
    DailyWeather(date=date(2025, 3, 1), temp_high=65, temp_low=45, rainfall=0.0),
    DailyWeather(date=date(2025, 3, 2), temp_high=70, temp_low=50, rainfall=0.1),
    DailyWeather(date=date(2025, 3, 3), temp_high=60, temp_low=55, rainfall=0.0),
]


@pytest.fixture
def store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> WeatherStore:
    s = WeatherStore(tmp_path / "weather.sqlite")
    monkeypatch.setattr(ingest, "store", s)
    return s


class TestIngestWeather:
    """End-to-end ingestion with the provider mocked out."""

    @patch("vineyard_planner.flows.ingest.weather.fetch_daily_weather")
    def test_scenario(self, mock_fetch: Mock, store: WeatherStore) -> None:
        """Fresh location: stored GDD and cumulative series match the formula."""
        mock_fetch.return_value = SCENARIO

        points = ingest.ingest_weather("block-a", 38.3, -122.5, "2025-03-01", "2025-03-03")

        assert [p.cumulative_gdd for p in points] == [5, 15, 22.5]
        assert [r.gdd for r in store.read_daily("block-a")] == [5, 10, 7.5]
        mock_fetch.assert_called_once_with(38.3, -122.5, date(2025, 3, 1), date(2025, 3, 3))

    @patch("vineyard_planner.flows.ingest.weather.fetch_daily_weather")
    def test_reingest_overwrites(self, mock_fetch: Mock, store: WeatherStore) -> None:
        """Second ingestion of a day wins and leaves a single row."""
        mock_fetch.return_value = [SCENARIO[0]]
        ingest.ingest_weather("block-a", 38.3, -122.5, "2025-03-01", "2025-03-01")

        mock_fetch.return_value = [
            DailyWeather(date=date(2025, 3, 1), temp_high=80, temp_low=60, rainfall=0.5)
        ]
        points = ingest.ingest_weather("block-a", 38.3, -122.5, "2025-03-01", "2025-03-01")

        rows = store.read_daily("block-a")
        assert len(rows) == 1
        assert rows[0].temp_high == 80
        assert rows[0].gdd == 20
        assert rows[0].rainfall == 0.5
        assert [p.cumulative_gdd for p in points] == [20]

    @patch("vineyard_planner.flows.ingest.weather.fetch_daily_weather")
    def test_duplicate_dates_collapse(self, mock_fetch: Mock, store: WeatherStore) -> None:
        """A day returned by both sources is stored once, last value kept."""
        mock_fetch.return_value = [
            DailyWeather(date=date(2025, 6, 15), temp_high=70, temp_low=50, rainfall=0),
            DailyWeather(date=date(2025, 6, 15), temp_high=90, temp_low=70, rainfall=0),
        ]

        points = ingest.ingest_weather("block-a", 0, 0, "2025-06-15", "2025-06-15")

        assert store.count("block-a") == 1
        assert [p.daily_gdd for p in points] == [30]

    @patch("vineyard_planner.flows.ingest.weather.local_today")
    @patch("vineyard_planner.flows.ingest.weather.fetch_daily_weather")
    def test_end_defaults_to_today(
        self, mock_fetch: Mock, mock_today: Mock, store: WeatherStore
    ) -> None:
        mock_today.return_value = date(2025, 3, 3)
        mock_fetch.return_value = SCENARIO

        ingest.ingest_weather("block-a", 38.3, -122.5, "2025-03-01")

        assert mock_fetch.call_args.args[3] == date(2025, 3, 3)

    @patch("vineyard_planner.flows.ingest.weather.fetch_daily_weather")
    def test_returns_series_from_start_only(self, mock_fetch: Mock, store: WeatherStore) -> None:
        """Earlier stored days are outside the returned series."""
        mock_fetch.return_value = SCENARIO
        ingest.ingest_weather("block-a", 0, 0, "2025-03-01", "2025-03-03")

        mock_fetch.return_value = SCENARIO[2:]
        points = ingest.ingest_weather("block-a", 0, 0, "2025-03-03", "2025-03-03")

        assert [p.cumulative_gdd for p in points] == [7.5]

    @patch("vineyard_planner.flows.ingest.weather.fetch_daily_weather")
    def test_empty_fetch(self, mock_fetch: Mock, store: WeatherStore) -> None:
        mock_fetch.return_value = []

        points = ingest.ingest_weather("block-a", 0, 0, "2025-03-01", "2025-03-03")

        assert points == []


class TestIngestFailures:
    """Failures abort with IngestionError."""

    @patch("vineyard_planner.flows.ingest.weather.fetch_daily_weather")
    def test_upstream_failure(self, mock_fetch: Mock, store: WeatherStore) -> None:
        mock_fetch.side_effect = UpstreamUnavailable(
            "https://archive.test/v1/archive", 502, "502 Server Error: Bad Gateway"
        )

        with pytest.raises(IngestionError) as exc_info:
            ingest.ingest_weather("block-a", 0, 0, "2025-03-01", "2025-03-03")

        assert "Bad Gateway" in str(exc_info.value)
        assert exc_info.value.location_id == "block-a"
        assert isinstance(exc_info.value.__cause__, UpstreamUnavailable)
        assert store.count("block-a") == 0

    @patch("vineyard_planner.flows.ingest.weather.fetch_daily_weather")
    def test_store_failure(
        self, mock_fetch: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        bad = tmp_path / "db_dir"
        bad.mkdir()
        monkeypatch.setattr(ingest, "store", WeatherStore(bad))
        mock_fetch.return_value = SCENARIO

        with pytest.raises(IngestionError):
            ingest.ingest_weather("block-a", 0, 0, "2025-03-01", "2025-03-03")

    @patch("vineyard_planner.flows.ingest.weather.fetch_daily_weather")
    def test_store_directory_blocked(
        self, mock_fetch: Mock, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        blocker = tmp_path / "data"
        blocker.write_text("")
        monkeypatch.setattr(ingest, "store", WeatherStore(blocker / "weather.sqlite"))
        mock_fetch.return_value = SCENARIO

        with pytest.raises(IngestionError, match="Weather store"):
            ingest.ingest_weather("block-a", 0, 0, "2025-03-01", "2025-03-03")

    def test_invalid_date(self, store: WeatherStore) -> None:
        with pytest.raises(ValueError, match="Invalid isoformat"):
            ingest.ingest_weather("block-a", 0, 0, "03/01/2025")
