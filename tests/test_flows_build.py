"""
Tests for the build flow module.
"""

from __future__ import annotations

import json
from datetime import date, timedelta
from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from vineyard_planner.errors import InvalidInputFile
from vineyard_planner.flows import build
from vineyard_planner.schemas import DailyWeatherRecord, PhenologyStage
from vineyard_planner.store import WeatherStore

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def site(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    store = WeatherStore(tmp_path / "weather.sqlite")
    store.upsert_daily(
        [
            DailyWeatherRecord(
                location_id="block-a",
                date=date(2025, 3, 1) + timedelta(days=i),
                temp_high=70,
                temp_low=50,
                rainfall=0.1,
                gdd=10,
            )
            for i in range(40)
        ]
    )
    monkeypatch.setattr(build, "store", store)
    site_dir = tmp_path / "site"
    monkeypatch.setattr(build, "SITE_DIR", site_dir)
    return site_dir


class TestLoadPhenologyEvents:
    """Reading events from a JSON file."""

    def test_missing_path(self) -> None:
        assert build.load_phenology_events(None) == []

    def test_nonexistent_file(self, tmp_path: Path) -> None:
        assert build.load_phenology_events(tmp_path / "nope.json") == []

    def test_parses_events(self, tmp_path: Path) -> None:
        path = tmp_path / "events.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "location_id": "block-a",
                        "event_type": "budbreak",
                        "event_date": "2025-03-20",
                        "notes": " first swelling ",
                    }
                ]
            )
        )

        events = build.load_phenology_events(path)

        assert len(events) == 1
        assert events[0].event_type == PhenologyStage.BUDBREAK
        assert events[0].event_date == date(2025, 3, 20)
        assert events[0].notes == "first swelling"

    def test_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "events.json"
        path.write_text("[{")
        with pytest.raises(InvalidInputFile):
            build.load_phenology_events(path)

    def test_unknown_stage(self, tmp_path: Path) -> None:
        path = tmp_path / "events.json"
        path.write_text(
            json.dumps(
                [{"location_id": "block-a", "event_type": "pruning", "event_date": "2025-03-20"}]
            )
        )
        with pytest.raises(InvalidInputFile, match="events.json"):
            build.load_phenology_events(path)


class TestBuildSite:
    """Full page render from the store."""

    def test_writes_index(self, site: Path) -> None:
        result = build.build_site("block-a", "2025-03-01")

        index = site / "index.html"
        assert result["output"] == str(index)
        assert result["days"] == 40
        assert result["events"] == 0
        html = index.read_text()
        assert "<svg" in html
        assert "400" in html  # 40 days x 10 GDD
        assert "Season Summary" in html
        assert "block-a" in html

    def test_with_events(self, site: Path, tmp_path: Path) -> None:
        path = tmp_path / "events.json"
        path.write_text(
            json.dumps(
                [
                    {"location_id": "block-a", "event_type": "budbreak", "event_date": "2025-03-10"},
                    {"location_id": "block-b", "event_type": "flowering", "event_date": "2025-03-12"},
                ]
            )
        )

        result = build.build_site("block-a", "2025-03-01", str(path))

        html = (site / "index.html").read_text()
        assert result["events"] == 2
        assert "Budbreak (100 GDD)" in html
        assert "Flowering (" not in html  # block-b marker filtered out

    @patch("vineyard_planner.flows.build.local_today")
    def test_phase_card(self, mock_today: Mock, site: Path, tmp_path: Path) -> None:
        mock_today.return_value = date(2025, 3, 25)
        path = tmp_path / "events.json"
        path.write_text(
            json.dumps(
                [
                    {"location_id": "block-a", "event_type": "budbreak", "event_date": "2025-03-10"},
                    {"location_id": "block-a", "event_type": "flowering", "event_date": "2025-05-01"},
                    {"location_id": "block-b", "event_type": "veraison", "event_date": "2025-03-20"},
                ]
            )
        )

        build.build_site("block-a", "2025-03-01", str(path))

        html = (site / "index.html").read_text()
        assert "Growth Stage" in html
        assert "Mar 10, 2025 (15 days)" in html
        assert "<dt>Next stage</dt><dd>Flowering</dd>" in html
        assert "Veraison" not in html

    def test_phase_card_without_events(self, site: Path) -> None:
        build.build_site("block-a", "2025-03-01")

        html = (site / "index.html").read_text()
        assert "No growth stages recorded yet" in html

    def test_empty_store(self, site: Path) -> None:
        result = build.build_site("unknown-block", "2025-03-01")

        html = (site / "index.html").read_text()
        assert result["days"] == 0
        assert "No weather data stored yet" in html
