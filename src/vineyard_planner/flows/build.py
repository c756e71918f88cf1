"""
Prefect flow for building the static GDD dashboard from stored weather.

Reads the weather store (never the network), renders the season summary and
the cumulative GDD chart, and writes ``index.html`` into the site directory.

Run locally:
    python -m vineyard_planner.flows.build
"""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo

from prefect import flow, task
from prefect.cache_policies import NONE
from pydantic import ValidationError

from vineyard_planner.analysis import correlate_phenology_with_gdd, current_phase
from vineyard_planner.config import get_settings
from vineyard_planner.datasources.gdd import compute_cumulative_gdd, compute_weather_metrics
from vineyard_planner.datasources.weather import local_today
from vineyard_planner.errors import InvalidInputFile
from vineyard_planner.renderers import render_template
from vineyard_planner.renderers.gdd import build_gdd_chart_html, build_weather_metrics_html
from vineyard_planner.renderers.phenology import build_phase_card_html
from vineyard_planner.schemas import DailyWeatherRecord, PhenologyEvent
from vineyard_planner.store import WeatherStore

store = WeatherStore(get_settings().db_path)
SITE_DIR = get_settings().site_dir


# =============================================================================
# Data loading tasks
# =============================================================================


@task(name="load-weather-records", cache_policy=NONE)
def load_records(location_id: str, start: date) -> list[DailyWeatherRecord]:
    """Load stored daily records for the site."""
    return store.read_daily(location_id, start=start)


@task(name="load-phenology-events", cache_policy=NONE)
def load_phenology_events(events_path: Path | None) -> list[PhenologyEvent]:
    """Load phenology events from a JSON list, if a file was given."""
    if events_path is None or not events_path.exists():
        return []
    try:
        with events_path.open() as f:
            raw: list[dict[str, Any]] = json.load(f)
        return [PhenologyEvent.model_validate(item) for item in raw]
    except (json.JSONDecodeError, ValidationError) as e:
        raise InvalidInputFile(events_path, str(e)) from e


# =============================================================================
# Rendering + output
# =============================================================================


@task(name="render-html", cache_policy=NONE)
def build_html(
    location_id: str,
    records: list[DailyWeatherRecord],
    events: list[PhenologyEvent],
) -> str:
    """Render the full dashboard page."""
    settings = get_settings()
    points = compute_cumulative_gdd(records)
    site_events = [e for e in events if e.location_id == location_id]
    phenology = correlate_phenology_with_gdd(site_events, points)
    phase_html = build_phase_card_html(current_phase(site_events, local_today(settings)))
    temp_unit = "C" if settings.temperature_unit == "celsius" else "F"
    rain_unit = "mm" if settings.precipitation_unit == "mm" else "in"

    metrics_html = build_weather_metrics_html(
        compute_weather_metrics(records), temp_unit=temp_unit, rain_unit=rain_unit
    )
    chart_html = build_gdd_chart_html(points, phenology, base_temp=settings.base_temp)
    updated = datetime.now(ZoneInfo(settings.timezone)).strftime("%B %d, %Y %H:%M")

    return render_template(
        "base.html.j2",
        title="Vineyard GDD Dashboard",
        location_id=location_id,
        updated=updated,
        metrics_html=metrics_html,
        phase_html=phase_html,
        chart_html=chart_html,
    )


@task(name="write-site", cache_policy=NONE)
def write_site(html: str) -> Path:
    """Write index.html into the site directory."""
    SITE_DIR.mkdir(parents=True, exist_ok=True)
    output = SITE_DIR / "index.html"
    output.write_text(html)
    return output


@flow(name="build-site", log_prints=True)
def build_site(
    location_id: str,
    start_date: str,
    events_path: str | None = None,
) -> dict[str, Any]:
    """
    Render the dashboard for a site from stored weather.

    Args:
        location_id: Site identifier.
        start_date: First day of the season (ISO ``YYYY-MM-DD``).
        events_path: Optional JSON file with a list of phenology events.

    Returns:
        Summary with the output path and number of days charted.
    """
    start = date.fromisoformat(start_date)
    records = load_records(location_id, start)
    events = load_phenology_events(Path(events_path) if events_path else None)
    print(f"Rendering {len(records)} days and {len(events)} phenology events...")

    html = build_html(location_id, records, events)
    output = write_site(html)
    print(f"Site written to {output}")

    return {"output": str(output), "days": len(records), "events": len(events)}


if __name__ == "__main__":
    s = get_settings()
    result = build_site(s.location_id, date(date.today().year, 3, 1).isoformat())
    print(f"Build complete: {result}")
