"""
Command-line interface for the application.

This module provides the main entry point for the CLI. Preferences are
loaded here (and only here) and handed to the commands that need them.
"""

from __future__ import annotations

import argparse
import functools
import http.server
import json
import logging
import sys
from datetime import date

from vineyard_planner import __version__
from vineyard_planner.analysis import get_cumulative_gdd
from vineyard_planner.config import (
    DEFAULT_PREFERENCES_PATH,
    Preferences,
    get_settings,
    load_preferences,
    save_preferences,
)
from vineyard_planner.errors import VineyardPlannerError
from vineyard_planner.flows.build import build_site
from vineyard_planner.flows.ingest import ingest_weather
from vineyard_planner.renderers.gdd import to_chart_series
from vineyard_planner.store import WeatherStore


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        msg = f"invalid date {value!r}, expected YYYY-MM-DD"
        raise argparse.ArgumentTypeError(msg) from None


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="vineyard-planner",
        description="Growing degree day tracking for vineyard blocks",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    # 'ingest' command - fetch weather, compute GDD, store
    ingest_parser = subparsers.add_parser("ingest", help="Fetch weather and store daily GDD")
    ingest_parser.add_argument("--location-id", type=str, default=None, help="Site identifier")
    ingest_parser.add_argument("--lat", type=float, default=None, help="Latitude")
    ingest_parser.add_argument("--lon", type=float, default=None, help="Longitude")
    ingest_parser.add_argument(
        "--start", type=_iso_date, default=None, help="First day (default: season start)"
    )
    ingest_parser.add_argument(
        "--end", type=_iso_date, default=None, help="Last day (default: today)"
    )

    # 'gdd' command - print stored cumulative GDD
    gdd_parser = subparsers.add_parser("gdd", help="Show cumulative GDD from the store")
    gdd_parser.add_argument("--location-id", type=str, default=None, help="Site identifier")
    gdd_parser.add_argument(
        "--start", type=_iso_date, default=None, help="First day (default: season start)"
    )
    gdd_parser.add_argument(
        "--chart", action="store_true", help="Print {date, value} chart points as JSON"
    )

    # 'build' command - render site from the store
    build_parser = subparsers.add_parser("build", help="Render the GDD dashboard")
    build_parser.add_argument("--location-id", type=str, default=None, help="Site identifier")
    build_parser.add_argument(
        "--start", type=_iso_date, default=None, help="First day (default: season start)"
    )
    build_parser.add_argument(
        "--events", type=str, default=None, help="JSON file of phenology events"
    )

    # 'prefs' command - show or update saved preferences
    prefs_parser = subparsers.add_parser("prefs", help="Show or update preferences")
    prefs_parser.add_argument("--season-start", type=_iso_date, default=None)
    prefs_parser.add_argument("--location-id", type=str, default=None)

    # 'serve' command - serve built site locally
    serve_parser = subparsers.add_parser("serve", help="Serve site locally")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )

    return parser


def _location_id(args: argparse.Namespace, prefs: Preferences) -> str:
    return args.location_id or prefs.default_location_id or get_settings().location_id


def _start(args: argparse.Namespace, prefs: Preferences) -> date:
    return args.start or prefs.season_start


def cmd_info(_args: argparse.Namespace, _prefs: Preferences) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Database: {settings.db_path}")
    print(f"Location: {settings.location_id} ({settings.lat}, {settings.lon})")
    print(f"Base temperature: {settings.base_temp} ({settings.temperature_unit})")
    return 0


def cmd_ingest(args: argparse.Namespace, prefs: Preferences) -> int:
    """Handle the 'ingest' command."""
    settings = get_settings()
    location_id = _location_id(args, prefs)
    lat = args.lat if args.lat is not None else settings.lat
    lon = args.lon if args.lon is not None else settings.lon
    start = _start(args, prefs)
    end = args.end.isoformat() if args.end else None

    points = ingest_weather(location_id, lat, lon, start.isoformat(), end)
    total = points[-1].cumulative_gdd if points else 0.0
    print(f"{location_id}: {len(points)} days, {total:.1f} GDD since {start}")
    return 0


def cmd_gdd(args: argparse.Namespace, prefs: Preferences) -> int:
    """Handle the 'gdd' command."""
    settings = get_settings()
    store = WeatherStore(settings.db_path)
    points = get_cumulative_gdd(store, _location_id(args, prefs), _start(args, prefs))

    if args.chart:
        series = to_chart_series(points)
        print(json.dumps([p.model_dump(mode="json") for p in series], indent=2))
        return 0

    if not points:
        print("No weather data stored for this location.")
        return 0
    for p in points:
        print(f"{p.date}  {p.daily_gdd:6.1f}  {p.cumulative_gdd:8.1f}")
    return 0


def cmd_build(args: argparse.Namespace, prefs: Preferences) -> int:
    """Handle the 'build' command."""
    result = build_site(_location_id(args, prefs), _start(args, prefs).isoformat(), args.events)
    print(f"Built {result['output']} ({result['days']} days)")
    return 0


def cmd_prefs(args: argparse.Namespace, prefs: Preferences) -> int:
    """Handle the 'prefs' command: print, and save if anything changed."""
    updates: dict[str, object] = {}
    if args.season_start is not None:
        updates["season_start"] = args.season_start
    if args.location_id is not None:
        updates["default_location_id"] = args.location_id
    if updates:
        prefs = prefs.model_copy(update=updates)
        path = save_preferences(prefs, DEFAULT_PREFERENCES_PATH)
        print(f"Saved preferences to {path}")
    print(prefs.model_dump_json(indent=2))
    return 0


def cmd_serve(args: argparse.Namespace, _prefs: Preferences) -> int:
    """Handle the 'serve' command: serve the built site locally."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.api_port
    site_dir = settings.site_dir

    if not site_dir.exists():
        print("No site directory found. Run 'vineyard-planner build' first.", file=sys.stderr)
        return 1

    handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))

    with http.server.HTTPServer(("", port), handler) as server:
        print(f"Serving site on http://localhost:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.debug or get_settings().debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "info": cmd_info,
        "ingest": cmd_ingest,
        "gdd": cmd_gdd,
        "build": cmd_build,
        "prefs": cmd_prefs,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        prefs = load_preferences(DEFAULT_PREFERENCES_PATH)
        return handler(args, prefs)
    except VineyardPlannerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
