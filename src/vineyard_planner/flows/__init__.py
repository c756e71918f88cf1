"""
Prefect flows for the weather pipeline.

Flows:
- ingest: Fetch archive + forecast weather, compute GDD, upsert into the store
- build: Render the cumulative GDD chart and season summary to site/

Usage (local):
    python -m vineyard_planner.flows.ingest
    python -m vineyard_planner.flows.build

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    vineyard-planner ingest --start 2025-03-01
"""
