"""Vineyard Planner - growing degree day tracking for vineyard blocks.

Architecture::

    datasources/   External APIs (Open-Meteo archive + forecast) and GDD math
    store.py       SQLite weather store, upsert keyed by (location_id, date)
    analysis/      Cross-datasource logic (cumulative GDD, phenology correlation)
    renderers/     Pure data -> HTML (GDD chart, weather metrics)
    flows/         Prefect orchestration (ingest fetches + stores, build renders site)
    services/      Shared utilities (HTTP session)

Data flow: datasources -> store -> analysis -> renderers -> site/

Extension points - see each package's docstring:
  - New data source:   datasources/__init__.py
  - New UI module:     renderers/__init__.py
"""

__version__ = "0.1.0"
__author__ = "Vineyard Planner developers"

from vineyard_planner.config import Settings
from vineyard_planner.schemas import CumulativeGDDPoint, DailyWeatherRecord

__all__ = ["CumulativeGDDPoint", "DailyWeatherRecord", "Settings", "__version__"]
