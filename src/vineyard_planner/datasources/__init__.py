"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # API URLs, constants, request handling
    ├── models.py         # Dataclasses for normalized responses
    └── {feature}.py      # Fetch or compute functions (one per concept)

Adding a new datasource
-----------------------
1. Create ``datasources/{name}/`` with files above.
   See ``weather/`` for an example.

2. Write fetch functions on the shared session and surface failures as
   ``UpstreamUnavailable``::

       from vineyard_planner.datasources.weather.client import get_json

       def fetch_something(lat, lon) -> dict[str, Any]:
           return get_json(API_URL, {"latitude": lat, "longitude": lon})

3. Re-export public API in ``__init__.py`` with ``__all__``.

4. Wire into a flow (see ``flows/ingest.py``) as a ``@task``.

5. Add tests in ``tests/test_{name}.py``.
"""
