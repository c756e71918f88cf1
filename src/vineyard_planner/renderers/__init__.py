"""Pure rendering functions: structured data -> HTML strings.

All renderers follow the same pattern:
  - Input: pydantic models (from analysis/ or the store)
  - Output: str (HTML fragment, not a full page)
  - No side effects, no I/O, no Prefect decorators

Used by flows/build.py which orchestrates the rendering pipeline.

Public API:
  - gdd: to_chart_series, build_gdd_chart_html, build_weather_metrics_html
  - phenology: build_phase_card_html

Adding a renderer (UI module)
-----------------------------
1. Create ``renderers/{name}.py`` with a build function::

       from vineyard_planner.renderers import render_template

       def build_mywidget_html(data: MyModel) -> str:
           return render_template("mywidget.html.j2", rows=[...])

2. Create a Jinja2 template in ``templates/{name}.html.j2``.
   Templates produce HTML fragments; the page shell is ``base.html.j2``.

3. Wire into ``flows/build.py`` and pass the fragment to ``base.html.j2``.

4. Add tests: call your build function with sample data and assert
   the returned HTML contains expected content.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
