"""GDD chart and weather metrics HTML renderers.

``to_chart_series`` projects the cumulative series into the ``{date, value}``
points the chart consumes; ``build_gdd_chart_html`` draws them as an inline
SVG with phenology markers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from vineyard_planner.datasources.gdd import DEFAULT_BASE_TEMP_F
from vineyard_planner.reference.phenology import DEFAULT_STAGE_COLOR, STAGE_COLORS
from vineyard_planner.renderers import render_template
from vineyard_planner.schemas import ChartPoint

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from datetime import date

    from vineyard_planner.schemas import CumulativeGDDPoint, PhenologyGDD, WeatherMetrics

# SVG dimensions
SVG_WIDTH = 760
SVG_HEIGHT = 340
MARGIN_LEFT = 55
MARGIN_TOP = 25
MARGIN_RIGHT = 30
MARGIN_BOTTOM = 30


def to_chart_series(points: Iterable[CumulativeGDDPoint]) -> list[ChartPoint]:
    """Project cumulative GDD points onto ``{date, value}`` chart points."""
    return [ChartPoint(date=p.date, value=p.cumulative_gdd) for p in points]


def build_gdd_chart_html(
    points: list[CumulativeGDDPoint],
    phenology: list[PhenologyGDD] | None = None,
    base_temp: float = DEFAULT_BASE_TEMP_F,
) -> str:
    """Build the cumulative GDD SVG chart.

    Args:
        points: Cumulative series ascending by date.
        phenology: Optional events with the GDD reached on their dates,
            drawn as vertical markers.
        base_temp: Base temperature shown in the caption.

    Returns:
        Rendered HTML string with inline SVG chart, or an empty-state card
        when there are no points.
    """
    series = to_chart_series(points)
    if not series:
        return render_template("gdd_chart.html.j2", empty=True, base_temp=int(base_temp))

    plot_right = SVG_WIDTH - MARGIN_RIGHT
    plot_bottom = SVG_HEIGHT - MARGIN_BOTTOM
    plot_width = plot_right - MARGIN_LEFT
    plot_height = plot_bottom - MARGIN_TOP

    first = series[0].date
    span_days = max(1, (series[-1].date - first).days)
    y_max = _round_up_nice(series[-1].value * 1.1)

    def x_for_date(d: date) -> float:
        """Convert a date to SVG x coordinate."""
        return MARGIN_LEFT + (d - first).days / span_days * plot_width

    def y_for_gdd(gdd_val: float) -> float:
        """Convert GDD value to SVG y coordinate (inverted)."""
        return plot_bottom - (gdd_val / y_max) * plot_height

    n_ticks = 5
    y_ticks = []
    for i in range(n_ticks + 1):
        val = y_max * i / n_ticks
        y_ticks.append({"y": round(y_for_gdd(val), 1), "label": f"{val:.0f}"})

    x_labels = _month_labels(series, x_for_date)
    polyline = " ".join(f"{x_for_date(p.date):.1f},{y_for_gdd(p.value):.1f}" for p in series)
    markers = _build_phenology_markers(phenology, series[0].date, series[-1].date, x_for_date)

    return render_template(
        "gdd_chart.html.j2",
        empty=False,
        base_temp=int(base_temp),
        svg_width=SVG_WIDTH,
        svg_height=SVG_HEIGHT,
        margin_left=MARGIN_LEFT,
        margin_top=MARGIN_TOP,
        plot_right=plot_right,
        plot_bottom=plot_bottom,
        y_ticks=y_ticks,
        x_labels=x_labels,
        polyline=polyline,
        markers=markers,
        start_label=first.strftime("%b %d, %Y"),
        total_gdd=f"{series[-1].value:.0f}",
    )


def build_weather_metrics_html(
    metrics: WeatherMetrics, temp_unit: str = "F", rain_unit: str = "in"
) -> str:
    """Build the season summary card (total GDD, rainfall, average temps)."""
    return render_template(
        "weather_metrics.html.j2", metrics=metrics, temp_unit=temp_unit, rain_unit=rain_unit
    )


def _month_labels(
    series: list[ChartPoint], x_fn: Callable[[date], float]
) -> list[dict[str, float | str]]:
    """X-axis labels at the first point of each month in the series."""
    labels: list[dict[str, float | str]] = []
    seen: set[tuple[int, int]] = set()
    for p in series:
        key = (p.date.year, p.date.month)
        if key not in seen:
            seen.add(key)
            labels.append({"x": round(x_fn(p.date), 1), "text": p.date.strftime("%b")})
    return labels


def _build_phenology_markers(
    phenology: list[PhenologyGDD] | None,
    start: date,
    end: date,
    x_fn: Callable[[date], float],
) -> list[dict[str, float | str]]:
    """Vertical markers for phenology events inside the charted range."""
    if not phenology:
        return []
    markers: list[dict[str, float | str]] = []
    for item in phenology:
        event_date = item.event.event_date
        if not start <= event_date <= end:
            continue
        gdd_text = f" ({item.cumulative_gdd:.0f} GDD)" if item.cumulative_gdd is not None else ""
        markers.append(
            {
                "x": round(x_fn(event_date), 1),
                "label": f"{item.event.event_type.value.capitalize()}{gdd_text}",
                "color": STAGE_COLORS.get(item.event.event_type, DEFAULT_STAGE_COLOR),
            }
        )
    return markers


def _round_up_nice(value: float) -> float:
    """Round a value up to a 'nice' number for axis scaling."""
    if value <= 0:
        return 100.0
    nice_steps = [100, 200, 500, 1000, 1500, 2000, 2500, 3000, 4000, 5000]
    for step in nice_steps:
        if step >= value:
            return float(step)
    return float(int(value / 1000 + 1) * 1000)
