"""
render_plan.py: Turn a data snapshot into a complete render plan.

This is the only module that calls the other services together. It owns
the order of operations for a heatmap update:

  1. validate the hotspot limit (hard failure, nothing computed yet)
  2. reject an empty snapshot with EmptyInputError (caller skips rendering)
  3. normalise every point → heatmap weights, in input order
  4. rank hotspots from the *raw* points (intensity.py never touches them)
  5. colour hotspot markers for the mode (route_styler.py)
  6. legend range from the raw, unclamped metric values
  7. bounds + heat layer options for the client viewport

build_route_plan() does the same for the popular-routes layer.

Nothing here keeps state between calls: each update produces a new plan
that fully replaces the previous one on the map.

USAGE
─────
    from tripviz.services.render_plan import build_render_plan
    plan = build_render_plan(points, "intensity", limit=10)
    plan.heatmap_weights   # [NormalizedPoint, ...] same order as `points`
    plan.hotspots          # [RankedHotspot, ...] rank 1 = busiest
    plan.legend            # LegendSpec(min_value=..., max_value=..., unit="trips")
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from tripviz.core.errors import EmptyInputError
from tripviz.models.render import (
    ColorToken,
    GradientStop,
    HeatmapLayerOptions,
    LegendSpec,
    NormalizedPoint,
    RenderPlan,
    RoutePlan,
)
from tripviz.models.trips import ModeLike, Route, TripAggregatePoint, VisualizationMode, resolve_mode
from tripviz.services.geo_math import bounds_of
from tripviz.services.hotspot_ranker import DEFAULT_HOTSPOT_LIMIT, check_limit, rank_hotspots
from tripviz.services.intensity import metric_value, normalize
from tripviz.services.lod import ROUTE_MIN_VISIBLE_ZOOM, heatmap_params_for_zoom, route_visibility_for_zoom
from tripviz.services.route_styler import style_route

logger = logging.getLogger(__name__)


# ── Legend ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class _LegendScale:
    unit:     str
    per_unit: float                       # raw metric / per_unit → legend value
    gradient: tuple[ColorToken, ColorToken]


_LEGEND_SCALES = {
    VisualizationMode.INTENSITY: _LegendScale("trips",   1.0,  ("#3b82f6", "#ef4444")),
    VisualizationMode.DURATION:  _LegendScale("minutes", 60.0, ("#10b981", "#ef4444")),
    VisualizationMode.DISTANCE:  _LegendScale("km",      1.0,  ("#06b6d4", "#ef4444")),
}

# ── Heat layer ────────────────────────────────────────────────────────────────

_HEAT_GRADIENT = [
    GradientStop(stop=0.4, color="blue"),
    GradientStop(stop=0.6, color="cyan"),
    GradientStop(stop=0.7, color="lime"),
    GradientStop(stop=0.8, color="yellow"),
    GradientStop(stop=1.0, color="red"),
]

# Band used before the client has reported a zoom level (initial zoom 12).
_DEFAULT_LAYER_ZOOM = 12


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def build_legend(points: Sequence[TripAggregatePoint], mode: ModeLike) -> LegendSpec:
    """
    Legend range for `mode` from the raw metric values.

    Durations are shown in minutes. An unknown mode gets a legend with no
    range, unit or gradient.
    """
    resolved = resolve_mode(mode)
    mode_name = resolved.value if resolved is not None else str(mode)
    scale = _LEGEND_SCALES.get(resolved) if resolved is not None else None
    if scale is None or not points:
        return LegendSpec(mode=mode_name)

    values = [metric_value(p, resolved) / scale.per_unit for p in points]
    lo, hi = min(values), max(values)

    return LegendSpec(
        mode=mode_name,
        min_value=lo,
        max_value=hi,
        unit=scale.unit,
        min_label=f"{_round_half_up(lo)} {scale.unit}",
        max_label=f"{_round_half_up(hi)} {scale.unit}",
        gradient=scale.gradient,
    )


def heatmap_layer_options(zoom: Optional[int] = None) -> HeatmapLayerOptions:
    params = heatmap_params_for_zoom(_DEFAULT_LAYER_ZOOM if zoom is None else zoom)
    return HeatmapLayerOptions(
        radius_px=params.radius_px,
        blur_px=params.blur_px,
        gradient=list(_HEAT_GRADIENT),
    )


# ── Public entry points ───────────────────────────────────────────────────────

def build_render_plan(
    points: Sequence[TripAggregatePoint],
    mode: ModeLike,
    limit: int = DEFAULT_HOTSPOT_LIMIT,
    zoom: Optional[int] = None,
) -> RenderPlan:
    """
    Build the heatmap render plan for one data update.

    Raises:
      InvalidArgumentError: limit < 0 (checked before anything else).
      EmptyInputError:      `points` is empty; the caller should suppress
                            rendering rather than draw an empty heatmap.
    """
    check_limit(limit)
    if not points:
        raise EmptyInputError("no trip aggregate points to render")

    resolved = resolve_mode(mode)
    if resolved is None:
        logger.warning("Unknown visualization mode %r; using fallback weights and colours", mode)

    weights = [
        NormalizedPoint(location=p.location, weight=normalize(p, mode))
        for p in points
    ]
    hotspots = rank_hotspots(points, limit, mode=mode)
    legend = build_legend(points, mode)

    logger.debug(
        "Render plan: mode=%s points=%d hotspots=%d", legend.mode, len(points), len(hotspots),
    )

    return RenderPlan(
        mode=legend.mode,
        heatmap_weights=weights,
        hotspots=hotspots,
        legend=legend,
        bounds=bounds_of(p.location for p in points),
        heatmap_layer=heatmap_layer_options(zoom),
    )


def build_route_plan(
    routes: Sequence[Route],
    zoom: Optional[int] = None,
    highlight_index: Optional[int] = None,
) -> RoutePlan:
    """
    Style the popular-routes layer.

    Routes are ranked in the order given (the backend already sorts them by
    popularity). The route whose `index` equals `highlight_index` gets the
    highlighted style. Without a zoom level the layer is reported visible.

    Raises EmptyInputError when there are no routes.
    """
    if not routes:
        raise EmptyInputError("no routes to render")

    styled = [
        style_route(route, rank, highlighted=route.index == highlight_index)
        for rank, route in enumerate(routes, start=1)
    ]

    endpoints = [pt for r in routes for pt in (r.pickup, r.dropoff)]
    return RoutePlan(
        routes=styled,
        visible=True if zoom is None else route_visibility_for_zoom(zoom),
        min_visible_zoom=ROUTE_MIN_VISIBLE_ZOOM,
        bounds=bounds_of(endpoints),
    )

