"""
route_styler.py: Deterministic colour / stroke encodings for routes and markers.

Every function here depends only on its own arguments. A route's colour
comes from its ingestion `index`, never from its neighbours, so the same
route keeps the same colour across redraws and between the map and the
routes table.
"""

from __future__ import annotations

from tripviz.models.render import ColorToken, LineStyle, MarkerStyle, StyledRoute
from tripviz.models.trips import ModeLike, Route, TripAggregatePoint, VisualizationMode, resolve_mode

# ── Palette ───────────────────────────────────────────────────────────────────

ROUTE_PALETTE: tuple[ColorToken, ...] = (
    "#2563eb",  # blue
    "#ef4444",  # red
    "#10b981",  # emerald
    "#f59e0b",  # amber
    "#8b5cf6",  # violet
    "#06b6d4",  # cyan
    "#84cc16",  # lime
    "#f97316",  # orange
    "#ec4899",  # pink
    "#6366f1",  # indigo
)

ALERT   = "#ef4444"
WARN    = "#f59e0b"
OK      = "#10b981"
INFO    = "#06b6d4"
NEUTRAL = "#2563eb"

HIGHLIGHT = "#f59e0b"
PICKUP    = "#10b981"
DROPOFF   = "#ef4444"

# (exclusive lower bound, weight), checked top-down
_WEIGHT_STEPS = [
    (100, 6),
    (50,  4),
    (20,  3),
]
_MIN_WEIGHT = 2

# mode → (metric attribute, alert threshold, colour below threshold)
_MARKER_THRESHOLDS = {
    VisualizationMode.INTENSITY: ("trip_count",           50,  WARN),
    VisualizationMode.DURATION:  ("avg_duration_seconds", 900, OK),     # 15 min
    VisualizationMode.DISTANCE:  ("avg_distance_km",      5,   INFO),
}

_ROUTE_MARKER_RADIUS     = 6
_HOTSPOT_MARKER_RADIUS   = 8
_HIGHLIGHT_MARKER_RADIUS = 8
_HIGHLIGHT_WEIGHT        = 3
_HIGHLIGHT_LINE_WEIGHT   = 8


# ── Scalar encodings ──────────────────────────────────────────────────────────

def color_for(index: int) -> ColorToken:
    """Palette colour for a route index (cycles every len(ROUTE_PALETTE))."""
    return ROUTE_PALETTE[index % len(ROUTE_PALETTE)]


def weight_for(trip_count: int) -> int:
    """Stroke weight in px; non-decreasing in trip_count."""
    for threshold, weight in _WEIGHT_STEPS:
        if trip_count > threshold:
            return weight
    return _MIN_WEIGHT


def marker_color_for(mode: ModeLike, point: TripAggregatePoint) -> ColorToken:
    """
    Hotspot marker colour: ALERT above the mode's threshold, else the mode's
    calm colour. Unknown mode → NEUTRAL.
    """
    resolved = resolve_mode(mode)
    if resolved is None or resolved not in _MARKER_THRESHOLDS:
        return NEUTRAL

    attribute, threshold, calm = _MARKER_THRESHOLDS[resolved]
    return ALERT if getattr(point, attribute) > threshold else calm


# ── Style bundles ─────────────────────────────────────────────────────────────

def hotspot_marker(color: ColorToken) -> MarkerStyle:
    return MarkerStyle(radius=_HOTSPOT_MARKER_RADIUS, fill_color=color)


def style_route(route: Route, rank: int, highlighted: bool = False) -> StyledRoute:
    """
    Build the line + endpoint marker styles for one route.

    The highlighted variant paints the whole route in HIGHLIGHT with a
    heavier stroke and enlarged endpoints.
    """
    if highlighted:
        line = LineStyle(color=HIGHLIGHT, weight=_HIGHLIGHT_LINE_WEIGHT, opacity=1.0)
        pickup = MarkerStyle(
            radius=_HIGHLIGHT_MARKER_RADIUS, fill_color=HIGHLIGHT, weight=_HIGHLIGHT_WEIGHT,
        )
        dropoff = pickup
    else:
        line = LineStyle(color=color_for(route.index), weight=weight_for(route.trip_count))
        pickup = MarkerStyle(radius=_ROUTE_MARKER_RADIUS, fill_color=PICKUP)
        dropoff = MarkerStyle(radius=_ROUTE_MARKER_RADIUS, fill_color=DROPOFF)

    return StyledRoute(
        route=route,
        rank=rank,
        line=line,
        pickup_marker=pickup,
        dropoff_marker=dropoff,
        highlighted=highlighted,
    )
