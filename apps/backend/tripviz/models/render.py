"""
render.py: Pydantic models for everything the core hands to the renderer.

None of these are cached or patched in place. Every data update or zoom
change produces a brand-new plan, and the map client replaces whatever
it drew last time with the new one.

Colours are CSS hex strings ("ColorToken"); sizes are pixels.
"""

from typing import Optional

from pydantic import BaseModel, Field

from tripviz.models.trips import GeoPoint, Route, TripAggregatePoint

ColorToken = str


# ── Geometry ──────────────────────────────────────────────────────────────────

class Bounds(BaseModel):
    """Axis-aligned lat/lng box used by the client to fit the viewport."""

    south_west: GeoPoint
    north_east: GeoPoint


# ── Styles ────────────────────────────────────────────────────────────────────

class MarkerStyle(BaseModel):
    """Circle-marker options (Leaflet circleMarker naming)."""

    radius:       int
    fill_color:   ColorToken
    color:        ColorToken = "#fff"   # outline
    weight:       int        = 2
    opacity:      float      = 1.0
    fill_opacity: float      = 0.8


class LineStyle(BaseModel):
    """Polyline options for a route segment."""

    color:   ColorToken
    weight:  int
    opacity: float = 0.8


class GradientStop(BaseModel):
    stop:  float = Field(..., ge=0, le=1)
    color: str


# ── Heatmap ───────────────────────────────────────────────────────────────────

class NormalizedPoint(BaseModel):
    """One heatmap sample: location + weight in [0, 1]."""

    location: GeoPoint
    weight:   float = Field(..., ge=0, le=1)


class HeatmapLayerOptions(BaseModel):
    """Heat layer configuration for the current zoom band."""

    radius_px:     int
    blur_px:       int
    max_zoom:      int   = 17
    max_intensity: float = 1.0
    gradient:      list[GradientStop]


class RankedHotspot(BaseModel):
    """A top-K heatmap bucket, ready to be drawn as a marker."""

    point:  TripAggregatePoint
    rank:   int = Field(..., ge=1)   # 1-based
    color:  ColorToken
    marker: MarkerStyle


class LegendSpec(BaseModel):
    """
    Legend range for the active mode.

    min/max come from the raw (unclamped) metric values so the legend
    shows the true data range. All range fields are None for an unknown
    mode.
    """

    mode:      str
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    unit:      Optional[str]   = None   # "trips" | "minutes" | "km"
    min_label: Optional[str]   = None   # e.g. "10 trips"
    max_label: Optional[str]   = None
    gradient:  Optional[tuple[ColorToken, ColorToken]] = None   # (low, high)


class RenderPlan(BaseModel):
    """Complete declarative output of one heatmap update."""

    mode:            str
    heatmap_weights: list[NormalizedPoint]   # same order as the input snapshot
    hotspots:        list[RankedHotspot]
    legend:          LegendSpec
    bounds:          Optional[Bounds] = None
    heatmap_layer:   HeatmapLayerOptions


# ── Level of detail ───────────────────────────────────────────────────────────

class HeatmapLODParams(BaseModel):
    radius_px: int
    blur_px:   int


class LODParams(BaseModel):
    """Everything the map needs to re-style itself after a zoom change."""

    zoom:             int
    heatmap:          HeatmapLODParams
    min_visible_zoom: int
    routes_visible:   bool


# ── Routes ────────────────────────────────────────────────────────────────────

class StyledRoute(BaseModel):
    route:          Route
    rank:           int = Field(..., ge=1)
    line:           LineStyle
    pickup_marker:  MarkerStyle
    dropoff_marker: MarkerStyle
    highlighted:    bool = False


class RoutePlan(BaseModel):
    """Styled popular-routes layer."""

    routes:           list[StyledRoute]
    visible:          bool
    min_visible_zoom: int
    bounds:           Optional[Bounds] = None
