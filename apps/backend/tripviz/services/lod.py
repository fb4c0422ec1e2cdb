"""
lod.py: Zoom-driven level-of-detail parameters.

Recomputed from scratch on every zoom change; nothing is remembered
between calls.

    zoom      heatmap radius / blur
    ≥ 15      15 / 10   (street level: tight, crisp blobs)
    12–14     25 / 15   (neighbourhood)
    < 12      35 / 20   (borough / city)

Routes are drawn only from zoom 11 upward.
"""

from tripviz.models.render import HeatmapLODParams, LODParams

# (minimum zoom, radius px, blur px), checked top-down
_HEATMAP_BANDS = [
    (15, 15, 10),
    (12, 25, 15),
]
_FALLBACK_BAND = (35, 20)

ROUTE_MIN_VISIBLE_ZOOM = 11


def heatmap_params_for_zoom(zoom: int) -> HeatmapLODParams:
    for min_zoom, radius, blur in _HEATMAP_BANDS:
        if zoom >= min_zoom:
            return HeatmapLODParams(radius_px=radius, blur_px=blur)
    radius, blur = _FALLBACK_BAND
    return HeatmapLODParams(radius_px=radius, blur_px=blur)


def route_visibility_for_zoom(zoom: int) -> bool:
    return zoom >= ROUTE_MIN_VISIBLE_ZOOM


def lod_for_zoom(zoom: int) -> LODParams:
    """Heatmap and route LOD for one zoom level."""
    return LODParams(
        zoom=zoom,
        heatmap=heatmap_params_for_zoom(zoom),
        min_visible_zoom=ROUTE_MIN_VISIBLE_ZOOM,
        routes_visible=route_visibility_for_zoom(zoom),
    )
