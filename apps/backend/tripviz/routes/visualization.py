"""
visualization.py: HTTP surface of the visualisation core.

Routes:
  GET  /api/v1/visualization/config         map defaults for the client
  POST /api/v1/visualization/render-plan    heatmap + hotspots + legend (rate limited)
  POST /api/v1/visualization/route-plan     styled popular-routes layer
  POST /api/v1/visualization/closest-route  nearest route to a clicked point
  GET  /api/v1/visualization/lod?zoom=N     heatmap radius/blur + route visibility

HOW THE DATA FLOWS
──────────────────
1. The map client fetches aggregated trips from the trips API (not this service).
2. It posts the snapshot here with the active mode and gets a RenderPlan back.
3. On every zoomend it calls /lod; on every map click it calls /closest-route.
4. The client replaces whatever it drew previously with the new plan.
   This service is stateless; every request is computed from scratch.

ERROR MAPPING
─────────────
  InvalidArgumentError → 422 (e.g. negative limit)
  EmptyInputError      → 204 No Content (client suppresses rendering)
  Unknown mode         → 200 with fallback weights/colours, logged as a warning

TESTING
───────
  pytest apps/backend/tests/test_visualization_routes.py -v

  curl -X POST http://localhost:8000/api/v1/visualization/render-plan \\
    -H 'Content-Type: application/json' \\
    -d '{"mode": "intensity", "points": [{"location": {"lat": 40.75, "lng": -73.99}, "trip_count": 42}]}'
  curl "http://localhost:8000/api/v1/visualization/lod?zoom=14"
"""

import logging

from fastapi import APIRouter, HTTPException, Query, Request, Response, status

from tripviz.core.config import settings
from tripviz.core.errors import EmptyInputError, InvalidArgumentError
from tripviz.core.rate_limit import limiter
from tripviz.models.api import (
    ClosestRouteRequest,
    ClosestRouteResponse,
    MapConfigResponse,
    RenderPlanRequest,
    RoutePlanRequest,
)
from tripviz.models.render import LODParams, RenderPlan, RoutePlan
from tripviz.models.trips import GeoPoint, VisualizationMode
from tripviz.services.lod import lod_for_zoom
from tripviz.services.render_plan import build_render_plan, build_route_plan
from tripviz.services.route_locator import default_locator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/visualization", tags=["visualization"])


@router.get("/config", response_model=MapConfigResponse)
async def get_map_config():
    """Map centre, zoom range and defaults the client should start from."""
    return MapConfigResponse(
        center=GeoPoint(lat=settings.map_center_lat, lng=settings.map_center_lng),
        default_zoom=settings.map_default_zoom,
        min_zoom=settings.map_min_zoom,
        max_zoom=settings.map_max_zoom,
        default_hotspot_limit=settings.default_hotspot_limit,
        modes=[m.value for m in VisualizationMode],
    )


@router.post(
    "/render-plan",
    response_model=RenderPlan,
    responses={204: {"description": "Empty snapshot, nothing to render"}},
)
@limiter.limit(settings.render_plan_rate_limit)
async def post_render_plan(request: Request, payload: RenderPlanRequest):
    """
    Build the heatmap render plan for one snapshot.

    Returns 204 when `points` is empty so the client keeps the map blank
    instead of drawing a degenerate heatmap.
    """
    limit = settings.default_hotspot_limit if payload.limit is None else payload.limit
    try:
        return build_render_plan(payload.points, payload.mode, limit=limit, zoom=payload.zoom)
    except InvalidArgumentError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except EmptyInputError:
        logger.info("Empty heatmap snapshot; render suppressed")
        return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/route-plan",
    response_model=RoutePlan,
    responses={204: {"description": "No routes, nothing to render"}},
)
async def post_route_plan(payload: RoutePlanRequest):
    """Style the popular-routes layer, optionally highlighting one route."""
    try:
        return build_route_plan(
            payload.routes, zoom=payload.zoom, highlight_index=payload.highlight_index,
        )
    except EmptyInputError:
        logger.info("Empty routes snapshot; render suppressed")
        return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/closest-route", response_model=ClosestRouteResponse)
async def post_closest_route(payload: ClosestRouteRequest):
    """
    Route whose nearer endpoint is closest to the clicked point.

    Both fields are null when no routes were supplied.
    """
    route, distance_km = default_locator.find_closest_with_distance(payload.query, payload.routes)
    return ClosestRouteResponse(route=route, distance_km=distance_km)


@router.get("/lod", response_model=LODParams)
async def get_lod(zoom: int = Query(..., ge=0, le=24, description="Current map zoom level")):
    """Heatmap radius/blur and route visibility for a zoom level."""
    return lod_for_zoom(zoom)
