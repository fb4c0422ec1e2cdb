"""
api.py: Request / response bodies for the /api/v1/visualization routes.

Only the HTTP envelopes live here; the payload types themselves are
defined in trips.py and render.py.
"""

from typing import Optional

from pydantic import BaseModel, Field

from tripviz.models.trips import GeoPoint, Route, TripAggregatePoint


class RenderPlanRequest(BaseModel):
    """Body of POST /api/v1/visualization/render-plan."""

    points: list[TripAggregatePoint]
    # Plain str so unknown modes reach the documented fallback instead of a 422.
    mode:   str           = "intensity"
    # None → settings.default_hotspot_limit. Negative values are rejected by
    # the core (InvalidArgumentError), not by the schema.
    limit:  Optional[int] = None
    zoom:   Optional[int] = Field(default=None, ge=0, le=24)


class RoutePlanRequest(BaseModel):
    """Body of POST /api/v1/visualization/route-plan."""

    routes:          list[Route]
    zoom:            Optional[int] = Field(default=None, ge=0, le=24)
    highlight_index: Optional[int] = None


class ClosestRouteRequest(BaseModel):
    """Body of POST /api/v1/visualization/closest-route (map click)."""

    query:  GeoPoint
    routes: list[Route]


class ClosestRouteResponse(BaseModel):
    route:       Optional[Route] = None    # None when no routes were supplied
    distance_km: Optional[float] = None    # distance to the nearest endpoint


class MapConfigResponse(BaseModel):
    """Map defaults served to the browser client."""

    center:                GeoPoint
    default_zoom:          int
    min_zoom:              int
    max_zoom:              int
    default_hotspot_limit: int
    modes:                 list[str]
