"""
route_locator.py: Find the route nearest to a clicked map point.

A route's distance to the query is the distance to its *closer* endpoint
(pickup or dropoff). The route with the smallest such distance wins; on a
tie the route that appears first in the input wins.

The search sits behind the RouteLocator protocol. LinearScanLocator is a
plain O(n) scan, fine for the few hundred routes a snapshot holds. A grid
or k-d tree implementation can be dropped in later as long as it honours
the same first-encountered tie-break.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from tripviz.models.trips import GeoPoint, Route
from tripviz.services.geo_math import haversine_distance_km

logger = logging.getLogger(__name__)


class RouteLocator(Protocol):
    def find_closest_with_distance(
        self, query: GeoPoint, routes: Sequence[Route]
    ) -> tuple[Optional[Route], Optional[float]]:
        """Nearest route and its endpoint distance in km, or (None, None)."""
        ...

    def find_closest(self, query: GeoPoint, routes: Sequence[Route]) -> Optional[Route]:
        ...


def endpoint_distance_km(query: GeoPoint, route: Route) -> float:
    """Distance from `query` to the nearer of the route's two endpoints."""
    return min(
        haversine_distance_km(query, route.pickup),
        haversine_distance_km(query, route.dropoff),
    )


class LinearScanLocator:
    """Checks every route; first-encountered wins ties."""

    def find_closest_with_distance(
        self, query: GeoPoint, routes: Sequence[Route]
    ) -> tuple[Optional[Route], Optional[float]]:
        closest: Optional[Route] = None
        closest_km = float("inf")

        for route in routes:
            km = endpoint_distance_km(query, route)
            # strict < keeps the earlier route on equal distance
            if km < closest_km:
                closest, closest_km = route, km

        if closest is None:
            return None, None

        logger.debug(
            "Closest route to (%.4f, %.4f): index=%d at %.3f km",
            query.lat, query.lng, closest.index, closest_km,
        )
        return closest, closest_km

    def find_closest(self, query: GeoPoint, routes: Sequence[Route]) -> Optional[Route]:
        route, _ = self.find_closest_with_distance(query, routes)
        return route


default_locator: RouteLocator = LinearScanLocator()


def find_closest(
    query: GeoPoint,
    routes: Sequence[Route],
    locator: RouteLocator = default_locator,
) -> Optional[Route]:
    """Nearest route to `query`, or None when `routes` is empty."""
    return locator.find_closest(query, routes)
