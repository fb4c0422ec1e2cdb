"""
hotspot_ranker.py: Pick the top-K busiest heatmap buckets.

Ranking is always by trip_count (whatever the visualisation mode), highest
first. Python's sort is stable, so buckets with equal counts keep the
order the backend aggregated them in, and therefore keep the same rank
and marker colour from one update to the next.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from tripviz.core.errors import InvalidArgumentError
from tripviz.models.render import RankedHotspot
from tripviz.models.trips import ModeLike, TripAggregatePoint
from tripviz.services.route_styler import NEUTRAL, hotspot_marker, marker_color_for

logger = logging.getLogger(__name__)

DEFAULT_HOTSPOT_LIMIT = 10


def check_limit(limit: int) -> None:
    if limit < 0:
        raise InvalidArgumentError(f"limit must be >= 0, got {limit}")


def top_points(
    points: Sequence[TripAggregatePoint],
    limit: int = DEFAULT_HOTSPOT_LIMIT,
) -> list[TripAggregatePoint]:
    """The `limit` points with the highest trip_count, ties in input order."""
    check_limit(limit)
    return sorted(points, key=lambda p: p.trip_count, reverse=True)[:limit]


def rank_hotspots(
    points: Sequence[TripAggregatePoint],
    limit: int = DEFAULT_HOTSPOT_LIMIT,
    mode: Optional[ModeLike] = None,
) -> list[RankedHotspot]:
    """
    Rank the top `limit` points, 1-based.

    Raises InvalidArgumentError for a negative limit; limit=0 → [].
    Marker colours follow `mode` (see route_styler.marker_color_for), or
    the neutral colour when no mode is given.
    """
    top = top_points(points, limit)
    logger.debug("Ranked %d of %d points (limit=%d)", len(top), len(points), limit)

    hotspots = []
    for rank, point in enumerate(top, start=1):
        color = marker_color_for(mode, point) if mode is not None else NEUTRAL
        hotspots.append(RankedHotspot(
            point=point,
            rank=rank,
            color=color,
            marker=hotspot_marker(color),
        ))
    return hotspots
