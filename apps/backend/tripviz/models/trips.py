"""
trips.py: Pydantic models for the source data snapshot.

These are the read-only inputs of the visualisation core. They arrive
already aggregated (one record per spatial bucket or per popular route)
and are frozen, so nothing downstream can mutate a snapshot in place.

JSON shape of a heatmap bucket:

  {
    "location": { "lat": 40.7589, "lng": -73.9851 },
    "trip_count": 312,
    "avg_duration_seconds": 845.0,
    "avg_distance_km": 3.2
  }

A route adds pickup / dropoff points plus the ingestion-order `index`
that keeps its colour stable across redraws.
"""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class VisualizationMode(str, Enum):
    """Which aggregate metric drives the heatmap, marker colours and legend."""

    INTENSITY = "intensity"   # trip_count
    DURATION  = "duration"    # avg_duration_seconds
    DISTANCE  = "distance"    # avg_distance_km


# Modes come from the UI as plain strings; anything that isn't a member
# is an "unknown mode" and takes the fallback branch of each dispatch.
ModeLike = Union[VisualizationMode, str]


def resolve_mode(mode: ModeLike) -> Optional[VisualizationMode]:
    """Return the matching VisualizationMode, or None for an unknown mode."""
    if isinstance(mode, VisualizationMode):
        return mode
    try:
        return VisualizationMode(mode)
    except ValueError:
        return None


class GeoPoint(BaseModel):
    """WGS84 lat/lng pair."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(..., ge=-180, le=180, allow_inf_nan=False)


class TripAggregatePoint(BaseModel):
    """Aggregated trip statistics for one spatial bucket."""

    model_config = ConfigDict(frozen=True)

    location:             GeoPoint
    trip_count:           int   = Field(..., ge=0)
    avg_duration_seconds: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    avg_distance_km:      float = Field(default=0.0, ge=0, allow_inf_nan=False)


class Route(BaseModel):
    """A popular pickup → dropoff pair with its aggregated statistics."""

    model_config = ConfigDict(frozen=True)

    pickup:               GeoPoint
    dropoff:              GeoPoint
    trip_count:           int   = Field(..., ge=0)
    avg_duration_seconds: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    avg_distance_km:      float = Field(default=0.0, ge=0, allow_inf_nan=False)
    index:                int   = Field(..., ge=0)   # ingestion order; colour key
