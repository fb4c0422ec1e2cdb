"""
intensity.py: Map a raw aggregate metric to a heatmap weight in [0, 1].

Each visualisation mode reads one metric off a TripAggregatePoint and
divides it by a fixed full-scale value:

    mode        metric                  full scale
    ─────────   ─────────────────────   ──────────
    intensity   trip_count              100 trips
    duration    avg_duration_seconds    1800 s (30 min)
    distance    avg_distance_km         10 km

The quotient is clamped to [0, 1]. An unknown mode is tolerated and
yields UNKNOWN_MODE_WEIGHT (0.5); it is never raised. Callers that want
the event on record log a warning themselves (see render_plan.py).

USAGE
─────
    from tripviz.services.intensity import normalize
    normalize(point, "duration")   # → 0.47 for avg_duration_seconds=845
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from tripviz.models.trips import ModeLike, TripAggregatePoint, VisualizationMode, resolve_mode


@dataclass(frozen=True)
class MetricScale:
    """Which TripAggregatePoint attribute a mode reads, and its full-scale value."""

    attribute: str
    divisor:   float

    def read(self, point: TripAggregatePoint) -> float:
        return float(getattr(point, self.attribute))


# Read-only. A caller that needs different scales passes a complete
# replacement table to normalize().
DEFAULT_SCALES: Mapping[VisualizationMode, MetricScale] = MappingProxyType({
    VisualizationMode.INTENSITY: MetricScale("trip_count",           100.0),
    VisualizationMode.DURATION:  MetricScale("avg_duration_seconds", 1800.0),
    VisualizationMode.DISTANCE:  MetricScale("avg_distance_km",      10.0),
})

UNKNOWN_MODE_WEIGHT = 0.5


def metric_value(
    point: TripAggregatePoint,
    mode: ModeLike,
    scales: Mapping[VisualizationMode, MetricScale] = DEFAULT_SCALES,
) -> Optional[float]:
    """Raw (unscaled, unclamped) metric for `mode`, or None for an unknown mode."""
    resolved = resolve_mode(mode)
    if resolved is None or resolved not in scales:
        return None
    return scales[resolved].read(point)


def normalize(
    point: TripAggregatePoint,
    mode: ModeLike,
    scales: Mapping[VisualizationMode, MetricScale] = DEFAULT_SCALES,
) -> float:
    """
    Heatmap weight for one point.

    Returns min(metric / divisor, 1.0), floored at 0.0. Unknown mode →
    UNKNOWN_MODE_WEIGHT.
    """
    resolved = resolve_mode(mode)
    scale = scales.get(resolved) if resolved is not None else None
    if scale is None:
        return UNKNOWN_MODE_WEIGHT

    if scale.divisor <= 0:
        return 1.0 if scale.read(point) > 0 else 0.0

    return max(0.0, min(scale.read(point) / scale.divisor, 1.0))
