"""
test_render_plan.py: End-to-end render plan and route plan assembly.

Run:
    pytest apps/backend/tests/test_render_plan.py -v
"""

import logging

import pytest
from pydantic import ValidationError

from tests.builders import make_point, make_route
from tripviz.core.errors import EmptyInputError, InvalidArgumentError
from tripviz.models.trips import GeoPoint
from tripviz.services.render_plan import (
    build_legend,
    build_render_plan,
    build_route_plan,
    heatmap_layer_options,
)
from tripviz.services.route_styler import ALERT, HIGHLIGHT, NEUTRAL, WARN


# ── build_render_plan ────────────────────────────────────────────────────────

class TestBuildRenderPlan:

    def test_three_point_intensity_example(self):
        points = [make_point(10), make_point(90), make_point(40)]

        plan = build_render_plan(points, "intensity")

        assert [h.point.trip_count for h in plan.hotspots] == [90, 40, 10]
        assert [h.rank for h in plan.hotspots] == [1, 2, 3]
        assert [w.weight for w in plan.heatmap_weights] == pytest.approx([0.1, 0.9, 0.4])
        assert (plan.legend.min_value, plan.legend.max_value) == (10, 90)
        assert plan.legend.unit == "trips"
        assert plan.mode == "intensity"

    def test_weights_follow_input_order(self):
        points = [
            make_point(5,  lat=40.70),
            make_point(70, lat=40.71),
            make_point(30, lat=40.72),
        ]
        plan = build_render_plan(points, "intensity")
        assert [w.location for w in plan.heatmap_weights] == [p.location for p in points]

    def test_hotspot_colours_for_mode(self):
        plan = build_render_plan([make_point(10), make_point(90)], "intensity")
        assert [h.color for h in plan.hotspots] == [ALERT, WARN]

    def test_legend_uses_unclamped_values(self):
        """Weights clamp at 1.0 but the legend keeps the real maximum."""
        plan = build_render_plan([make_point(250), make_point(20)], "intensity")
        assert plan.heatmap_weights[0].weight == 1.0
        assert plan.legend.max_value == 250
        assert plan.legend.max_label == "250 trips"

    def test_limit_truncates_hotspots_only(self):
        points = [make_point(n) for n in range(20)]
        plan = build_render_plan(points, "intensity", limit=3)
        assert len(plan.hotspots) == 3
        assert len(plan.heatmap_weights) == 20

    def test_limit_zero_still_renders_heatmap(self):
        plan = build_render_plan([make_point(5)], "intensity", limit=0)
        assert plan.hotspots == []
        assert len(plan.heatmap_weights) == 1

    def test_empty_points_signalled(self):
        with pytest.raises(EmptyInputError):
            build_render_plan([], "intensity")

    def test_negative_limit_checked_before_empty_input(self):
        with pytest.raises(InvalidArgumentError):
            build_render_plan([], "intensity", limit=-1)

    def test_negative_limit_rejected(self):
        with pytest.raises(InvalidArgumentError):
            build_render_plan([make_point(3)], "distance", limit=-5)

    def test_bounds_cover_all_points(self):
        points = [make_point(1, lat=40.60, lng=-74.10), make_point(2, lat=40.85, lng=-73.80)]
        plan = build_render_plan(points, "intensity")
        assert plan.bounds.south_west == GeoPoint(lat=40.60, lng=-74.10)
        assert plan.bounds.north_east == GeoPoint(lat=40.85, lng=-73.80)

    def test_heat_layer_defaults_to_initial_zoom_band(self):
        plan = build_render_plan([make_point(1)], "intensity")
        assert (plan.heatmap_layer.radius_px, plan.heatmap_layer.blur_px) == (25, 15)
        assert plan.heatmap_layer.max_zoom == 17
        assert plan.heatmap_layer.max_intensity == 1.0

    def test_heat_layer_follows_zoom(self):
        plan = build_render_plan([make_point(1)], "intensity", zoom=16)
        assert (plan.heatmap_layer.radius_px, plan.heatmap_layer.blur_px) == (15, 10)

    def test_unknown_mode_uses_fallbacks_and_warns(self, caplog):
        points = [make_point(10), make_point(90)]

        with caplog.at_level(logging.WARNING, logger="tripviz.services.render_plan"):
            plan = build_render_plan(points, "speed")

        assert [w.weight for w in plan.heatmap_weights] == [0.5, 0.5]
        assert all(h.color == NEUTRAL for h in plan.hotspots)
        assert [h.point.trip_count for h in plan.hotspots] == [90, 10]
        assert plan.legend.mode == "speed"
        assert plan.legend.min_value is None and plan.legend.unit is None
        assert "Unknown visualization mode" in caplog.text

    def test_does_not_mutate_snapshot(self):
        points = [make_point(3), make_point(8)]
        before = [p.model_copy() for p in points]
        build_render_plan(points, "duration")
        assert points == before

    def test_recomputed_fresh_each_call(self):
        points = [make_point(10), make_point(90)]
        assert build_render_plan(points, "intensity") == build_render_plan(points, "intensity")
        assert build_render_plan(points, "intensity") is not build_render_plan(points, "intensity")


# ── build_legend ─────────────────────────────────────────────────────────────

class TestBuildLegend:

    def test_duration_in_minutes(self):
        legend = build_legend([make_point(1, duration=600), make_point(1, duration=1830)], "duration")
        assert legend.min_value == pytest.approx(10.0)
        assert legend.max_value == pytest.approx(30.5)
        assert legend.unit == "minutes"
        assert legend.min_label == "10 minutes"
        assert legend.max_label == "31 minutes"   # half rounds up
        assert legend.gradient == ("#10b981", "#ef4444")

    def test_distance_in_km(self):
        legend = build_legend([make_point(1, distance=1.2), make_point(1, distance=14.8)], "distance")
        assert (legend.min_value, legend.max_value) == (1.2, 14.8)
        assert legend.unit == "km"
        assert legend.min_label == "1 km"
        assert legend.max_label == "15 km"
        assert legend.gradient == ("#06b6d4", "#ef4444")

    def test_intensity_gradient(self):
        assert build_legend([make_point(3)], "intensity").gradient == ("#3b82f6", "#ef4444")

    def test_single_point_min_equals_max(self):
        legend = build_legend([make_point(42)], "intensity")
        assert legend.min_value == legend.max_value == 42

    @pytest.mark.parametrize("metric", ["duration", "distance"])
    @pytest.mark.parametrize("value", [float("inf"), float("nan")])
    def test_non_finite_metric_never_reaches_legend(self, metric, value):
        with pytest.raises(ValidationError):
            make_point(3, **{metric: value})

    def test_largest_finite_metric_still_labels(self):
        legend = build_legend([make_point(1, duration=1e308), make_point(2)], "duration")
        assert legend.max_label.endswith(" minutes")


# ── heatmap_layer_options ────────────────────────────────────────────────────

class TestHeatmapLayerOptions:

    def test_gradient_stops(self):
        stops = heatmap_layer_options().gradient
        assert [(s.stop, s.color) for s in stops] == [
            (0.4, "blue"), (0.6, "cyan"), (0.7, "lime"), (0.8, "yellow"), (1.0, "red"),
        ]


# ── build_route_plan ─────────────────────────────────────────────────────────

class TestBuildRoutePlan:

    def test_ranks_follow_input_order(self, midtown_routes):
        plan = build_route_plan(midtown_routes)
        assert [s.rank for s in plan.routes] == [1, 2, 3, 4]
        assert [s.route.index for s in plan.routes] == [0, 1, 2, 3]

    def test_weights_from_trip_count(self, midtown_routes):
        plan = build_route_plan(midtown_routes)
        assert [s.line.weight for s in plan.routes] == [6, 4, 3, 2]

    def test_colour_keyed_by_route_index_not_position(self):
        routes = [
            make_route(5, (40.70, -74.00), (40.71, -74.01)),
            make_route(0, (40.72, -74.00), (40.73, -74.01)),
        ]
        plan = build_route_plan(routes)
        assert plan.routes[0].line.color == "#06b6d4"   # palette[5]
        assert plan.routes[1].line.color == "#2563eb"   # palette[0]

    def test_highlight_by_index(self, midtown_routes):
        plan = build_route_plan(midtown_routes, highlight_index=2)
        assert [s.highlighted for s in plan.routes] == [False, False, True, False]
        assert plan.routes[2].line.color == HIGHLIGHT

    def test_visibility_by_zoom(self, midtown_routes):
        assert build_route_plan(midtown_routes, zoom=10).visible is False
        assert build_route_plan(midtown_routes, zoom=11).visible is True
        assert build_route_plan(midtown_routes).visible is True
        assert build_route_plan(midtown_routes).min_visible_zoom == 11

    def test_bounds_cover_both_endpoints(self, midtown_routes):
        plan = build_route_plan(midtown_routes)
        assert plan.bounds.south_west == GeoPoint(lat=40.7061, lng=-74.0087)
        assert plan.bounds.north_east == GeoPoint(lat=40.7794, lng=-73.9632)

    def test_empty_routes_signalled(self):
        with pytest.raises(EmptyInputError):
            build_route_plan([])
