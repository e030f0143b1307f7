"""Tests for the geofence geometry helpers."""

from __future__ import annotations

import math

import pytest

from guardmap.services import geometry
from guardmap.services.geometry import (
    CIRCLE_SEGMENTS,
    DIRIYAH_CENTER,
    circle_feature,
    circle_to_polygon,
    meters_to_pixels,
)


def _haversine(lat1, lng1, lat2, lng2) -> float:
    p1, p2 = math.radians(lat1), math.radians(lat2)
    dp = p2 - p1
    dl = math.radians(lng2 - lng1)
    a = math.sin(dp / 2) ** 2 + math.cos(p1) * math.cos(p2) * math.sin(dl / 2) ** 2
    return 2 * geometry.EARTH_RADIUS_METERS * math.asin(math.sqrt(a))


class TestCircleToPolygon:
    def test_ring_is_closed_with_fixed_point_count(self):
        ring = circle_to_polygon(DIRIYAH_CENTER, 100)
        assert len(ring) == CIRCLE_SEGMENTS + 1 == 65
        assert ring[0] == ring[-1]

    def test_points_are_lng_lat_at_radius(self):
        lat, lng = DIRIYAH_CENTER
        ring = circle_to_polygon((lat, lng), 250)
        for p_lng, p_lat in ring:
            assert _haversine(lat, lng, p_lat, p_lng) == pytest.approx(250, rel=1e-6)

    def test_first_point_is_due_north(self):
        lat, lng = DIRIYAH_CENTER
        first = circle_to_polygon((lat, lng), 1000)[0]
        assert first[0] == pytest.approx(lng)
        assert first[1] > lat

    @pytest.mark.parametrize("radius", [0, -5, 0.5, float("nan"), float("inf")])
    def test_degenerate_radius_is_clamped(self, radius):
        lat, lng = DIRIYAH_CENTER
        ring = circle_to_polygon((lat, lng), radius)
        assert len(ring) == 65
        p_lng, p_lat = ring[16]
        assert _haversine(lat, lng, p_lat, p_lng) == pytest.approx(1.0, rel=1e-6)

    def test_feature_wraps_ring(self):
        feature = circle_feature(DIRIYAH_CENTER, 100, {"name": "Gate 1"})
        assert feature["type"] == "Feature"
        assert feature["geometry"]["type"] == "Polygon"
        assert len(feature["geometry"]["coordinates"][0]) == 65
        assert feature["properties"] == {"name": "Gate 1"}


class TestMetersToPixels:
    def test_matches_web_mercator_formula(self):
        lat = DIRIYAH_CENTER[0]
        expected = 100 / ((156543.03392 * math.cos(math.radians(lat))) / 2 ** 18)
        assert meters_to_pixels(100, 18) == pytest.approx(expected)

    def test_doubles_per_zoom_level(self):
        assert meters_to_pixels(100, 15) == pytest.approx(2 * meters_to_pixels(100, 14))

    def test_reference_latitude(self):
        assert meters_to_pixels(100, 10, 0) < meters_to_pixels(100, 10, 60)


class TestPreview:
    def test_default_zoom_stops(self):
        result = geometry.preview(DIRIYAH_CENTER, 100)
        assert result["radius"] == 100
        assert [p["zoom"] for p in result["pixelRadius"]] == [8, 18]
        assert len(result["feature"]["geometry"]["coordinates"][0]) == 65

    def test_radius_clamped(self):
        result = geometry.preview(DIRIYAH_CENTER, 0, zoom_stops=[12])
        assert result["radius"] == 1.0
        assert result["pixelRadius"][0]["pixels"] == pytest.approx(
            meters_to_pixels(1.0, 12, DIRIYAH_CENTER[0])
        )
