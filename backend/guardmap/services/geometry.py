"""
Geofence geometry helpers.

Turns a location's centre and radius into a circle polygon for map rendering,
and converts ground distances to on-screen pixels for the live draft preview.
Coordinates in GeoJSON order: [longitude, latitude].
"""

import math
from typing import Iterable

# Diriyah district, the area the map is built around
DIRIYAH_CENTER = (24.7423, 46.5733)  # (lat, lng)
DIRIYAH_BOUNDS = ((24.7328, 46.5598), (24.7512, 46.5864))  # (SW, NE)

EARTH_RADIUS_METERS = 6371008.8
CIRCLE_SEGMENTS = 64
MIN_RADIUS_METERS = 1.0

# Web-Mercator ground resolution at zoom 0 on the equator, metres per pixel
METERS_PER_PIXEL_Z0 = 156543.03392

# Zoom levels the client interpolates the preview radius between
DEFAULT_ZOOM_STOPS = (8, 18)


def _clamp_radius(radius_meters: float) -> float:
    try:
        radius = float(radius_meters)
    except (TypeError, ValueError):
        return MIN_RADIUS_METERS
    if not math.isfinite(radius) or radius < MIN_RADIUS_METERS:
        return MIN_RADIUS_METERS
    return radius


def destination_point(lat: float, lng: float, bearing_deg: float, distance_m: float) -> tuple[float, float]:
    """Point reached from (lat, lng) after distance_m along bearing_deg, as (lat, lng)."""
    lat1 = math.radians(lat)
    lng1 = math.radians(lng)
    bearing = math.radians(bearing_deg)
    delta = distance_m / EARTH_RADIUS_METERS

    lat2 = math.asin(
        math.sin(lat1) * math.cos(delta)
        + math.cos(lat1) * math.sin(delta) * math.cos(bearing)
    )
    lng2 = lng1 + math.atan2(
        math.sin(bearing) * math.sin(delta) * math.cos(lat1),
        math.cos(delta) - math.sin(lat1) * math.sin(lat2),
    )
    return math.degrees(lat2), math.degrees(lng2)


def circle_to_polygon(center: tuple[float, float], radius_meters: float) -> list[list[float]]:
    """
    Closed ring approximating a circle of radius_meters around center.

    Always CIRCLE_SEGMENTS + 1 coordinates; the last one repeats the first.
    """
    lat, lng = center
    radius = _clamp_radius(radius_meters)

    ring = []
    for i in range(CIRCLE_SEGMENTS):
        bearing = i * 360.0 / CIRCLE_SEGMENTS
        p_lat, p_lng = destination_point(lat, lng, bearing, radius)
        ring.append([p_lng, p_lat])
    ring.append(list(ring[0]))
    return ring


def meters_per_pixel(zoom: float, reference_latitude: float = DIRIYAH_CENTER[0]) -> float:
    return (METERS_PER_PIXEL_Z0 * math.cos(math.radians(reference_latitude))) / (2 ** zoom)


def meters_to_pixels(
    meters: float,
    zoom: float,
    reference_latitude: float = DIRIYAH_CENTER[0],
) -> float:
    """
    Ground distance as on-screen pixels at the given zoom.

    Approximation valid near reference_latitude.
    """
    return meters / meters_per_pixel(zoom, reference_latitude)


def circle_feature(
    center: tuple[float, float],
    radius_meters: float,
    properties: dict | None = None,
) -> dict:
    """GeoJSON Polygon feature for a geofence circle."""
    return {
        "type": "Feature",
        "geometry": {
            "type": "Polygon",
            "coordinates": [circle_to_polygon(center, radius_meters)],
        },
        "properties": properties or {},
    }


def preview(
    center: tuple[float, float],
    radius_meters: float,
    zoom_stops: Iterable[float] = DEFAULT_ZOOM_STOPS,
) -> dict:
    """
    Everything the client needs to draw a draft circle.

    Returns the polygon feature and the circle radius in pixels at each zoom
    stop, measured at the circle's own latitude.
    """
    radius = _clamp_radius(radius_meters)
    return {
        "feature": circle_feature(center, radius),
        "radius": radius,
        "pixelRadius": [
            {"zoom": zoom, "pixels": meters_to_pixels(radius, zoom, center[0])}
            for zoom in zoom_stops
        ],
    }
