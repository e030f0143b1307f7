"""
GeoJSON export for the map views.

Locations become circle polygons carrying their style; snapshots become the
same circles with the shared assignments attached to each feature.
"""

import math
from typing import Iterable, Optional

from guardmap.models import AssignmentSnapshot, Location
from guardmap.services import style_codec
from guardmap.services.geometry import circle_feature
from guardmap.utils.timezone import local_isoformat


def _center(latitude, longitude) -> Optional[tuple[float, float]]:
    try:
        lat, lng = float(latitude), float(longitude)
    except (TypeError, ValueError):
        return None
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return None
    return lat, lng


def location_feature(location: Location, default_radius: int) -> dict:
    radius = location.radius or default_radius
    return circle_feature(
        (location.lat, location.lng),
        radius,
        {
            "id": location.id,
            "name": location.name,
            "locationType": location.location_type,
            "radius": radius,
            "isActive": location.is_active,
            **style_codec.decode(location.style).model_dump(by_alias=True),
        },
    )


def locations_collection(locations: Iterable[Location], default_radius: int) -> dict:
    return {
        "type": "FeatureCollection",
        "features": [location_feature(loc, default_radius) for loc in locations],
    }


def snapshot_collection(snapshot: AssignmentSnapshot, default_radius: int, timezone: str) -> dict:
    """
    Snapshot as a FeatureCollection for the read-only viewer.

    Only locations captured in the snapshot are drawn; entries whose
    coordinates cannot be read are skipped.
    """
    features = []
    for loc in snapshot.locations or []:
        center = _center(loc.get("latitude"), loc.get("longitude"))
        if center is None:
            continue
        radius = loc.get("radius") or default_radius
        features.append(
            circle_feature(
                center,
                radius,
                {
                    "id": loc.get("id"),
                    "name": loc.get("name"),
                    "locationType": loc.get("locationType", loc.get("location_type")),
                    "radius": radius,
                    "personnel": snapshot.data.get(str(loc.get("id")), []),
                },
            )
        )

    return {
        "type": "FeatureCollection",
        "features": features,
        "properties": {
            "createdAt": snapshot.created_at.isoformat(),
            "createdAtLocal": local_isoformat(snapshot.created_at, timezone),
        },
    }
