"""
Pydantic schemas for the draft circle preview.
"""

from typing import Any

from pydantic import Field, field_validator

from guardmap.schemas.common import CamelModel, normalize_coordinate
from guardmap.services.geometry import DEFAULT_ZOOM_STOPS


class GeometryPreviewRequest(CamelModel):
    latitude: float
    longitude: float
    radius: float = Field(..., description="Radius in metres; clamped to at least 1")
    zoom_stops: list[float] = Field(
        default_factory=lambda: list(DEFAULT_ZOOM_STOPS),
        min_length=1,
        max_length=24,
    )

    @field_validator("latitude", mode="before")
    @classmethod
    def _latitude(cls, v: Any) -> Any:
        return normalize_coordinate(v, "latitude", 90)

    @field_validator("longitude", mode="before")
    @classmethod
    def _longitude(cls, v: Any) -> Any:
        return normalize_coordinate(v, "longitude", 180)

    @field_validator("zoom_stops")
    @classmethod
    def _zoom_range(cls, v: list[float]) -> list[float]:
        for zoom in v:
            if not 0 <= zoom <= 24:
                raise ValueError("zoom stops must be between 0 and 24")
        return v


class PixelRadius(CamelModel):
    zoom: float
    pixels: float


class GeometryPreviewResponse(CamelModel):
    feature: dict[str, Any]
    radius: float
    pixel_radius: list[PixelRadius]
