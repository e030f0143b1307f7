"""
Pydantic schemas for locations.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator, model_validator

from guardmap.models import LocationType
from guardmap.schemas.common import CamelModel, normalize_coordinate, reject_nulls
from guardmap.schemas.personnel import PersonnelResponse
from guardmap.services import style_codec
from guardmap.services.style_codec import StyleSchema


# =============================================================================
# Request schemas
# =============================================================================

class _LocationFields(CamelModel):
    @field_validator("name", check_fields=False)
    @classmethod
    def _name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("name must not be empty")
        return v

    @field_validator("latitude", mode="before", check_fields=False)
    @classmethod
    def _latitude(cls, v: Any) -> Any:
        return normalize_coordinate(v, "latitude", 90)

    @field_validator("longitude", mode="before", check_fields=False)
    @classmethod
    def _longitude(cls, v: Any) -> Any:
        return normalize_coordinate(v, "longitude", 180)


class LocationCreate(_LocationFields):
    """Schema for creating a location. Omitted radius gets the configured default."""
    name: str = Field(..., max_length=255)
    description: Optional[str] = None
    latitude: str = Field(..., max_length=50)
    longitude: str = Field(..., max_length=50)
    location_type: LocationType
    radius: Optional[int] = Field(None, gt=0)
    is_active: bool = True
    style: Optional[StyleSchema] = None
    notes: Optional[str] = None


class LocationUpdate(_LocationFields):
    """
    Schema for updating a location (all fields optional).

    Omitted fields are left untouched; nullable fields sent as null are cleared.
    """
    name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    latitude: Optional[str] = Field(None, max_length=50)
    longitude: Optional[str] = Field(None, max_length=50)
    location_type: Optional[LocationType] = None
    radius: Optional[int] = Field(None, gt=0)
    is_active: Optional[bool] = None
    style: Optional[StyleSchema] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _required_not_null(self):
        reject_nulls(self, ("name", "latitude", "longitude", "location_type", "is_active"))
        return self


class LocationUpdateWithId(LocationUpdate):
    """RPC form of an update: the id travels in the body."""
    id: int = Field(..., gt=0)


class LocationId(CamelModel):
    id: int = Field(..., gt=0)


# =============================================================================
# Response schemas
# =============================================================================

class LocationResponse(CamelModel):
    """Location as returned by list and get."""
    id: int
    name: str
    description: Optional[str] = None
    latitude: str
    longitude: str
    location_type: LocationType
    radius: Optional[int] = None
    is_active: bool
    style: StyleSchema
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("style", mode="before")
    @classmethod
    def _decode_style(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return style_codec.decode(v)
        return v


class LocationDetailResponse(LocationResponse):
    """Location with the personnel stationed there."""
    personnel: list[PersonnelResponse] = []
