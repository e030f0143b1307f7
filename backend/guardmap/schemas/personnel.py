"""
Pydantic schemas for personnel.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import EmailStr, Field, field_validator, model_validator

from guardmap.models import PersonnelType
from guardmap.schemas.common import CamelModel, blank_to_none, reject_nulls

# Digits, spaces and the usual separators; anything stricter breaks local formats
PHONE_PATTERN = r"^[0-9+()\-. ]+$"


class _PersonnelFields(CamelModel):
    @field_validator("name", check_fields=False)
    @classmethod
    def _name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("name must not be empty")
        return v

    @field_validator("phone", "email", mode="before", check_fields=False)
    @classmethod
    def _blank_optional(cls, v: Any) -> Any:
        return blank_to_none(v)


class PersonnelCreate(_PersonnelFields):
    """Schema for adding a person to a location."""
    location_id: int = Field(..., gt=0)
    name: str = Field(..., max_length=255)
    role: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=64, pattern=PHONE_PATTERN)
    email: Optional[EmailStr] = None
    personnel_type: PersonnelType = PersonnelType.SECURITY
    notes: Optional[str] = None


class PersonnelUpdate(_PersonnelFields):
    """
    Schema for updating a person (all fields optional).

    Sending ``locationId`` moves the person; the new location must exist.
    """
    location_id: Optional[int] = Field(None, gt=0)
    name: Optional[str] = Field(None, max_length=255)
    role: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=64, pattern=PHONE_PATTERN)
    email: Optional[EmailStr] = None
    personnel_type: Optional[PersonnelType] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _required_not_null(self):
        reject_nulls(self, ("location_id", "name", "personnel_type"))
        return self


class PersonnelUpdateWithId(PersonnelUpdate):
    """RPC form of an update: the id travels in the body."""
    id: int = Field(..., gt=0)


class PersonnelId(CamelModel):
    id: int = Field(..., gt=0)


class PersonnelResponse(CamelModel):
    """Personnel record in responses."""
    id: int
    location_id: int
    name: str
    role: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    personnel_type: PersonnelType
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
