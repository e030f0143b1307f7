"""
Pydantic schemas for assignment snapshots.

Entries are deliberately light: a snapshot is a copy of what the operator saw,
not a reference to live rows.
"""

from datetime import datetime
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field

from guardmap.models import SNAPSHOT_ROLES, LocationType, PersonnelType
from guardmap.schemas.common import CamelModel

SnapshotRole = Literal[SNAPSHOT_ROLES]


class SnapshotPersonnel(CamelModel):
    """One assigned person as shown in a shared view."""
    id: int
    name: str = Field(..., min_length=1)
    role: SnapshotRole
    phone: Optional[str] = None
    email: Optional[str] = None
    personnel_type: Optional[PersonnelType] = None
    notes: Optional[str] = None


class SnapshotLocation(CamelModel):
    """Location summary captured with the snapshot."""
    id: int
    name: str
    latitude: Union[str, float]
    longitude: Union[str, float]
    location_type: LocationType
    radius: Optional[int] = None


class SnapshotCreate(CamelModel):
    """Request body for sharing the current assignments."""
    assignments: dict[int, list[SnapshotPersonnel]]
    locations: Optional[list[SnapshotLocation]] = None


class SnapshotCreated(BaseModel):
    token: str
    url: str


class SnapshotResponse(CamelModel):
    """A stored snapshot, returned exactly as it was shared."""
    assignments: dict[str, Any]
    locations: Optional[list[dict[str, Any]]] = None
    created_at: datetime

    @classmethod
    def from_snapshot(cls, snapshot) -> "SnapshotResponse":
        return cls(
            assignments=snapshot.data,
            locations=snapshot.locations,
            created_at=snapshot.created_at,
        )
