# Database models
from guardmap.models.location import Location, LocationType
from guardmap.models.personnel import Personnel, PersonnelType
from guardmap.models.assignment_snapshot import AssignmentSnapshot, SNAPSHOT_ROLES

__all__ = [
    "Location",
    "LocationType",
    "Personnel",
    "PersonnelType",
    "AssignmentSnapshot",
    "SNAPSHOT_ROLES",
]
