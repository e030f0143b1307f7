"""
Request-scoped dependencies for FastAPI.

Repositories are built per request on top of the session from ``get_db``.
Settings come from the application that is serving the request, so a test can
run an app with its own ``Settings`` next to the process-wide ones.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from guardmap.config import Settings
from guardmap.database import get_db
from guardmap.repositories.locations import LocationRepository
from guardmap.repositories.personnel import PersonnelRepository
from guardmap.services.snapshot_service import SnapshotService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_location_repository(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> LocationRepository:
    return LocationRepository(db, settings)


def get_personnel_repository(
    db: AsyncSession = Depends(get_db),
) -> PersonnelRepository:
    return PersonnelRepository(db)


def get_snapshot_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> SnapshotService:
    return SnapshotService(db, settings)
