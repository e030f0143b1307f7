"""
RPC API endpoints.

Procedure-style surface used by the map frontend: ``/rpc/<procedure>``.
Queries are GET with query parameters, mutations are POST with a JSON body.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Request

from guardmap.dependencies import (
    get_location_repository,
    get_personnel_repository,
    get_snapshot_service,
)
from guardmap.repositories.locations import LocationRepository
from guardmap.repositories.personnel import PersonnelRepository
from guardmap.schemas.common import CreatedResponse, OkResponse
from guardmap.schemas.geometry import GeometryPreviewRequest, GeometryPreviewResponse
from guardmap.schemas.location import (
    LocationCreate,
    LocationDetailResponse,
    LocationId,
    LocationResponse,
    LocationUpdateWithId,
)
from guardmap.schemas.personnel import (
    PersonnelCreate,
    PersonnelId,
    PersonnelResponse,
    PersonnelUpdateWithId,
)
from guardmap.schemas.snapshot import SnapshotCreated, SnapshotResponse
from guardmap.services import geometry
from guardmap.services.snapshot_service import SnapshotService

router = APIRouter()


# =============================================================================
# Locations
# =============================================================================

@router.get("/locations.list", response_model=list[LocationResponse])
async def locations_list(
    repo: LocationRepository = Depends(get_location_repository),
):
    return await repo.list()


@router.get("/locations.getById", response_model=Optional[LocationDetailResponse])
async def locations_get_by_id(
    id: int = Query(..., gt=0),
    repo: LocationRepository = Depends(get_location_repository),
):
    """Location with its personnel, or null when the id is unknown."""
    return await repo.get_by_id(id)


@router.post("/locations.create", response_model=CreatedResponse)
async def locations_create(
    body: LocationCreate,
    repo: LocationRepository = Depends(get_location_repository),
):
    location = await repo.create(body)
    return CreatedResponse(id=location.id)


@router.post("/locations.update", response_model=OkResponse)
async def locations_update(
    body: LocationUpdateWithId,
    repo: LocationRepository = Depends(get_location_repository),
):
    await repo.update(body.id, body)
    return OkResponse()


@router.post("/locations.delete", response_model=OkResponse)
async def locations_delete(
    body: LocationId,
    repo: LocationRepository = Depends(get_location_repository),
):
    await repo.delete(body.id)
    return OkResponse()


# =============================================================================
# Personnel
# =============================================================================

@router.get("/personnel.listByLocation", response_model=list[PersonnelResponse])
async def personnel_list_by_location(
    location_id: int = Query(..., alias="locationId"),
    repo: PersonnelRepository = Depends(get_personnel_repository),
):
    return await repo.list_by_location(location_id)


@router.get("/personnel.getById", response_model=Optional[PersonnelResponse])
async def personnel_get_by_id(
    id: int = Query(..., gt=0),
    repo: PersonnelRepository = Depends(get_personnel_repository),
):
    return await repo.get_by_id(id)


@router.post("/personnel.create", response_model=CreatedResponse)
async def personnel_create(
    body: PersonnelCreate,
    repo: PersonnelRepository = Depends(get_personnel_repository),
):
    person = await repo.create(body)
    return CreatedResponse(id=person.id)


@router.post("/personnel.update", response_model=OkResponse)
async def personnel_update(
    body: PersonnelUpdateWithId,
    repo: PersonnelRepository = Depends(get_personnel_repository),
):
    await repo.update(body.id, body)
    return OkResponse()


@router.post("/personnel.delete", response_model=OkResponse)
async def personnel_delete(
    body: PersonnelId,
    repo: PersonnelRepository = Depends(get_personnel_repository),
):
    await repo.delete(body.id)
    return OkResponse()


# =============================================================================
# Snapshots
# =============================================================================

@router.post("/snapshots.create", response_model=SnapshotCreated)
async def snapshots_create(
    request: Request,
    payload: Any = Body(...),
    service: SnapshotService = Depends(get_snapshot_service),
):
    """
    Share the current assignments.

    The body is checked by the service so a non-object ``assignments`` is
    reported the same way from every entry point.
    """
    snapshot, url = await service.create(payload, str(request.base_url))
    return SnapshotCreated(token=snapshot.token, url=url)


@router.get("/snapshots.get", response_model=SnapshotResponse)
async def snapshots_get(
    token: str = Query(..., min_length=1),
    service: SnapshotService = Depends(get_snapshot_service),
):
    snapshot = await service.get_by_token(token)
    return SnapshotResponse.from_snapshot(snapshot)


# =============================================================================
# Geometry
# =============================================================================

@router.post("/geometry.preview", response_model=GeometryPreviewResponse)
async def geometry_preview(body: GeometryPreviewRequest):
    """Polygon and on-screen radius for a circle that is still being drawn."""
    return geometry.preview(
        (body.latitude, body.longitude),
        body.radius,
        body.zoom_stops,
    )
