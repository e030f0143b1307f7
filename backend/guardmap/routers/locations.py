"""
Location API endpoints.

Resource-style access to geofence locations, plus the GeoJSON layer the map
draws from.
"""

from fastapi import APIRouter, Depends, Response, status

from guardmap.config import Settings
from guardmap.dependencies import (
    get_app_settings,
    get_location_repository,
    get_personnel_repository,
)
from guardmap.repositories.locations import LocationRepository
from guardmap.repositories.personnel import PersonnelRepository
from guardmap.schemas.location import (
    LocationCreate,
    LocationDetailResponse,
    LocationResponse,
    LocationUpdate,
)
from guardmap.schemas.personnel import PersonnelResponse
from guardmap.services.geojson import locations_collection

router = APIRouter()


@router.get("/locations", response_model=list[LocationResponse])
async def list_locations(
    repo: LocationRepository = Depends(get_location_repository),
):
    """
    List all locations.
    """
    return await repo.list()


@router.get("/locations.geojson")
async def locations_geojson(
    repo: LocationRepository = Depends(get_location_repository),
    settings: Settings = Depends(get_app_settings),
):
    """
    All locations as circle polygons, styled, in one FeatureCollection.
    """
    locations = await repo.list()
    return locations_collection(locations, settings.default_radius_meters)


@router.post("/locations", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
async def create_location(
    body: LocationCreate,
    repo: LocationRepository = Depends(get_location_repository),
):
    return await repo.create(body)


@router.get("/locations/{location_id}", response_model=LocationDetailResponse)
async def get_location(
    location_id: int,
    repo: LocationRepository = Depends(get_location_repository),
):
    """
    Get a location with the personnel stationed there.
    """
    return await repo.get_or_raise(location_id)


@router.patch("/locations/{location_id}", response_model=LocationResponse)
async def update_location(
    location_id: int,
    body: LocationUpdate,
    repo: LocationRepository = Depends(get_location_repository),
):
    """
    Update a location. Only the fields sent are changed.
    """
    return await repo.update(location_id, body)


@router.delete("/locations/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_location(
    location_id: int,
    repo: LocationRepository = Depends(get_location_repository),
):
    """
    Delete a location together with its personnel.
    """
    await repo.delete(location_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/locations/{location_id}/personnel", response_model=list[PersonnelResponse])
async def list_location_personnel(
    location_id: int,
    repo: PersonnelRepository = Depends(get_personnel_repository),
):
    return await repo.list_by_location(location_id)
