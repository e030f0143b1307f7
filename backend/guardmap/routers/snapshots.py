"""
Assignment snapshot API endpoints.

Snapshots are create-and-read only. Reading needs nothing but the token.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status

from guardmap.dependencies import get_snapshot_service
from guardmap.schemas.snapshot import SnapshotCreated, SnapshotResponse
from guardmap.services.snapshot_service import SnapshotService

router = APIRouter()


@router.post("", response_model=SnapshotCreated, status_code=status.HTTP_201_CREATED)
async def create_snapshot(
    request: Request,
    payload: Any = Body(...),
    service: SnapshotService = Depends(get_snapshot_service),
):
    """
    Store the current assignments and return a shareable link.
    """
    snapshot, url = await service.create(payload, str(request.base_url))
    return SnapshotCreated(token=snapshot.token, url=url)


@router.get("/{token}", response_model=SnapshotResponse)
async def get_snapshot(
    token: str,
    service: SnapshotService = Depends(get_snapshot_service),
):
    snapshot = await service.get_by_token(token)
    return SnapshotResponse.from_snapshot(snapshot)


@router.get("/{token}/geojson")
async def get_snapshot_geojson(
    token: str,
    service: SnapshotService = Depends(get_snapshot_service),
):
    """
    The snapshot as a FeatureCollection for the read-only viewer.
    """
    return await service.to_geojson(token)
