"""
Personnel API endpoints.
"""

from fastapi import APIRouter, Depends, Response, status

from guardmap.dependencies import get_personnel_repository
from guardmap.repositories.personnel import PersonnelRepository
from guardmap.schemas.personnel import PersonnelCreate, PersonnelResponse, PersonnelUpdate

router = APIRouter()


@router.post("", response_model=PersonnelResponse, status_code=status.HTTP_201_CREATED)
async def create_personnel(
    body: PersonnelCreate,
    repo: PersonnelRepository = Depends(get_personnel_repository),
):
    """
    Add a person to an existing location.
    """
    return await repo.create(body)


@router.get("/{personnel_id}", response_model=PersonnelResponse)
async def get_personnel(
    personnel_id: int,
    repo: PersonnelRepository = Depends(get_personnel_repository),
):
    return await repo.get_or_raise(personnel_id)


@router.patch("/{personnel_id}", response_model=PersonnelResponse)
async def update_personnel(
    personnel_id: int,
    body: PersonnelUpdate,
    repo: PersonnelRepository = Depends(get_personnel_repository),
):
    """
    Update a person; sending ``locationId`` moves them to another location.
    """
    return await repo.update(personnel_id, body)


@router.delete("/{personnel_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_personnel(
    personnel_id: int,
    repo: PersonnelRepository = Depends(get_personnel_repository),
):
    await repo.delete(personnel_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
