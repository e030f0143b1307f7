"""
Personnel repository - people scoped to a location.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from guardmap.errors import InvalidReferenceError, NotFoundError
from guardmap.models import Location, Personnel
from guardmap.schemas.personnel import PersonnelCreate, PersonnelUpdate
from guardmap.utils.timezone import utc_now

logger = logging.getLogger(__name__)


class PersonnelRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _ensure_location(self, location_id: int) -> None:
        result = await self.db.execute(
            select(Location.id).where(Location.id == location_id)
        )
        if result.scalar_one_or_none() is None:
            raise InvalidReferenceError(f"Location {location_id} does not exist")

    async def list_by_location(self, location_id: int) -> list[Personnel]:
        result = await self.db.execute(
            select(Personnel)
            .where(Personnel.location_id == location_id)
            .order_by(Personnel.id.desc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, personnel_id: int) -> Optional[Personnel]:
        result = await self.db.execute(
            select(Personnel).where(Personnel.id == personnel_id)
        )
        return result.scalar_one_or_none()

    async def get_or_raise(self, personnel_id: int) -> Personnel:
        person = await self.get_by_id(personnel_id)
        if not person:
            raise NotFoundError(f"Personnel {personnel_id} not found")
        return person

    async def create(self, data: PersonnelCreate) -> Personnel:
        await self._ensure_location(data.location_id)

        person = Personnel(
            location_id=data.location_id,
            name=data.name,
            role=data.role,
            phone=data.phone,
            email=data.email,
            personnel_type=data.personnel_type.value,
            notes=data.notes,
        )

        self.db.add(person)
        await self.db.commit()
        await self.db.refresh(person)

        logger.info("Added personnel %s to location %s", person.id, person.location_id)
        return person

    async def update(self, personnel_id: int, data: PersonnelUpdate) -> Personnel:
        """
        Apply only the fields present in the request.

        Moving a person to another location re-validates the reference.
        """
        person = await self.get_or_raise(personnel_id)

        update_data = data.model_dump(exclude_unset=True, exclude={"id"})
        if "location_id" in update_data and update_data["location_id"] != person.location_id:
            await self._ensure_location(update_data["location_id"])
        if update_data.get("personnel_type") is not None:
            update_data["personnel_type"] = data.personnel_type.value

        for field, value in update_data.items():
            setattr(person, field, value)
        person.updated_at = utc_now()

        await self.db.commit()
        await self.db.refresh(person)
        return person

    async def delete(self, personnel_id: int) -> None:
        person = await self.get_or_raise(personnel_id)

        await self.db.delete(person)
        await self.db.commit()
