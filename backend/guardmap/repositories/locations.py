"""
Location repository - CRUD over geofence locations.

Input arrives already shaped by the pydantic schemas; this layer applies
defaults, encodes the style record and owns the not-found policy.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from guardmap.config import Settings
from guardmap.errors import NotFoundError
from guardmap.models import Location
from guardmap.schemas.location import LocationCreate, LocationUpdate
from guardmap.services import style_codec
from guardmap.utils.timezone import utc_now

logger = logging.getLogger(__name__)


class LocationRepository:
    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def list(self) -> list[Location]:
        """All locations, newest first unless configured otherwise."""
        order = Location.id.asc() if self.settings.location_list_order == "oldest_first" else Location.id.desc()
        result = await self.db.execute(select(Location).order_by(order))
        return list(result.scalars().all())

    async def get_by_id(self, location_id: int) -> Optional[Location]:
        """
        The location with its personnel loaded, or None.

        A missing id is an expected outcome here, not an error.
        """
        result = await self.db.execute(
            select(Location).where(Location.id == location_id)
        )
        return result.scalar_one_or_none()

    async def get_or_raise(self, location_id: int) -> Location:
        location = await self.get_by_id(location_id)
        if not location:
            raise NotFoundError(f"Location {location_id} not found")
        return location

    async def create(self, data: LocationCreate) -> Location:
        location = Location(
            name=data.name,
            description=data.description,
            latitude=data.latitude,
            longitude=data.longitude,
            location_type=data.location_type.value,
            radius=data.radius if data.radius is not None else self.settings.default_radius_meters,
            is_active=data.is_active,
            style=style_codec.encode(data.style) if data.style else None,
            notes=data.notes,
        )

        self.db.add(location)
        await self.db.commit()
        await self.db.refresh(location)

        logger.info("Created location %s (%s)", location.id, location.name)
        return location

    async def update(self, location_id: int, data: LocationUpdate) -> Location:
        """Apply only the fields present in the request."""
        location = await self.get_or_raise(location_id)

        update_data = data.model_dump(exclude_unset=True, exclude={"id"})
        if "style" in update_data:
            update_data["style"] = style_codec.encode(data.style) if data.style else None
        if update_data.get("location_type") is not None:
            update_data["location_type"] = data.location_type.value

        for field, value in update_data.items():
            setattr(location, field, value)
        location.updated_at = utc_now()

        await self.db.commit()
        await self.db.refresh(location)
        return location

    async def delete(self, location_id: int) -> None:
        """Delete a location; its personnel go with it."""
        location = await self.get_or_raise(location_id)

        await self.db.delete(location)
        await self.db.commit()

        logger.info("Deleted location %s", location_id)
