"""Location model - a named geofence circle on the map."""

from datetime import datetime
from enum import Enum

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from guardmap.database import Base
from guardmap.utils.timezone import utc_now


class LocationType(str, Enum):
    """What a location is staffed for."""
    SECURITY = "security"
    TRAFFIC = "traffic"
    MIXED = "mixed"


class Location(Base):
    """
    A point of interest with a geofence radius.

    Coordinates are kept as the exact text the operator entered so that
    reading a location back never shows float rounding.
    """

    __tablename__ = "locations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)

    # Location
    latitude: Mapped[str] = mapped_column(String(50), nullable=False)
    longitude: Mapped[str] = mapped_column(String(50), nullable=False)
    location_type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    radius: Mapped[int | None] = mapped_column(Integer)  # metres

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Encoded by services.style_codec
    style: Mapped[str | None] = mapped_column(Text)
    notes: Mapped[str | None] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )

    # Relationships
    personnel: Mapped[list["Personnel"]] = relationship(
        "Personnel",
        back_populates="location",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="Personnel.id.desc()",
    )

    @property
    def lat(self) -> float:
        return float(self.latitude)

    @property
    def lng(self) -> float:
        return float(self.longitude)

    def __repr__(self) -> str:
        return f"<Location {self.name} ({self.location_type}, {self.radius}m)>"
