"""Personnel model - people stationed at a location."""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from guardmap.database import Base
from guardmap.utils.timezone import utc_now


class PersonnelType(str, Enum):
    SECURITY = "security"
    TRAFFIC = "traffic"


class Personnel(Base):
    """
    A person attached to exactly one location.

    Rows go away with their location (ON DELETE CASCADE).
    """

    __tablename__ = "personnel"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    location_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("locations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str | None] = mapped_column(String(100))  # free text; snapshot entries must use SNAPSHOT_ROLES
    phone: Mapped[str | None] = mapped_column(String(64))
    email: Mapped[str | None] = mapped_column(String(320))
    personnel_type: Mapped[str] = mapped_column(
        String(20),
        default=PersonnelType.SECURITY.value,
        nullable=False,
    )
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
    location: Mapped["Location"] = relationship("Location", back_populates="personnel")

    def __repr__(self) -> str:
        return f"<Personnel {self.name} @ location {self.location_id}>"
