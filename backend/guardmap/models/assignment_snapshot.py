"""AssignmentSnapshot model - frozen, shareable copy of personnel assignments."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from guardmap.database import Base
from guardmap.utils.timezone import utc_now

JSONType = JSON().with_variant(JSONB(), "postgresql")

# Display roles a snapshot entry may carry ("team leader", "second guard")
SNAPSHOT_ROLES = ("قائد فريق", "رجل أمن ثاني")


class AssignmentSnapshot(Base):
    """
    Assignment state captured when an operator shares the map.

    Holds its own copy of the data and does not reference live locations or
    personnel, so later edits never change what a shared link shows. Rows are
    written once and never updated.
    """

    __tablename__ = "assignment_snapshots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    token: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)

    # {location_id: [{id, name, role, phone?, email?, personnelType?, notes?}]}
    data: Mapped[dict] = mapped_column(JSONType, nullable=False)
    # [{id, name, latitude, longitude, locationType, radius?}]
    locations: Mapped[list | None] = mapped_column(JSONType)

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<AssignmentSnapshot {self.token[:8]}...>"
