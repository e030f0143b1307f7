"""
Assignment Snapshot Service

Persists the operator's current assignment state (location id -> people)
under a random token and serves it back read-only.

The payload is stored as received. It is never reconciled with the live
locations/personnel tables, so a shared link keeps showing what was shared
even after the underlying rows change or disappear. Anyone holding the token
can read the snapshot; the token is the capability.
"""

import logging
import secrets
from typing import Any

import pydantic
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from guardmap.config import Settings
from guardmap.errors import NotFoundError, RandomnessFailureError, ValidationError
from guardmap.models import AssignmentSnapshot
from guardmap.schemas.snapshot import SnapshotCreate
from guardmap.services.geojson import snapshot_collection

logger = logging.getLogger(__name__)

TOKEN_BYTES = 16  # 128 bits, 32 hex characters
VIEW_PATH = "/view/s/"


def generate_token() -> str:
    try:
        return secrets.token_hex(TOKEN_BYTES)
    except (NotImplementedError, OSError) as exc:
        raise RandomnessFailureError("Could not generate snapshot token") from exc


def parse_payload(raw: Any) -> SnapshotCreate:
    """Validate a raw request body; anything but a well-formed mapping is rejected."""
    if not isinstance(raw, dict) or not isinstance(raw.get("assignments"), dict):
        raise ValidationError("assignments must be an object keyed by location id")
    try:
        return SnapshotCreate.model_validate(raw)
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid snapshot payload: {exc.error_count()} error(s)") from exc


class SnapshotService:
    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    def build_url(self, token: str, request_base_url: str) -> str:
        """Shareable link; PUBLIC_BASE_URL wins over the request's own host."""
        base = self.settings.public_base_url or request_base_url
        return f"{base.rstrip('/')}{VIEW_PATH}{token}"

    async def create(
        self,
        payload: Any,
        request_base_url: str,
    ) -> tuple[AssignmentSnapshot, str]:
        """
        Store a snapshot and return it with its shareable URL.

        Validation happens before the token is drawn or anything is written.
        What gets stored is the body itself, so keys the schema does not
        know about come back unchanged on read.
        """
        parse_payload(payload)

        # JSON object keys are strings; Python callers may pass int ids
        data = {
            str(location_id): entries
            for location_id, entries in payload["assignments"].items()
        }
        locations = payload.get("locations")

        snapshot = AssignmentSnapshot(
            token=generate_token(),
            data=data,
            locations=locations,
        )

        self.db.add(snapshot)
        await self.db.commit()
        await self.db.refresh(snapshot)

        logger.info(
            "Created snapshot %s... (%d locations, %d people)",
            snapshot.token[:8],
            len(data),
            sum(len(v) for v in data.values()),
        )
        return snapshot, self.build_url(snapshot.token, request_base_url)

    async def get_by_token(self, token: str) -> AssignmentSnapshot:
        result = await self.db.execute(
            select(AssignmentSnapshot).where(AssignmentSnapshot.token == token)
        )
        snapshot = result.scalar_one_or_none()
        if not snapshot:
            raise NotFoundError("Snapshot not found")
        return snapshot

    async def to_geojson(self, token: str) -> dict:
        """The snapshot drawn as circles, each carrying its shared assignments."""
        snapshot = await self.get_by_token(token)
        return snapshot_collection(
            snapshot,
            self.settings.default_radius_meters,
            self.settings.timezone,
        )
