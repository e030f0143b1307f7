"""
Style Codec

Serializes a location's circle style (fill and stroke) to the text stored in
``locations.style`` and parses it back. ``StyleSchema`` is the one style
record: the API validates request bodies with it and stored text decodes
into it.

Decoding never raises: rows written by older clients may hold plain prose or
partial data, so anything unusable falls back to the default style, field by
field.
"""

import json
from typing import Any, Optional

import pydantic
from pydantic import Field

from guardmap.schemas.common import CamelModel

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"

DEFAULT_FILL_COLOR = "#0066ff"
DEFAULT_FILL_OPACITY = 0.25
DEFAULT_STROKE_COLOR = "#001533"
DEFAULT_STROKE_WIDTH = 2.0
MAX_STROKE_WIDTH = 50.0


class StyleSchema(CamelModel):
    """Display style of a geofence circle, camelCase on the wire."""

    # strict: true is not an opacity and "yes" is not a toggle
    fill_color: str = Field(DEFAULT_FILL_COLOR, pattern=HEX_COLOR_PATTERN, strict=True)
    fill_opacity: float = Field(DEFAULT_FILL_OPACITY, ge=0, le=1, strict=True, allow_inf_nan=False)
    stroke_color: str = Field(DEFAULT_STROKE_COLOR, pattern=HEX_COLOR_PATTERN, strict=True)
    stroke_width: float = Field(
        DEFAULT_STROKE_WIDTH, ge=0, le=MAX_STROKE_WIDTH, strict=True, allow_inf_nan=False
    )
    stroke_enabled: bool = Field(True, strict=True)


def encode(style: StyleSchema) -> str:
    """Compact JSON text for storage."""
    return style.model_dump_json(by_alias=True)


def decode(text: Optional[str]) -> StyleSchema:
    """Parse stored text back into a style; unusable input gives the default."""
    if not text or not isinstance(text, str):
        return StyleSchema()
    try:
        data = json.loads(text)
    except ValueError:
        return StyleSchema()
    if not isinstance(data, dict):
        return StyleSchema()
    return from_mapping(data)


def from_mapping(data: dict[str, Any]) -> StyleSchema:
    """
    Build a style from a dict with camelCase or snake_case keys.

    Each field is validated on its own; missing or invalid ones take their
    default value.
    """
    values = {}
    for name, field in StyleSchema.model_fields.items():
        raw = data.get(field.alias, data.get(name))
        if raw is None:
            continue
        try:
            StyleSchema.model_validate({name: raw})
        except pydantic.ValidationError:
            continue
        values[name] = raw
    return StyleSchema.model_validate(values)
