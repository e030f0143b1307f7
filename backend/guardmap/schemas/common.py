"""
Shared pieces for request/response schemas.
"""

import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class CreatedResponse(BaseModel):
    """Identity of a newly created row."""
    id: int


class OkResponse(BaseModel):
    ok: Literal[True] = True


def normalize_coordinate(value: Any, name: str, limit: float) -> Any:
    """
    Coordinate as the exact text to store.

    Accepts a number or numeric string; the value must be finite and within
    [-limit, limit]. Strings are kept as written (minus surrounding space).
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"{name} must be a number")
    if isinstance(value, str):
        text = value.strip()
    elif isinstance(value, (int, float)):
        text = None
    else:
        raise ValueError(f"{name} must be a number")

    # Integers too large for a float overflow instead of failing to parse
    try:
        number = float(value if text is None else text)
    except (ValueError, OverflowError):
        raise ValueError(f"{name} must be a number") from None
    if text is None:
        text = str(value)

    if not math.isfinite(number):
        raise ValueError(f"{name} must be finite")
    if not -limit <= number <= limit:
        raise ValueError(f"{name} must be between {-limit:g} and {limit:g}")
    return text


def reject_nulls(model: BaseModel, required: tuple[str, ...]) -> None:
    """Partial updates may omit required fields but not set them to null."""
    for field in required:
        if field in model.model_fields_set and getattr(model, field) is None:
            raise ValueError(f"{field} cannot be null")


def blank_to_none(value: Any) -> Any:
    """Forms send empty strings for cleared optional inputs."""
    if isinstance(value, str) and not value.strip():
        return None
    return value
