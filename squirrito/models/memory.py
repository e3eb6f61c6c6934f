# FILE: squirrito/models/memory.py
"""
Memory models
"""
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def coerce_coordinate(value: Any):
    """Return value as float if it is a real JSON number, else None"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def require_utf8(value):
    """Reject text that cannot be written back out as UTF-8 (lone surrogates)"""
    if isinstance(value, str):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("text is not valid unicode")
    return value


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Memory(CamelModel):
    """A persisted joke pinned to a location. Never mutated after creation."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    session_id: str
    location_text: str
    lat: float = 0.0
    lng: float = 0.0
    joke: str
    created_at: int = Field(description="Milliseconds since the Unix epoch (UTC)")


class SaveRequest(CamelModel):
    """Save a joke the user chose to keep"""
    location_text: str = Field(min_length=1)
    joke: str = Field(strict=True)
    lat: float = 0.0
    lng: float = 0.0

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def default_to_zero(cls, v):
        coerced = coerce_coordinate(v)
        return 0.0 if coerced is None else coerced

    @field_validator("location_text", "joke")
    @classmethod
    def encodable_text(cls, v):
        return require_utf8(v)
