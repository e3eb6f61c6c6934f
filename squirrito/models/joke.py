# FILE: squirrito/models/joke.py
"""
Joke generation models
"""
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from squirrito.models.memory import CamelModel, coerce_coordinate, require_utf8


class JokeRequest(CamelModel):
    """Scene description sent by the client. Transient, never stored."""
    location_text: str = Field(min_length=1)
    surroundings: Optional[str] = None
    today_plan: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def drop_non_numeric(cls, v):
        return coerce_coordinate(v)

    @field_validator("location_text", "surroundings", "today_plan")
    @classmethod
    def encodable_text(cls, v):
        return require_utf8(v)


class JokeResponse(BaseModel):
    joke: str


class PlaceInfo(BaseModel):
    """Reverse-geocoded hint about where the user is"""
    name: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


class GeocodeResult(BaseModel):
    lat: float
    lng: float
