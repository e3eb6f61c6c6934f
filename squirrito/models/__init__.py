# FILE: squirrito/models/__init__.py
"""
Pydantic models for request/response validation
"""
from squirrito.models.joke import GeocodeResult, JokeRequest, JokeResponse, PlaceInfo
from squirrito.models.memory import Memory, SaveRequest
