# FILE: squirrito/routes/joke.py
"""
Joke endpoint (generate only, never saves)
"""
import logging
from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse

from squirrito.models.joke import JokeRequest, JokeResponse
from squirrito.providers.registry import ModelRegistry, get_model_registry
from squirrito.services.geocode import Geocoder, get_geocoder
from squirrito.services.jokes import JokeService, JokeUnavailable

logger = logging.getLogger(__name__)
router = APIRouter()


def get_joke_service(
    registry: ModelRegistry = Depends(get_model_registry),
    geocoder: Geocoder = Depends(get_geocoder)
) -> JokeService:
    return JokeService(registry=registry, geocoder=geocoder)


@router.post("/joke", response_model=JokeResponse)
def create_joke(
    request: JokeRequest,
    response: Response,
    service: JokeService = Depends(get_joke_service)
):
    """Generate one joke for the described scene"""
    logger.info(f"Joke request: location_text={request.location_text[:50]!r}")

    try:
        result = service.generate(request)
    except JokeUnavailable:
        return PlainTextResponse("Joke generation unavailable", status_code=503)

    if result.fallback:
        response.headers["X-Joke-Fallback"] = "1"

    return JokeResponse(joke=result.joke)
