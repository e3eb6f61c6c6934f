# FILE: squirrito/routes/geocode.py
"""
Forward geocoding for typed place names
"""
import logging
from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from squirrito.models.joke import GeocodeResult
from squirrito.services.geocode import Geocoder, get_geocoder

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/geocode", response_model=GeocodeResult)
def geocode(q: str = "", geocoder: Geocoder = Depends(get_geocoder)):
    """Coordinates of the first match for `q`, or 404"""
    if not q.strip():
        return PlainTextResponse("q required", status_code=400)

    hit = geocoder.search(q)
    if hit is None:
        return PlainTextResponse("Not found", status_code=404)
    return hit
