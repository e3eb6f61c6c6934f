# FILE: squirrito/services/geocode.py
"""
Best-effort place lookups against OpenStreetMap Nominatim

Nothing in here raises: any network, HTTP or parse failure is logged at
debug level and reported as None.
"""
import logging
from typing import Any, Optional

import httpx

from squirrito.config import get_settings
from squirrito.models.joke import GeocodeResult, PlaceInfo

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class Geocoder:
    """Reverse and forward geocoding client"""

    def __init__(
        self,
        base_url: str = "https://nominatim.openstreetmap.org",
        user_agent: str = "Squirrito/1.0",
        timeout: float = 5.0
    ):
        self.base_url = base_url.rstrip('/')
        self.user_agent = user_agent
        self.timeout = timeout

    def _get_json(self, path: str, params: dict) -> Any:
        response = httpx.get(
            f"{self.base_url}/{path}",
            params=params,
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()

    def enrich(self, lat: Any, lng: Any) -> Optional[PlaceInfo]:
        """Reverse-geocode a coordinate pair into name/city/country."""
        if not _is_number(lat) or not _is_number(lng):
            return None

        try:
            data = self._get_json("reverse", {
                "format": "jsonv2",
                "lat": str(lat),
                "lon": str(lng),
                "zoom": "14"
            })
            address = data.get("address") or {}
            display_name = data.get("display_name") or ""
            return PlaceInfo(
                name=data.get("name") or display_name.split(",")[0] or None,
                city=(
                    address.get("city") or address.get("town")
                    or address.get("village") or address.get("suburb")
                ),
                country=address.get("country")
            )
        except Exception as e:
            logger.debug(f"Reverse geocode failed for ({lat}, {lng}): {e}")
            return None

    def search(self, query: str) -> Optional[GeocodeResult]:
        """Forward-geocode free text to the first matching coordinate."""
        if not query or not query.strip():
            return None

        try:
            hits = self._get_json("search", {
                "format": "jsonv2",
                "q": query.strip(),
                "limit": "1"
            })
            if not hits:
                return None
            return GeocodeResult(lat=float(hits[0]["lat"]), lng=float(hits[0]["lon"]))
        except Exception as e:
            logger.debug(f"Forward geocode failed for {query!r}: {e}")
            return None


_geocoder: Optional[Geocoder] = None


def get_geocoder() -> Geocoder:
    """Get or create global geocoder"""
    global _geocoder
    if _geocoder is None:
        settings = get_settings()
        _geocoder = Geocoder(
            base_url=settings.geocoder_base_url,
            user_agent=settings.geocoder_user_agent,
            timeout=settings.geocoder_timeout_seconds
        )
    return _geocoder
