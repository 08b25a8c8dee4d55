# center_finder/reverse_geocoder.py
"""Reverse geocoding of the computed center point."""
import logging

from center_finder.config import settings
from center_finder.geocoder import NominatimClient
from center_finder.models import CenterPoint

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Unknown location"


class ReverseGeocoder(NominatimClient):
    """Labels a coordinate with a human-readable address. Never raises."""

    def __init__(self, *args, zoom: int = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.zoom = zoom if zoom is not None else settings.reverse_zoom

    async def _reverse_api(self, lat: float, lon: float) -> dict:
        """Call Nominatim reverse API."""
        return await self._get_json(
            "reverse",
            {
                "lat": lat,
                "lon": lon,
                "format": "json",
                "zoom": self.zoom,
            },
        )

    async def label(self, center: CenterPoint) -> str:
        try:
            data = await self._reverse_api(center.lat, center.lon)
        except Exception as e:
            logger.warning("Reverse geocoding failed for (%s, %s): %s", center.lat, center.lon, e)
            return UNKNOWN_LOCATION

        display_name = data.get("display_name") if isinstance(data, dict) else None
        if not display_name:
            logger.warning("No address found for coordinates (%s, %s)", center.lat, center.lon)
            return UNKNOWN_LOCATION

        return display_name
