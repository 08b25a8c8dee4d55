# center_finder/geocoder.py
"""Address geocoding using OpenStreetMap Nominatim (free, no API key)."""
import logging
from typing import Optional

import httpx

from center_finder.config import settings
from center_finder.errors import GeocodeError, NoMatchError
from center_finder.models import ResolvedLocation

logger = logging.getLogger(__name__)


def build_query(address: str, city_context: Optional[str] = None) -> str:
    """Append the city context to the address unless it already mentions it."""
    query = address.strip()
    if city_context and city_context.lower() not in query.lower():
        query = f"{query}, {city_context}"
    return query


class NominatimClient:
    """Shared HTTP plumbing for the Nominatim search and reverse endpoints."""

    def __init__(
        self,
        base_url: str = None,
        user_agent: str = None,
        timeout: float = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize client.

        Args:
            base_url: Nominatim root URL, without the endpoint path.
            user_agent: Sent on every request (required by Nominatim policy).
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport, used by tests.
        """
        self.base_url = (base_url or settings.nominatim_base_url).rstrip("/")
        self.user_agent = user_agent or settings.user_agent
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._transport = transport

    async def _get_json(self, path: str, params: dict):
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(
                f"{self.base_url}/{path}",
                params=params,
                headers={"User-Agent": self.user_agent},
            )
            response.raise_for_status()
            return response.json()


class Geocoder(NominatimClient):
    """Resolves one free-text address to a coordinate and canonical address."""

    async def _search_api(self, query: str) -> list[dict]:
        """Call Nominatim search API."""
        return await self._get_json(
            "search",
            {
                "q": query,
                "format": "json",
                "limit": 1,
                "addressdetails": 1,
            },
        )

    async def resolve(self, address: str, city_context: Optional[str] = None) -> ResolvedLocation:
        """Geocode one address, optionally disambiguated by a city context.

        Raises:
            ValueError: if the address is blank.
            GeocodeError: on any failure to query the service, or a
                malformed response. NoMatchError when the service finds
                nothing.
        """
        if not address or not address.strip():
            raise ValueError("address must not be empty")

        address = address.strip()
        query = build_query(address, city_context)

        try:
            results = await self._search_api(query)
        except httpx.TimeoutException as e:
            raise GeocodeError(address, "request timed out") from e
        except httpx.HTTPError as e:
            raise GeocodeError(address, str(e) or e.__class__.__name__) from e
        except ValueError as e:
            raise GeocodeError(address, "invalid JSON response") from e
        except Exception as e:
            raise GeocodeError(address, str(e) or e.__class__.__name__) from e

        if not isinstance(results, list):
            raise GeocodeError(address, "unexpected response payload")
        if not results:
            raise NoMatchError(address)

        top = results[0]
        try:
            lat = float(top["lat"])
            lon = float(top["lon"])
            display_name = top["display_name"]
        except (KeyError, TypeError, ValueError) as e:
            raise GeocodeError(address, f"malformed result: {e}") from e

        if not isinstance(display_name, str) or not display_name:
            raise GeocodeError(address, "malformed result: missing display_name")

        details = top.get("address")
        if not isinstance(details, dict):
            details = {}

        if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
            raise GeocodeError(address, f"coordinate out of range: ({lat}, {lon})")

        logger.debug("Geocoded %r -> (%s, %s) %s", query, lat, lon, display_name)
        return ResolvedLocation(
            input_address=address,
            canonical_address=display_name,
            lat=lat,
            lon=lon,
            address_details=details,
        )
