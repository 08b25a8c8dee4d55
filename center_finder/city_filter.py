# center_finder/city_filter.py
"""Plausibility check of geocoded results against the stated city."""
import logging

from center_finder.models import ResolvedLocation

logger = logging.getLogger(__name__)

# Checked in order, first present wins
LOCALITY_FIELDS = ("city", "town", "county", "state")


def extract_locality(address_details: dict) -> str:
    """Pick the locality name out of a Nominatim address breakdown."""
    for key in LOCALITY_FIELDS:
        value = address_details.get(key)
        if value:
            return value
    return ""


def check_city_match(location: ResolvedLocation, city_context: str) -> bool:
    """Return True if the location plausibly lies within the city context.

    The locality is compared against the first comma-separated part of the
    context ("Delhi, India" -> "delhi"); the whole context is then looked for
    in the canonical address as a fallback. Locations without an address
    breakdown cannot be checked and count as a match.
    """
    if not city_context or not location.address_details:
        return True

    context = city_context.lower()
    locality = extract_locality(location.address_details).lower()

    if context.split(",")[0] in locality:
        return True
    return context in location.canonical_address.lower()


def city_mismatch_warning(location: ResolvedLocation) -> str:
    return f'Warning: Result for "{location.input_address}" may be outside the specified city context.'


def filter_city_matches(locations: list[ResolvedLocation], city_context: str) -> list[str]:
    """Check every location and return one warning per mismatch.

    Mismatched locations are not removed.
    """
    warnings = []
    for location in locations:
        if not check_city_match(location, city_context):
            logger.info("Result for %r looks outside %r", location.input_address, city_context)
            warnings.append(city_mismatch_warning(location))
    return warnings
