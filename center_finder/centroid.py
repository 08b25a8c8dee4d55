# center_finder/centroid.py
import math
from typing import Iterable, Optional

from center_finder.models import CenterPoint, ResolvedLocation


def spherical_mean(points: Iterable[tuple[float, float]]) -> tuple[float, float]:
    """Center of mass of (lat, lng) points on the unit sphere.

    Each point is converted to 3D Cartesian coordinates, the vectors are
    averaged, and the mean vector is projected back to latitude/longitude.
    Unlike averaging latitudes and longitudes directly this is correct across
    the antimeridian and is not distorted at high latitudes.

    Args:
        points: Iterable of (lat, lng) tuples in degrees

    Returns:
        (lat, lng) tuple in degrees
    """
    x = y = z = 0.0
    count = 0
    for lat, lng in points:
        lat_r = math.radians(lat)
        lng_r = math.radians(lng)
        x += math.cos(lat_r) * math.cos(lng_r)
        y += math.cos(lat_r) * math.sin(lng_r)
        z += math.sin(lat_r)
        count += 1

    if count == 0:
        raise ValueError("at least one point is required")

    x /= count
    y /= count
    z /= count

    lng = math.atan2(y, x)
    hyp = math.sqrt(x * x + y * y)
    lat = math.atan2(z, hyp)

    return math.degrees(lat), math.degrees(lng)


def select_city_subset(
    locations: list[ResolvedLocation],
    city_context: Optional[str] = None,
) -> list[ResolvedLocation]:
    """Prefer the in-city locations when there are enough of them.

    Only applies with more than two locations; the subset is used when at
    least two canonical addresses mention the city context.
    """
    if not city_context or len(locations) <= 2:
        return locations

    context = city_context.lower()
    in_city = [loc for loc in locations if context in loc.canonical_address.lower()]
    if len(in_city) >= 2:
        return in_city
    return locations


def compute_center(
    locations: list[ResolvedLocation],
    city_context: Optional[str] = None,
) -> CenterPoint:
    """Compute the unlabeled center point of two or more locations."""
    if len(locations) < 2:
        raise ValueError("at least two locations are required to compute a center")

    selected = select_city_subset(locations, city_context)
    lat, lon = spherical_mean((loc.lat, loc.lon) for loc in selected)
    return CenterPoint(lat=lat, lon=lon)
