# tests/test_city_filter.py
import pytest
from center_finder.city_filter import (
    check_city_match,
    extract_locality,
    filter_city_matches,
)


# ═══════════════════════════════════════════════════════════════════
# Locality extraction
# ═══════════════════════════════════════════════════════════════════

def test_extract_locality_prefers_city():
    assert extract_locality({"city": "Pune", "town": "Aundh", "state": "Maharashtra"}) == "Pune"


def test_extract_locality_falls_back_in_order():
    assert extract_locality({"town": "Aundh", "county": "Haveli", "state": "Maharashtra"}) == "Aundh"
    assert extract_locality({"county": "Haveli", "state": "Maharashtra"}) == "Haveli"
    assert extract_locality({"state": "Maharashtra"}) == "Maharashtra"


def test_extract_locality_empty_when_no_fields():
    assert extract_locality({"road": "MG Road"}) == ""


# ═══════════════════════════════════════════════════════════════════
# Match check
# ═══════════════════════════════════════════════════════════════════

def test_match_on_first_segment_of_city_context(location_factory):
    loc = location_factory("Karol Bagh", 28.65, 77.19, canonical="Karol Bagh, Central Delhi", city="Delhi")
    assert check_city_match(loc, "Delhi, India") is True


def test_match_is_case_insensitive_containment(location_factory):
    loc = location_factory("Connaught Place", 28.63, 77.21, canonical="Connaught Place", city="New Delhi")
    assert check_city_match(loc, "DELHI") is True


def test_match_falls_back_to_display_name(location_factory):
    loc = location_factory(
        "Hauz Khas", 28.55, 77.20,
        canonical="Hauz Khas, South Delhi, Delhi, India",
        county="South Delhi District",
    )
    # Locality "south delhi district" doesn't contain "new delhi", but the
    # display name doesn't contain "new delhi, india" either
    assert check_city_match(loc, "New Delhi, India") is False
    assert check_city_match(loc, "Delhi, India") is True


def test_mismatch_when_neither_locality_nor_display_name_match(location_factory):
    loc = location_factory("MG Road", 12.97, 77.61, canonical="MG Road, Bengaluru, Karnataka, India", city="Bengaluru")
    assert check_city_match(loc, "Delhi, India") is False


def test_location_without_breakdown_counts_as_match(location_factory):
    loc = location_factory("MG Road", 12.97, 77.61, canonical="MG Road, Bengaluru, Karnataka, India")
    assert check_city_match(loc, "Delhi, India") is True


# ═══════════════════════════════════════════════════════════════════
# Batch filter
# ═══════════════════════════════════════════════════════════════════

def test_filter_warns_once_per_mismatch_and_keeps_order(location_factory):
    locations = [
        location_factory("MG Road", 12.97, 77.61, canonical="MG Road, Bengaluru, India", city="Bengaluru"),
        location_factory("Karol Bagh", 28.65, 77.19, city="Delhi"),
        location_factory("Park Street", 22.55, 88.35, canonical="Park Street, Kolkata, India", city="Kolkata"),
    ]

    warnings = filter_city_matches(locations, "Delhi, India")

    assert warnings == [
        'Warning: Result for "MG Road" may be outside the specified city context.',
        'Warning: Result for "Park Street" may be outside the specified city context.',
    ]
    assert len(locations) == 3


def test_filter_returns_no_warnings_when_all_match(delhi_locations):
    assert filter_city_matches(list(delhi_locations.values()), "Delhi") == []
