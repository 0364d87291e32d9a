from datetime import datetime

import pytest

from flatmate.models.enums import Amenity, GenderPreference
from flatmate.schemas.listing import ContactVisibility, ListingFilter, ListingRecord, Location
from flatmate.services.filters import filter_listings, gender_compatible, matches, needs_python_pass


def _record(**overrides) -> ListingRecord:
    data = {
        "id": "l1",
        "user_id": "owner",
        "user_name": "Owner",
        "user_contact_visibility": ContactVisibility(),
        "title": "Room",
        "description": "",
        "location": Location(city="Bengaluru"),
        "rent_amount": 12000,
        "number_of_flatmates": 2,
        "gender_preference": "male",
        "amenities": {a: False for a in Amenity},
        "is_available": True,
        "created_at": datetime(2024, 1, 1),
        "updated_at": datetime(2024, 1, 1),
    }
    data.update(overrides)
    return ListingRecord(**data)


def test_strict_gender_mismatch_is_excluded():
    listing = _record(rent_amount=12000, gender_preference="male")
    flt = ListingFilter(min_rent=10000, max_rent=15000, gender_preference="female")
    assert not matches(listing, flt)


def test_any_in_filter_matches_every_listing_gender():
    listing = _record(rent_amount=12000, gender_preference="male")
    assert matches(listing, ListingFilter(gender_preference="any"))


def test_required_amenity_missing_is_excluded():
    listing = _record(amenities={"wifi": True, "parking": False})
    assert not matches(listing, ListingFilter(amenities={"wifi": True, "parking": True}))
    assert matches(listing, ListingFilter(amenities={"wifi": True, "parking": False}))


@pytest.mark.parametrize("wanted", [None, "male", "female", "any"])
def test_listing_open_to_any_gender_always_matches(wanted):
    listing = _record(gender_preference="any")
    assert matches(listing, ListingFilter(gender_preference=wanted))


@pytest.mark.parametrize("listing_pref", ["male", "female", "any"])
def test_absent_or_any_filter_gender_always_matches(listing_pref):
    listing = _record(gender_preference=listing_pref)
    assert matches(listing, ListingFilter())
    assert matches(listing, ListingFilter(gender_preference="any"))


def test_gender_compatible_requires_equality_without_wildcards():
    assert gender_compatible(GenderPreference.female, GenderPreference.female)
    assert not gender_compatible(GenderPreference.female, GenderPreference.male)


def test_rent_bounds_are_inclusive():
    listing = _record(rent_amount=12000)
    assert matches(listing, ListingFilter(min_rent=12000, max_rent=12000))
    assert not matches(listing, ListingFilter(min_rent=12001))
    assert not matches(listing, ListingFilter(max_rent=11999))


def test_zero_rent_bound_is_still_a_bound():
    listing = _record(rent_amount=500)
    assert not matches(listing, ListingFilter(max_rent=0))


def test_city_is_case_insensitive_substring():
    listing = _record(location=Location(city="Bengaluru"))
    assert matches(listing, ListingFilter(city="bengal"))
    assert matches(listing, ListingFilter(city="  BENGALURU "))
    assert not matches(listing, ListingFilter(city="Mumbai"))


def test_blank_city_imposes_no_constraint():
    assert ListingFilter(city="   ").city is None
    assert matches(_record(), ListingFilter(city="   "))


def test_flatmate_count_is_exact():
    listing = _record(number_of_flatmates=2)
    assert matches(listing, ListingFilter(number_of_flatmates=2))
    assert not matches(listing, ListingFilter(number_of_flatmates=3))


def test_availability_filter_only_hides_unavailable_listings():
    available = _record(is_available=True)
    taken = _record(is_available=False)
    assert matches(available, ListingFilter(is_available=True))
    assert not matches(taken, ListingFilter(is_available=True))
    # Off or absent: nothing is hidden, available listings included.
    assert matches(available, ListingFilter(is_available=False))
    assert matches(taken, ListingFilter(is_available=False))
    assert matches(taken, ListingFilter())


def test_empty_filter_matches_everything():
    assert matches(_record(), ListingFilter())
    assert matches(_record(), None)


def test_filter_keeps_only_requested_amenities():
    flt = ListingFilter(amenities={"wifi": True, "parking": False})
    assert flt.required_amenities() == [Amenity.wifi]


def test_filter_listings_preserves_order():
    listings = [
        _record(id="a", rent_amount=9000),
        _record(id="b", rent_amount=20000),
        _record(id="c", rent_amount=11000),
    ]
    result = filter_listings(listings, ListingFilter(max_rent=15000))
    assert [r.id for r in result] == ["a", "c"]


def test_non_ascii_city_matches_case_insensitively():
    assert matches(_record(location=Location(city="MÜNCHEN")), ListingFilter(city="münchen"))


@pytest.mark.parametrize(
    "flt, expected",
    [
        (None, False),
        (ListingFilter(), False),
        (ListingFilter(min_rent=1000, gender_preference="male"), False),
        (ListingFilter(city="bengal"), True),
        (ListingFilter(amenities={"wifi": True}), True),
        (ListingFilter(amenities={"wifi": False}), False),
    ],
)
def test_needs_python_pass(flt, expected):
    assert needs_python_pass(flt) is expected
