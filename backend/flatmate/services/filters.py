"""Listing filter evaluation.

``matches`` is the reference semantics. ``filter_conditions`` pushes the
predicates that translate cleanly into SQL down to the store; the store still
runs ``matches`` over what comes back, so the pushdown can only narrow the
candidate set, never change the answer.

Every predicate is optional and they are AND-combined:

* rent: inclusive ``min_rent`` / ``max_rent`` bounds.
* city: case-insensitive substring of the listing's city.
* gender: ``any`` on either side is a wildcard, otherwise exact equality.
* flatmates: exact count.
* availability: only ``is_available=True`` constrains; it hides unavailable
  listings and never hides available ones.
* amenities: every amenity requested as true must be present.
"""

from __future__ import annotations

from typing import Iterable, List

from sqlalchemy import or_

from flatmate.models.enums import GenderPreference
from flatmate.models.listing import Listing
from flatmate.schemas.listing import ListingFilter, ListingRecord


def _rent_ok(listing: ListingRecord, flt: ListingFilter) -> bool:
    if flt.min_rent is not None and listing.rent_amount < flt.min_rent:
        return False
    if flt.max_rent is not None and listing.rent_amount > flt.max_rent:
        return False
    return True


def _city_ok(listing: ListingRecord, flt: ListingFilter) -> bool:
    if not flt.city:
        return True
    return flt.city.lower() in (listing.location.city or "").lower()


def gender_compatible(listing_pref: GenderPreference, wanted: GenderPreference | None) -> bool:
    if wanted is None or wanted == GenderPreference.any:
        return True
    if listing_pref == GenderPreference.any:
        return True
    return listing_pref == wanted


def _availability_ok(listing: ListingRecord, flt: ListingFilter) -> bool:
    if flt.is_available:
        return listing.is_available is True
    return True


def _amenities_ok(listing: ListingRecord, flt: ListingFilter) -> bool:
    return all(listing.amenities.get(amenity, False) for amenity in flt.required_amenities())


def matches(listing: ListingRecord, flt: ListingFilter | None) -> bool:
    if flt is None:
        return True
    if not _rent_ok(listing, flt):
        return False
    if not _city_ok(listing, flt):
        return False
    if not gender_compatible(listing.gender_preference, flt.gender_preference):
        return False
    if flt.number_of_flatmates is not None and listing.number_of_flatmates != flt.number_of_flatmates:
        return False
    if not _availability_ok(listing, flt):
        return False
    return _amenities_ok(listing, flt)


def filter_listings(listings: Iterable[ListingRecord], flt: ListingFilter | None) -> List[ListingRecord]:
    """Order-preserving filter over an in-memory collection."""

    return [listing for listing in listings if matches(listing, flt)]


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


# Characters whose str.lower() contains ASCII letters that LIKE will not fold to.
_ASCII_FOLDING_CHARS = ("\u0130", "\u212a")


def _city_pushdown_safe(city: str) -> bool:
    # SQLite's LIKE folds ASCII only; str.lower() folds all of Unicode.
    return city.isascii()


def _city_condition(city: str):
    candidates = [Listing.city.ilike(f"%{_escape_like(city)}%", escape="\\")]
    candidates.extend(Listing.city.contains(char) for char in _ASCII_FOLDING_CHARS)
    return or_(*candidates)


def needs_python_pass(flt: ListingFilter | None) -> bool:
    """True when rows matching ``filter_conditions`` may still fail ``matches``.

    A SQL ``LIMIT`` is only safe when this is false.
    """

    if flt is None:
        return False
    return bool(flt.required_amenities()) or bool(flt.city)


def filter_conditions(flt: ListingFilter | None) -> list:
    """SQL clauses for the predicates the store can evaluate itself.

    Amenities stay in Python because they live in a JSON column whose query
    syntax differs between PostgreSQL and SQLite. The city clause is a
    superset of the Python check: non-ASCII search terms are not pushed down,
    and rows holding characters that lower-case to ASCII are passed through.
    """

    if flt is None:
        return []
    conditions = []
    if flt.min_rent is not None:
        conditions.append(Listing.rent_amount >= flt.min_rent)
    if flt.max_rent is not None:
        conditions.append(Listing.rent_amount <= flt.max_rent)
    if flt.city and _city_pushdown_safe(flt.city):
        conditions.append(_city_condition(flt.city))
    if flt.gender_preference is not None and flt.gender_preference != GenderPreference.any:
        conditions.append(
            or_(
                Listing.gender_preference == GenderPreference.any.value,
                Listing.gender_preference == flt.gender_preference.value,
            )
        )
    if flt.number_of_flatmates is not None:
        conditions.append(Listing.number_of_flatmates == flt.number_of_flatmates)
    if flt.is_available:
        conditions.append(Listing.is_available.is_(True))
    return conditions


__all__ = ["matches", "filter_listings", "filter_conditions", "gender_compatible", "needs_python_pass"]
