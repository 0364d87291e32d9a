"""Translation between the snake_case ``listings`` table and the logical model.

``LISTING_FIELD_MAP`` is the single source of truth for which logical field
lives in which column. It has to stay total: every column has a logical
path and every logical path has a column.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from flatmate.core.errors import ValidationError
from flatmate.models.enums import Amenity
from flatmate.models.listing import Listing
from flatmate.models.profile import UserProfile
from flatmate.schemas.listing import ContactVisibility, ListingRecord, ListingResponse, Location
from flatmate.schemas.profile import ProfileResponse

LISTING_FIELD_MAP: Dict[str, str] = {
    "id": "id",
    "userId": "user_id",
    "userName": "user_name",
    "userPhone": "user_phone",
    "userEmail": "user_email",
    "userContactVisibility.showPhone": "show_phone",
    "userContactVisibility.showEmail": "show_email",
    "userContactVisibility.showWhatsApp": "show_whatsapp",
    "title": "title",
    "description": "description",
    "location.address": "address",
    "location.city": "city",
    "location.state": "state",
    "location.postalCode": "postal_code",
    "location.latitude": "latitude",
    "location.longitude": "longitude",
    "rentAmount": "rent_amount",
    "numberOfFlatmates": "number_of_flatmates",
    "genderPreference": "gender_preference",
    "amenities": "amenities",
    "isAvailable": "is_available",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

COLUMN_TO_FIELD: Dict[str, str] = {column: field for field, column in LISTING_FIELD_MAP.items()}


def column_for(field: str):
    """Return the ORM attribute behind a logical field name (camelCase or snake_case)."""

    column = LISTING_FIELD_MAP.get(field) or (field if field in COLUMN_TO_FIELD else None)
    if column is None:
        raise ValidationError(f"Unknown listing field: {field}")
    return getattr(Listing, column)


def check_lengths(model, values: Mapping[str, Any]) -> None:
    """Raise ``ValidationError`` for strings longer than their column allows."""

    for column, value in values.items():
        length = getattr(model.__table__.c[column].type, "length", None)
        if length and isinstance(value, str) and len(value) > length:
            field = COLUMN_TO_FIELD.get(column, column) if model is Listing else column
            raise ValidationError(f"{field} must be at most {length} characters")


def normalize_amenities(raw: Mapping[Any, Any] | None) -> Dict[str, bool]:
    """Expand a partial amenity mapping to every known key, absent keys false."""

    raw = raw or {}
    known = {a.value for a in Amenity}
    unknown = [str(getattr(k, "value", k)) for k in raw if str(getattr(k, "value", k)) not in known]
    if unknown:
        raise ValidationError(f"Unknown amenities: {', '.join(sorted(unknown))}")
    flags = {str(getattr(k, "value", k)): bool(v) for k, v in raw.items()}
    return {a.value: flags.get(a.value, False) for a in Amenity}


def location_columns(location: Location) -> Dict[str, Any]:
    return {
        "address": location.address,
        "city": location.city,
        "state": location.state,
        "postal_code": location.postal_code,
        "latitude": location.latitude,
        "longitude": location.longitude,
    }


def visibility_columns(visibility: ContactVisibility) -> Dict[str, bool]:
    return {
        "show_phone": visibility.show_phone,
        "show_email": visibility.show_email,
        "show_whatsapp": visibility.show_whatsapp,
    }


def listing_from_row(row: Listing) -> ListingRecord:
    stored = row.amenities or {}
    return ListingRecord(
        id=row.id,
        user_id=row.user_id,
        user_name=row.user_name,
        user_phone=row.user_phone,
        user_email=row.user_email,
        user_contact_visibility=ContactVisibility(
            show_phone=row.show_phone,
            show_email=row.show_email,
            show_whatsapp=row.show_whatsapp,
        ),
        title=row.title,
        description=row.description,
        location=Location(
            address=row.address,
            city=row.city,
            state=row.state,
            postal_code=row.postal_code,
            latitude=row.latitude,
            longitude=row.longitude,
        ),
        rent_amount=row.rent_amount,
        number_of_flatmates=row.number_of_flatmates,
        gender_preference=row.gender_preference,
        # Keys written by older clients that we no longer know are dropped.
        amenities={a: bool(stored.get(a.value, False)) for a in Amenity},
        is_available=row.is_available,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def public_listing(record: ListingRecord) -> ListingResponse:
    return ListingResponse.model_validate(record.model_dump(exclude={"user_phone", "user_email"}))


def profile_response(profile: UserProfile) -> ProfileResponse:
    return ProfileResponse(
        id=profile.id,
        name=profile.name,
        email=profile.email,
        phone=profile.phone,
        contact_visibility=ContactVisibility(
            show_phone=profile.show_phone,
            show_email=profile.show_email,
            show_whatsapp=profile.show_whatsapp,
        ),
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


__all__ = [
    "LISTING_FIELD_MAP",
    "COLUMN_TO_FIELD",
    "column_for",
    "check_lengths",
    "normalize_amenities",
    "location_columns",
    "visibility_columns",
    "listing_from_row",
    "public_listing",
    "profile_response",
]
