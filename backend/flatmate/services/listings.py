from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from flatmate.core.errors import AuthenticationRequired, AuthorizationError, NotFoundError, ValidationError
from flatmate.core.logging import get_logger
from flatmate.models.enums import GenderPreference
from flatmate.models.listing import Listing
from flatmate.models.saved_listing import SavedListing
from flatmate.schemas.listing import ContactVisibility, ListingCreate, ListingFilter, ListingRecord, ListingUpdate
from flatmate.services.audit import audit_event
from flatmate.services.filters import filter_conditions, matches, needs_python_pass
from flatmate.services.mapping import (
    check_lengths,
    column_for,
    listing_from_row,
    location_columns,
    normalize_amenities,
    visibility_columns,
)
from flatmate.services.profiles import find_profile, get_profile

LOGGER = get_logger("services.listings")

ANONYMOUS_NAME = "Anonymous User"
ORDERABLE_COLUMNS = {"created_at", "updated_at", "rent_amount"}
EDITABLE_FIELDS = (
    "title",
    "description",
    "location",
    "rent_amount",
    "number_of_flatmates",
    "gender_preference",
    "amenities",
    "is_available",
)


def _require_user(user_id: str | None) -> str:
    if not user_id:
        raise AuthenticationRequired()
    return user_id


def _validated_columns(values: dict[str, Any], current_amenities: dict | None = None) -> dict[str, Any]:
    """Check logical listing fields and turn them into column values.

    Raises before anything is staged on the session.
    """
    columns: dict[str, Any] = {}
    for field, value in values.items():
        if value is None:
            raise ValidationError(f"{field} cannot be null")
        if field == "title":
            if not value.strip():
                raise ValidationError("Title is required")
            columns["title"] = value.strip()
        elif field == "rent_amount":
            if value <= 0:
                raise ValidationError("Rent amount must be greater than zero")
            columns["rent_amount"] = value
        elif field == "number_of_flatmates":
            if value < 1:
                raise ValidationError("Number of flatmates must be at least 1")
            columns["number_of_flatmates"] = value
        elif field == "gender_preference":
            raw = getattr(value, "value", value)
            if raw not in {g.value for g in GenderPreference}:
                raise ValidationError("Gender preference must be one of: male, female, any")
            columns["gender_preference"] = raw
        elif field == "location":
            if not value.city.strip():
                raise ValidationError("City is required")
            columns.update(location_columns(value))
        elif field == "amenities":
            merged = {str(getattr(k, "value", k)): v for k, v in (current_amenities or {}).items()}
            merged.update({str(getattr(k, "value", k)): v for k, v in value.items()})
            columns["amenities"] = normalize_amenities(merged)
        else:
            columns[field] = value
    check_lengths(Listing, columns)
    return columns


def _contact_snapshot(db: Session, user_id: str, payload: ListingCreate) -> dict[str, Any]:
    profile = find_profile(db, user_id)
    if profile:
        return {
            "user_name": profile.name or payload.user_name or ANONYMOUS_NAME,
            "user_phone": profile.phone or payload.user_phone,
            "user_email": profile.email or payload.user_email,
            "show_phone": profile.show_phone,
            "show_email": profile.show_email,
            "show_whatsapp": profile.show_whatsapp,
        }
    return {
        "user_name": payload.user_name or ANONYMOUS_NAME,
        "user_phone": payload.user_phone,
        "user_email": payload.user_email,
        **visibility_columns(payload.user_contact_visibility or ContactVisibility()),
    }


def _get_row(db: Session, listing_id: str) -> Listing:
    row = db.query(Listing).filter(Listing.id == listing_id).first()
    if not row:
        raise NotFoundError("Listing not found")
    return row


def _owned_row(db: Session, listing_id: str, user_id: str | None) -> Listing:
    user_id = _require_user(user_id)
    row = _get_row(db, listing_id)
    if row.user_id != user_id:
        raise AuthorizationError("Only the listing owner can change this listing")
    return row


def create_listing(db: Session, payload: ListingCreate, user_id: str | None) -> ListingRecord:
    user_id = _require_user(user_id)
    columns = _validated_columns({field: getattr(payload, field) for field in EDITABLE_FIELDS})

    snapshot = _contact_snapshot(db, user_id, payload)
    check_lengths(Listing, snapshot)

    now = datetime.utcnow()
    row = Listing(
        user_id=user_id,
        created_at=now,
        updated_at=now,
        **snapshot,
        **columns,
    )
    db.add(row)
    db.flush()
    audit_event(db, "listing_create", "listing", user_id=user_id, resource_id=row.id)
    db.commit()
    db.refresh(row)
    LOGGER.info("listing_create listing_id=%s user_id=%s city=%s rent=%s", row.id, user_id, row.city, row.rent_amount)
    return listing_from_row(row)


def get_listing(db: Session, listing_id: str) -> ListingRecord:
    return listing_from_row(_get_row(db, listing_id))


def update_listing(db: Session, listing_id: str, payload: ListingUpdate, user_id: str | None) -> ListingRecord:
    row = _owned_row(db, listing_id, user_id)
    supplied = {field: getattr(payload, field) for field in payload.model_fields_set if field in EDITABLE_FIELDS}
    current = listing_from_row(row).amenities
    columns = _validated_columns(supplied, current_amenities=current)

    for column, value in columns.items():
        setattr(row, column, value)
    row.updated_at = datetime.utcnow()
    audit_event(
        db,
        "listing_update",
        "listing",
        user_id=user_id,
        resource_id=row.id,
        details=",".join(sorted(supplied)),
    )
    db.commit()
    db.refresh(row)
    LOGGER.info("listing_update listing_id=%s fields=%s", row.id, ",".join(sorted(supplied)) or "-")
    return listing_from_row(row)


def set_availability(
    db: Session,
    listing_id: str,
    is_available: bool,
    user_id: str | None = None,
    automated: bool = False,
) -> ListingRecord:
    """Toggle availability as the owner, or as automation when ``automated``."""
    row = _get_row(db, listing_id) if automated else _owned_row(db, listing_id, user_id)
    row.is_available = is_available
    row.updated_at = datetime.utcnow()
    audit_event(
        db,
        "listing_availability",
        "listing",
        user_id=None if automated else user_id,
        resource_id=row.id,
        details=f"is_available={is_available} automated={automated}",
    )
    db.commit()
    db.refresh(row)
    LOGGER.info("listing_availability listing_id=%s is_available=%s automated=%s", row.id, is_available, automated)
    return listing_from_row(row)


def resync_contact(db: Session, listing_id: str, user_id: str | None) -> ListingRecord:
    """Copy the owner's current profile contact data onto the listing."""
    row = _owned_row(db, listing_id, user_id)
    profile = get_profile(db, row.user_id)
    snapshot = {
        "user_name": profile.name or row.user_name,
        "user_phone": profile.phone,
        "user_email": profile.email,
        "show_phone": profile.show_phone,
        "show_email": profile.show_email,
        "show_whatsapp": profile.show_whatsapp,
    }
    check_lengths(Listing, snapshot)
    for column, value in snapshot.items():
        setattr(row, column, value)
    row.updated_at = datetime.utcnow()
    audit_event(db, "listing_resync_contact", "listing", user_id=user_id, resource_id=row.id)
    db.commit()
    db.refresh(row)
    LOGGER.info("listing_resync_contact listing_id=%s", row.id)
    return listing_from_row(row)


def delete_listing(db: Session, listing_id: str, user_id: str | None) -> None:
    """Delete a listing and its saved edges. Deleting a missing listing is a no-op."""
    user_id = _require_user(user_id)
    row = db.query(Listing).filter(Listing.id == listing_id).first()
    if row is None:
        LOGGER.info("listing_delete_noop listing_id=%s", listing_id)
        return
    if row.user_id != user_id:
        raise AuthorizationError("Only the listing owner can delete this listing")

    removed = (
        db.query(SavedListing)
        .filter(SavedListing.listing_id == listing_id)
        .delete(synchronize_session=False)
    )
    db.delete(row)
    audit_event(
        db,
        "listing_delete",
        "listing",
        user_id=user_id,
        resource_id=listing_id,
        details=f"saved_edges_removed={removed}",
    )
    db.commit()
    LOGGER.info("listing_delete listing_id=%s saved_edges_removed=%s", listing_id, removed)


def list_listings(
    db: Session,
    listing_filter: ListingFilter | None = None,
    limit: int | None = None,
    order_by: str = "createdAt",
    descending: bool = True,
) -> list[ListingRecord]:
    column = column_for(order_by)
    if column.key not in ORDERABLE_COLUMNS:
        raise ValidationError(f"Cannot order listings by {order_by}")
    if limit is not None and limit < 1:
        raise ValidationError("Limit must be at least 1")

    query = (
        db.query(Listing)
        .filter(*filter_conditions(listing_filter))
        .order_by(column.desc() if descending else column.asc(), Listing.id)
    )
    if limit is not None and not needs_python_pass(listing_filter):
        query = query.limit(limit)

    results: list[ListingRecord] = []
    for row in query.all():
        record = listing_from_row(row)
        if not matches(record, listing_filter):
            continue
        results.append(record)
        if limit is not None and len(results) >= limit:
            break
    return results


def list_by_owner(db: Session, user_id: str) -> list[ListingRecord]:
    rows = (
        db.query(Listing)
        .filter(Listing.user_id == user_id)
        .order_by(Listing.created_at.desc(), Listing.id)
        .all()
    )
    return [listing_from_row(row) for row in rows]
