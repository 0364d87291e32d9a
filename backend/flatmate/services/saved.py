from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from flatmate.core.errors import AuthenticationRequired, NotFoundError
from flatmate.core.logging import get_logger
from flatmate.models.listing import Listing
from flatmate.models.saved_listing import SavedListing
from flatmate.schemas.listing import ListingRecord
from flatmate.services.mapping import listing_from_row

LOGGER = get_logger("services.saved")


def _require_user(user_id: str | None) -> str:
    if not user_id:
        raise AuthenticationRequired()
    return user_id


def _listing_exists(db: Session, listing_id: str) -> bool:
    return db.query(Listing.id).filter(Listing.id == listing_id).first() is not None


def save_listing(db: Session, user_id: str | None, listing_id: str) -> None:
    """Bookmark a listing. Saving twice is a successful no-op.

    Uniqueness is left to the ``(user_id, listing_id)`` constraint so that
    concurrent duplicate saves cannot both insert.
    """
    user_id = _require_user(user_id)
    if not _listing_exists(db, listing_id):
        raise NotFoundError("Listing not found")

    db.add(SavedListing(user_id=user_id, listing_id=listing_id, saved_at=datetime.utcnow()))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # Either the edge already exists, or the listing was deleted in between.
        if not _listing_exists(db, listing_id):
            raise NotFoundError("Listing not found")
        LOGGER.debug("saved_listing_exists user_id=%s listing_id=%s", user_id, listing_id)
        return
    LOGGER.info("saved_listing_add user_id=%s listing_id=%s", user_id, listing_id)


def unsave_listing(db: Session, user_id: str | None, listing_id: str) -> None:
    user_id = _require_user(user_id)
    removed = (
        db.query(SavedListing)
        .filter(SavedListing.user_id == user_id, SavedListing.listing_id == listing_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    LOGGER.info("saved_listing_remove user_id=%s listing_id=%s removed=%s", user_id, listing_id, removed)


def list_saved(db: Session, user_id: str | None) -> list[ListingRecord]:
    """Saved listings, most recently saved first.

    The inner join drops edges whose listing is gone, which also covers a
    cascade that has not committed yet.
    """
    user_id = _require_user(user_id)
    rows = (
        db.query(Listing)
        .join(SavedListing, SavedListing.listing_id == Listing.id)
        .filter(SavedListing.user_id == user_id)
        .order_by(SavedListing.saved_at.desc(), SavedListing.id.desc())
        .all()
    )
    return [listing_from_row(row) for row in rows]


def saved_listing_ids(db: Session, user_id: str | None) -> list[str]:
    user_id = _require_user(user_id)
    rows = (
        db.query(SavedListing.listing_id)
        .join(Listing, SavedListing.listing_id == Listing.id)
        .filter(SavedListing.user_id == user_id)
        .order_by(SavedListing.saved_at.desc(), SavedListing.id.desc())
        .all()
    )
    return [listing_id for (listing_id,) in rows]


def is_saved(db: Session, user_id: str, listing_id: str) -> bool:
    return (
        db.query(SavedListing.id)
        .filter(SavedListing.user_id == user_id, SavedListing.listing_id == listing_id)
        .first()
        is not None
    )
