from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from flatmate.core.config import get_settings
from flatmate.core.database import SessionLocal
from flatmate.core.errors import NotFoundError
from flatmate.core.logging import get_logger
from flatmate.models.listing import Listing
from flatmate.services.listings import set_availability
from flatmate.workers.celery_app import celery_app

settings = get_settings()
LOGGER = get_logger("workers.tasks")


def stale_listing_ids(db: Session, max_age_days: int, now: datetime | None = None) -> list[str]:
    cutoff = (now or datetime.utcnow()) - timedelta(days=max_age_days)
    rows = (
        db.query(Listing.id)
        .filter(Listing.is_available.is_(True), Listing.updated_at < cutoff)
        .order_by(Listing.updated_at)
        .all()
    )
    return [listing_id for (listing_id,) in rows]


@celery_app.task
def set_listing_availability(listing_id: str, is_available: bool) -> dict:
    db = SessionLocal()
    try:
        try:
            set_availability(db, listing_id, is_available, automated=True)
        except NotFoundError:
            return {"status": "listing_not_found", "listing_id": listing_id}
        return {"status": "updated", "listing_id": listing_id, "is_available": is_available}
    finally:
        db.close()


@celery_app.task
def expire_stale_listings(max_age_days: int | None = None) -> dict:
    """Mark listings nobody has touched for a while as unavailable."""
    if max_age_days is None:
        max_age_days = settings.LISTING_STALE_AFTER_DAYS
    db = SessionLocal()
    try:
        expired = []
        for listing_id in stale_listing_ids(db, max_age_days):
            try:
                set_availability(db, listing_id, False, automated=True)
            except NotFoundError:
                LOGGER.info("expire_stale_listings listing_id=%s deleted before expiry", listing_id)
                continue
            expired.append(listing_id)
        LOGGER.info("expire_stale_listings max_age_days=%s expired=%s", max_age_days, len(expired))
        return {"status": "ok", "expired": expired}
    finally:
        db.close()
