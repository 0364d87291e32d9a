from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from flatmate.core.config import get_settings
from flatmate.core.database import get_db
from flatmate.core.deps import get_optional_user_id, require_user_id
from flatmate.core.rate_limit import limiter
from flatmate.schemas.contact import ContactHandoffResult, ContactMessageResponse, ContactRequest, VisibleContact
from flatmate.services.contact import initiate_contact, list_contact_attempts
from flatmate.services.listings import get_listing
from flatmate.services.visibility import resolve_contact

router = APIRouter(prefix="/listings", tags=["contact"])
settings = get_settings()


@router.get("/{listing_id}/contact", response_model=VisibleContact, response_model_exclude_none=True)
def visible_contact(
    listing_id: str,
    db: Session = Depends(get_db),
    viewer_id: str | None = Depends(get_optional_user_id),
):
    return resolve_contact(get_listing(db, listing_id), viewer_id)


@router.post("/{listing_id}/contact", response_model=ContactHandoffResult)
@limiter.limit(settings.CONTACT_RATE_LIMIT)
def contact_lister(
    request: Request,
    listing_id: str,
    payload: ContactRequest | None = None,
    db: Session = Depends(get_db),
    viewer_id: str | None = Depends(get_optional_user_id),
):
    channel = (payload or ContactRequest()).channel
    return initiate_contact(db, get_listing(db, listing_id), viewer_id, channel=channel)


@router.get("/{listing_id}/messages", response_model=list[ContactMessageResponse])
def contact_history(listing_id: str, db: Session = Depends(get_db), user_id: str = Depends(require_user_id)):
    return list_contact_attempts(db, get_listing(db, listing_id), user_id)
