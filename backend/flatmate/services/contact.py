import re
from datetime import datetime
from urllib.parse import quote

from sqlalchemy.orm import Session

from flatmate.core.config import get_settings
from flatmate.core.errors import AuthenticationRequired, PreconditionError
from flatmate.core.logging import get_logger
from flatmate.models.contact_message import ContactMessage
from flatmate.models.enums import ContactChannel
from flatmate.schemas.contact import ContactHandoffResult
from flatmate.schemas.listing import ListingRecord
from flatmate.services.visibility import resolve_contact

LOGGER = get_logger("services.contact")

_NON_DIGITS = re.compile(r"\D")
# Characters encodeURIComponent leaves alone, so links match the web client's.
_URI_SAFE = "!~*'()"


def normalize_phone(phone: str | None) -> str:
    return _NON_DIGITS.sub("", phone or "")


def render_message(title: str) -> str:
    settings = get_settings()
    return settings.CONTACT_MESSAGE_TEMPLATE.format(title=title, app_name=settings.APP_DISPLAY_NAME)


def build_deep_link(channel: ContactChannel, target: str, message: str) -> str:
    text = quote(message, safe=_URI_SAFE)
    if channel == ContactChannel.sms:
        return f"sms:+{target}?body={text}"
    base = get_settings().WHATSAPP_BASE_URL.rstrip("/")
    return f"{base}/{target}?text={text}"


def initiate_contact(
    db: Session,
    listing: ListingRecord,
    viewer_id: str | None,
    channel: ContactChannel = ContactChannel.whatsapp,
) -> ContactHandoffResult:
    """Prepare an outbound message to the lister and record the attempt.

    Nothing is delivered; the caller opens ``deep_link`` in the messaging app.
    ``show_phone`` only controls display, so a lister who accepts messages is
    reachable on their snapshot number even when it is hidden.
    """
    if not resolve_contact(listing, viewer_id).can_message:
        raise PreconditionError("This lister does not accept messages")
    target = normalize_phone(listing.user_phone)
    if not target:
        raise PreconditionError("No phone number is available for this listing")

    message = render_message(listing.title)
    attempt = ContactMessage(
        sender_id=viewer_id,
        listing_id=listing.id,
        listing_title=listing.title,
        channel=channel.value,
        target=target,
        message=message,
        sent_at=datetime.utcnow(),
    )
    db.add(attempt)
    db.commit()
    db.refresh(attempt)
    LOGGER.info(
        "contact_handoff listing_id=%s sender_id=%s channel=%s attempt_id=%s",
        listing.id,
        viewer_id or "anonymous",
        channel.value,
        attempt.id,
    )
    return ContactHandoffResult(
        attempt_id=attempt.id,
        listing_id=listing.id,
        channel=channel,
        target=target,
        message=message,
        deep_link=build_deep_link(channel, target, message),
    )


def list_contact_attempts(db: Session, listing: ListingRecord, user_id: str | None) -> list[ContactMessage]:
    """Handoff history for a listing: all of it for the owner, own attempts otherwise."""
    if not user_id:
        raise AuthenticationRequired()
    query = db.query(ContactMessage).filter(ContactMessage.listing_id == listing.id)
    if user_id != listing.user_id:
        query = query.filter(ContactMessage.sender_id == user_id)
    return query.order_by(ContactMessage.sent_at.desc(), ContactMessage.id.desc()).all()
