from datetime import datetime

from pydantic import BaseModel

from flatmate.models.enums import ContactChannel
from flatmate.schemas.base import CamelModel


class VisibleContact(CamelModel):
    listing_id: str
    name: str
    phone: str | None = None
    email: str | None = None
    can_message: bool
    is_owner: bool = False


class ContactRequest(CamelModel):
    channel: ContactChannel = ContactChannel.whatsapp


class ContactHandoffResult(CamelModel):
    attempt_id: int
    listing_id: str
    channel: ContactChannel
    target: str
    message: str
    deep_link: str


class ContactMessageResponse(BaseModel):
    id: int
    sender_id: str | None
    listing_id: str
    listing_title: str
    channel: ContactChannel
    target: str
    message: str
    sent_at: datetime

    class Config:
        from_attributes = True
