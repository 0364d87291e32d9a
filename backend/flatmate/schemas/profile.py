from datetime import datetime

from pydantic import EmailStr

from flatmate.schemas.base import CamelModel
from flatmate.schemas.listing import ContactVisibility


class ProfileUpsert(CamelModel):
    name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    contact_visibility: ContactVisibility | None = None


class ProfileResponse(CamelModel):
    id: str
    name: str | None
    email: str | None
    phone: str | None
    contact_visibility: ContactVisibility
    created_at: datetime
    updated_at: datetime
