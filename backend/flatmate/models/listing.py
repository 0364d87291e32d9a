from datetime import datetime
import uuid

from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from flatmate.core.database import Base


def _new_listing_id() -> str:
    return uuid.uuid4().hex


class Listing(Base):
    __tablename__ = "listings"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_listing_id)
    user_id: Mapped[str] = mapped_column(String(64), index=True, nullable=False)

    # Lister contact snapshot, copied from the profile at create/resync time.
    user_name: Mapped[str] = mapped_column(String(120), nullable=False)
    user_phone: Mapped[str | None] = mapped_column(String(30))
    user_email: Mapped[str | None] = mapped_column(String(255))
    show_phone: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    show_email: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    show_whatsapp: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    title: Mapped[str] = mapped_column(String(160), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)

    address: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    city: Mapped[str] = mapped_column(String(120), index=True, nullable=False)
    state: Mapped[str] = mapped_column(String(120), default="", nullable=False)
    postal_code: Mapped[str] = mapped_column(String(20), default="", nullable=False)
    latitude: Mapped[float | None] = mapped_column(Float)
    longitude: Mapped[float | None] = mapped_column(Float)

    rent_amount: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    number_of_flatmates: Mapped[int] = mapped_column(Integer, nullable=False)
    gender_preference: Mapped[str] = mapped_column(String(10), default="any", nullable=False)
    amenities: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, index=True, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
