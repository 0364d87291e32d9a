from datetime import datetime

from pydantic import Field, field_validator

from flatmate.models.enums import Amenity, GenderPreference
from flatmate.schemas.base import CamelModel


class Location(CamelModel):
    address: str = ""
    city: str
    state: str = ""
    postal_code: str = ""
    latitude: float | None = None
    longitude: float | None = None


class ContactVisibility(CamelModel):
    show_phone: bool = True
    show_email: bool = True
    show_whatsapp: bool = Field(default=True, alias="showWhatsApp")


class ListingCreate(CamelModel):
    # Range and enumeration checks live in the listing service so that every
    # caller gets the same domain ValidationError.
    title: str
    description: str = ""
    location: Location
    rent_amount: int
    number_of_flatmates: int = 1
    gender_preference: str = GenderPreference.any.value
    amenities: dict[str, bool] = Field(default_factory=dict)
    is_available: bool = True

    # Contact fallback for owners who have not set up a profile yet.
    user_name: str | None = None
    user_phone: str | None = None
    user_email: str | None = None
    user_contact_visibility: ContactVisibility | None = None


class ListingUpdate(CamelModel):
    title: str | None = None
    description: str | None = None
    location: Location | None = None
    rent_amount: int | None = None
    number_of_flatmates: int | None = None
    gender_preference: str | None = None
    amenities: dict[str, bool] | None = None
    is_available: bool | None = None


class AvailabilityUpdate(CamelModel):
    is_available: bool


class ListingRecord(CamelModel):
    """A listing as the services see it, lister contact snapshot included."""

    id: str
    user_id: str
    user_name: str
    user_phone: str | None = None
    user_email: str | None = None
    user_contact_visibility: ContactVisibility
    title: str
    description: str
    location: Location
    rent_amount: int
    number_of_flatmates: int
    gender_preference: GenderPreference
    amenities: dict[Amenity, bool]
    is_available: bool
    created_at: datetime
    updated_at: datetime


class ListingResponse(CamelModel):
    """Public listing shape. Phone and email only leave via the contact resolver."""

    id: str
    user_id: str
    user_name: str
    user_contact_visibility: ContactVisibility
    title: str
    description: str
    location: Location
    rent_amount: int
    number_of_flatmates: int
    gender_preference: GenderPreference
    amenities: dict[Amenity, bool]
    is_available: bool
    created_at: datetime
    updated_at: datetime


class ListingFilter(CamelModel):
    min_rent: int | None = None
    max_rent: int | None = None
    city: str | None = None
    gender_preference: GenderPreference | None = None
    number_of_flatmates: int | None = None
    is_available: bool | None = None
    amenities: dict[Amenity, bool] = Field(default_factory=dict)

    @field_validator("city")
    @classmethod
    def _normalize_city(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @field_validator("amenities")
    @classmethod
    def _required_only(cls, value: dict[Amenity, bool]) -> dict[Amenity, bool]:
        return {key: True for key, wanted in value.items() if wanted}

    def required_amenities(self) -> list[Amenity]:
        return list(self.amenities)
