from sqlalchemy.orm import Session

from flatmate import models  # noqa: F401
from flatmate.core.config import get_settings
from flatmate.core.database import Base, SessionLocal, engine
from flatmate.models.listing import Listing
from flatmate.schemas.listing import ContactVisibility, ListingCreate, Location
from flatmate.schemas.profile import ProfileUpsert
from flatmate.services.listings import create_listing
from flatmate.services.profiles import find_profile, upsert_profile

SAMPLE_PROFILE = ProfileUpsert(
    name="Sample User",
    email="sample@example.com",
    phone="+919876543210",
    contact_visibility=ContactVisibility(show_phone=True, show_email=True, show_whatsapp=True),
)

SAMPLE_LISTINGS = [
    ListingCreate(
        title="Cozy 3BHK in Koramangala",
        description="Spacious apartment with great amenities located in the heart of Koramangala.",
        location=Location(address="123, 5th Cross", city="Bengaluru", state="Karnataka", postal_code="560034"),
        rent_amount=25000,
        number_of_flatmates=2,
        gender_preference="any",
        amenities={"wifi": True, "ac": True, "kitchen": True, "laundry": True, "parking": True, "furnished": True},
        is_available=True,
    ),
]


def seed_sample_listings(db: Session, user_id: str) -> int:
    """Create the sample profile and listings when the listing table is empty."""
    if db.query(Listing.id).first() is not None:
        print("Listings already present; sample data skipped")
        return 0

    if find_profile(db, user_id) is None:
        upsert_profile(db, user_id, SAMPLE_PROFILE)

    created = 0
    for payload in SAMPLE_LISTINGS:
        listing = create_listing(db, payload, user_id)
        print(f"Created sample listing: {listing.title}")
        created += 1
    return created


if __name__ == "__main__":
    # The owner id comes from the identity provider; never invent one here.
    sample_user_id = get_settings().BOOTSTRAP_SAMPLE_USER_ID
    if sample_user_id:
        Base.metadata.create_all(bind=engine)
        db = SessionLocal()
        try:
            seed_sample_listings(db, sample_user_id)
        finally:
            db.close()
    else:
        print("Bootstrap skipped. Set BOOTSTRAP_SAMPLE_USER_ID to seed sample listings.")
