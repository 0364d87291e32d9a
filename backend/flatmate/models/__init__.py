from flatmate.models.audit import AuditLog
from flatmate.models.contact_message import ContactMessage
from flatmate.models.enums import Amenity, ContactChannel, GenderPreference
from flatmate.models.listing import Listing
from flatmate.models.profile import UserProfile
from flatmate.models.saved_listing import SavedListing

__all__ = [
    "AuditLog",
    "Amenity",
    "ContactChannel",
    "ContactMessage",
    "GenderPreference",
    "Listing",
    "SavedListing",
    "UserProfile",
]
