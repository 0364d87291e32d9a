from flatmate.schemas.contact import VisibleContact
from flatmate.schemas.listing import ListingRecord


def resolve_contact(listing: ListingRecord, viewer_id: str | None) -> VisibleContact:
    """Contact details of the lister that ``viewer_id`` is allowed to see.

    Owners always get their full record. Everyone else, anonymous viewers
    included, gets only the channels the listing's visibility snapshot opens;
    masked channels are left unset rather than blanked.
    """
    if viewer_id is not None and viewer_id == listing.user_id:
        return VisibleContact(
            listing_id=listing.id,
            name=listing.user_name,
            phone=listing.user_phone,
            email=listing.user_email,
            can_message=True,
            is_owner=True,
        )

    visibility = listing.user_contact_visibility
    return VisibleContact(
        listing_id=listing.id,
        name=listing.user_name,
        phone=listing.user_phone if visibility.show_phone else None,
        email=listing.user_email if visibility.show_email else None,
        can_message=visibility.show_whatsapp,
    )
