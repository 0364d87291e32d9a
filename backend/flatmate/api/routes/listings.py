from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from flatmate.core.config import get_settings
from flatmate.core.database import get_db
from flatmate.core.deps import require_user_id
from flatmate.models.enums import Amenity, GenderPreference
from flatmate.schemas.listing import AvailabilityUpdate, ListingCreate, ListingFilter, ListingResponse, ListingUpdate
from flatmate.services import listings as listing_service
from flatmate.services.mapping import public_listing

router = APIRouter(prefix="/listings", tags=["listings"])
settings = get_settings()


@router.get("", response_model=list[ListingResponse])
def list_listings(
    min_rent: int | None = Query(default=None, alias="minRent", ge=0),
    max_rent: int | None = Query(default=None, alias="maxRent", ge=0),
    city: str | None = Query(default=None),
    gender_preference: GenderPreference | None = Query(default=None, alias="genderPreference"),
    number_of_flatmates: int | None = Query(default=None, alias="numberOfFlatmates", ge=1),
    is_available: bool | None = Query(default=None, alias="isAvailable"),
    amenity: list[Amenity] | None = Query(default=None),
    limit: int = Query(default=settings.LISTINGS_DEFAULT_LIMIT, ge=1, le=settings.LISTINGS_MAX_LIMIT),
    order_by: str = Query(default="createdAt", alias="orderBy"),
    descending: bool = Query(default=True),
    db: Session = Depends(get_db),
):
    listing_filter = ListingFilter(
        min_rent=min_rent,
        max_rent=max_rent,
        city=city,
        gender_preference=gender_preference,
        number_of_flatmates=number_of_flatmates,
        is_available=is_available,
        amenities={a: True for a in amenity or []},
    )
    records = listing_service.list_listings(
        db, listing_filter, limit=limit, order_by=order_by, descending=descending
    )
    return [public_listing(r) for r in records]


@router.post("", response_model=ListingResponse, status_code=status.HTTP_201_CREATED)
def create_listing(payload: ListingCreate, db: Session = Depends(get_db), user_id: str = Depends(require_user_id)):
    return public_listing(listing_service.create_listing(db, payload, user_id))


@router.get("/mine", response_model=list[ListingResponse])
def my_listings(db: Session = Depends(get_db), user_id: str = Depends(require_user_id)):
    return [public_listing(r) for r in listing_service.list_by_owner(db, user_id)]


@router.get("/{listing_id}", response_model=ListingResponse)
def get_listing(listing_id: str, db: Session = Depends(get_db)):
    return public_listing(listing_service.get_listing(db, listing_id))


@router.patch("/{listing_id}", response_model=ListingResponse)
def update_listing(
    listing_id: str,
    payload: ListingUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user_id),
):
    return public_listing(listing_service.update_listing(db, listing_id, payload, user_id))


@router.put("/{listing_id}/availability", response_model=ListingResponse)
def set_availability(
    listing_id: str,
    payload: AvailabilityUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user_id),
):
    return public_listing(listing_service.set_availability(db, listing_id, payload.is_available, user_id=user_id))


@router.post("/{listing_id}/resync-contact", response_model=ListingResponse)
def resync_contact(listing_id: str, db: Session = Depends(get_db), user_id: str = Depends(require_user_id)):
    return public_listing(listing_service.resync_contact(db, listing_id, user_id))


@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_listing(listing_id: str, db: Session = Depends(get_db), user_id: str = Depends(require_user_id)):
    listing_service.delete_listing(db, listing_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
