from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from flatmate.core.database import get_db
from flatmate.core.deps import require_user_id
from flatmate.schemas.listing import ListingResponse
from flatmate.services import saved as saved_service
from flatmate.services.mapping import public_listing

router = APIRouter(prefix="/saved", tags=["saved"])


@router.get("", response_model=list[ListingResponse])
def list_saved(db: Session = Depends(get_db), user_id: str = Depends(require_user_id)):
    return [public_listing(r) for r in saved_service.list_saved(db, user_id)]


@router.get("/ids", response_model=list[str])
def saved_ids(db: Session = Depends(get_db), user_id: str = Depends(require_user_id)):
    return saved_service.saved_listing_ids(db, user_id)


@router.put("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
def save_listing(listing_id: str, db: Session = Depends(get_db), user_id: str = Depends(require_user_id)):
    saved_service.save_listing(db, user_id, listing_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
def unsave_listing(listing_id: str, db: Session = Depends(get_db), user_id: str = Depends(require_user_id)):
    saved_service.unsave_listing(db, user_id, listing_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
