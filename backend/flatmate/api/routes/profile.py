from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from flatmate.core.database import get_db
from flatmate.core.deps import require_user_id
from flatmate.schemas.profile import ProfileResponse, ProfileUpsert
from flatmate.services.mapping import profile_response
from flatmate.services.profiles import get_profile, upsert_profile

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=ProfileResponse)
def read_profile(db: Session = Depends(get_db), user_id: str = Depends(require_user_id)):
    return profile_response(get_profile(db, user_id))


@router.put("", response_model=ProfileResponse)
def write_profile(payload: ProfileUpsert, db: Session = Depends(get_db), user_id: str = Depends(require_user_id)):
    return profile_response(upsert_profile(db, user_id, payload))
