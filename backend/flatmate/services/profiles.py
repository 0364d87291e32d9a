from datetime import datetime

from sqlalchemy.orm import Session

from flatmate.core.errors import NotFoundError
from flatmate.core.logging import get_logger
from flatmate.models.profile import UserProfile
from flatmate.schemas.profile import ProfileUpsert
from flatmate.services.audit import audit_event
from flatmate.services.mapping import check_lengths, visibility_columns

LOGGER = get_logger("services.profiles")


def find_profile(db: Session, user_id: str) -> UserProfile | None:
    return db.query(UserProfile).filter(UserProfile.id == user_id).first()


def get_profile(db: Session, user_id: str) -> UserProfile:
    profile = find_profile(db, user_id)
    if not profile:
        raise NotFoundError("Profile not found")
    return profile


def upsert_profile(db: Session, user_id: str, payload: ProfileUpsert) -> UserProfile:
    """Create or patch the caller's profile.

    Existing listings keep their contact snapshot; owners re-sync a listing
    explicitly to publish profile changes on it.
    """
    data = payload.model_dump(exclude_unset=True, exclude={"contact_visibility"})
    check_lengths(UserProfile, {"id": user_id, **data})

    profile = find_profile(db, user_id)
    created = profile is None
    if created:
        profile = UserProfile(id=user_id)
        db.add(profile)

    for field, value in data.items():
        setattr(profile, field, value)
    if payload.contact_visibility is not None:
        for field, value in visibility_columns(payload.contact_visibility).items():
            setattr(profile, field, value)
    profile.updated_at = datetime.utcnow()

    audit_event(db, "profile_create" if created else "profile_update", "profile", user_id=user_id, resource_id=user_id)
    db.commit()
    db.refresh(profile)
    LOGGER.info("profile_upsert user_id=%s created=%s", user_id, created)
    return profile
