from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from flatmate.core.database import get_db
from flatmate.core.deps import require_user_id
from flatmate.schemas.audit import AuditLogResponse
from flatmate.services.audit import list_user_events

router = APIRouter(prefix="/audit", tags=["audit"])


@router.get("", response_model=list[AuditLogResponse])
def list_audit_logs(
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
    user_id: str = Depends(require_user_id),
):
    return list_user_events(db, user_id, limit=limit)
