from sqlalchemy.orm import Session

from flatmate.models.audit import AuditLog


def audit_event(
    db: Session,
    action: str,
    resource: str,
    user_id: str | None = None,
    resource_id: str | None = None,
    details: str | None = None,
) -> None:
    """Stage an audit row in the caller's transaction; the caller commits."""
    entry = AuditLog(
        user_id=user_id,
        action=action,
        resource=resource,
        resource_id=resource_id,
        details=details,
    )
    db.add(entry)


def list_user_events(db: Session, user_id: str, limit: int = 50) -> list[AuditLog]:
    return (
        db.query(AuditLog)
        .filter(AuditLog.user_id == user_id)
        .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
        .limit(limit)
        .all()
    )
