"""Role audit trail: one immutable entry per role change.

Entries are only ever appended and read; nothing here updates or deletes them.
"""

from sqlalchemy.orm import Session

from app.models import RoleAuditEntry

UNKNOWN_ROLE = "unknown"

DEFAULT_LIST_LIMIT = 100
MAX_LIST_LIMIT = 1000


def append_role_change(
    db: Session,
    *,
    target_user_id: str,
    changed_by: str,
    changed_by_email: str,
    old_role: str | None,
    new_role: str,
    note: str = "",
) -> RoleAuditEntry:
    """Add an audit entry to the current transaction. The caller commits."""
    entry = RoleAuditEntry(
        target_user_id=target_user_id,
        changed_by=changed_by,
        changed_by_email=changed_by_email or "",
        old_role=old_role or UNKNOWN_ROLE,
        new_role=new_role,
        note=note or "",
    )
    db.add(entry)
    return entry


def list_role_changes(
    db: Session,
    target_user_id: str | None = None,
    limit: int = DEFAULT_LIST_LIMIT,
) -> list[RoleAuditEntry]:
    """Return audit entries newest first, optionally for one target user."""
    limit = max(1, min(limit, MAX_LIST_LIMIT))
    query = db.query(RoleAuditEntry)
    if target_user_id:
        query = query.filter(RoleAuditEntry.target_user_id == target_user_id)
    return query.order_by(RoleAuditEntry.id.desc()).limit(limit).all()
