"""Role Store access: per-user role and profile records keyed by identity id.

Writes use merge semantics: only the fields passed are changed. Callers own
the transaction (commit/rollback).
"""

from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import UserRecord


def get_user_record(db: Session, uid: str) -> UserRecord | None:
    """Return the record for uid, or None."""
    return db.get(UserRecord, uid)


def get_stored_role(db: Session, uid: str) -> str | None:
    """Return the raw stored role for uid, or None when there is no record."""
    record = db.get(UserRecord, uid)
    if record is None:
        return None
    return record.role


def upsert_user_record(db: Session, uid: str, /, **fields: Any) -> UserRecord:
    """
    Create or merge-update the record for uid with fields.

    Repeating a call with the same data leaves a single record with the same
    values; fields not passed are untouched. created_at is only set on insert.
    """
    unknown = [name for name in fields if not hasattr(UserRecord, name) or name == "uid"]
    if unknown:
        raise ValueError(f"Unknown user record fields: {', '.join(sorted(unknown))}")
    record = db.get(UserRecord, uid)
    if record is None:
        record = UserRecord(uid=uid, **fields)
        db.add(record)
    else:
        for name, value in fields.items():
            setattr(record, name, value)
        record.updated_at = func.now()
    db.flush()
    return record


def delete_user_record(db: Session, uid: str) -> bool:
    """Delete the record for uid. Returns False when there was nothing to delete."""
    record = db.get(UserRecord, uid)
    if record is None:
        return False
    db.delete(record)
    db.flush()
    return True


def list_user_records(db: Session) -> list[UserRecord]:
    """Return every record, oldest first."""
    return db.query(UserRecord).order_by(UserRecord.created_at, UserRecord.uid).all()
