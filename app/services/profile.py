"""Self-service profile: users edit their own non-role fields or deactivate themselves."""

from datetime import UTC, datetime

from sqlalchemy.orm import Session

from app.models import UserRecord
from app.schemas.auth import CallerIdentity
from app.schemas.profile import ProfileUpdateRequest
from app.services import role_store
from app.services.event_log import EventType, SystemEventLog


class ProfileNotFoundError(Exception):
    """Raised when the caller has no Role Store record."""


def get_own_profile(db: Session, caller: CallerIdentity) -> UserRecord:
    record = role_store.get_user_record(db, caller.uid)
    if record is None:
        raise ProfileNotFoundError(caller.uid)
    return record


def update_own_profile(
    db: Session,
    events: SystemEventLog,
    caller: CallerIdentity,
    changes: ProfileUpdateRequest,
) -> UserRecord:
    """
    Apply the fields set in changes to the caller's record.

    The request schema has no role, email or status fields, so this path can
    never change authorization state. display_name follows first/last name.
    """
    record = get_own_profile(db, caller)
    fields = changes.model_dump(exclude_unset=True, exclude_none=True)
    first_name = fields.get("first_name", record.first_name)
    last_name = fields.get("last_name", record.last_name)
    if "first_name" in fields or "last_name" in fields:
        fields["display_name"] = f"{first_name} {last_name}".strip() or (record.email or "")
    fields["profile_complete"] = True
    try:
        record = role_store.upsert_user_record(db, caller.uid, **fields)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(record)
    events.record(
        EventType.PROFILE_UPDATE,
        user_id=caller.uid,
        email=caller.email,
        description="Updated own profile",
        details={"fields": sorted(k for k in fields if k != "profile_complete")},
    )
    return record


def deactivate_own_profile(
    db: Session,
    events: SystemEventLog,
    caller: CallerIdentity,
) -> UserRecord:
    """Mark the caller's record inactive. The account and role are kept."""
    get_own_profile(db, caller)
    try:
        record = role_store.upsert_user_record(
            db,
            caller.uid,
            is_active=False,
            deactivated_at=datetime.now(UTC),
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(record)
    events.record(
        EventType.PROFILE_DEACTIVATED,
        user_id=caller.uid,
        email=caller.email,
        description="Deactivated own profile",
    )
    return record
