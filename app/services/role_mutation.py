"""Privileged user operations: role changes, account creation and deletion, user listing.

Every operation authorizes first and validates second, before touching any
backend. Role state lives in two places (identity claims and the Role Store);
a failure in either write fails the whole operation. System events are
written afterwards on a best-effort basis.
"""

import logging
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import CallableError, ErrorKind
from app.schemas.auth import CallerIdentity
from app.schemas.functions import (
    CreateUserResponse,
    DeleteUserResponse,
    MutationResponse,
    UsersListResponse,
)
from app.schemas.profile import DEPARTMENTS, UserRecordOut, is_valid_department
from app.services import audit, role_store
from app.services.event_log import EventType, SystemEventLog
from app.services.identity import IdentityProvider
from app.services.rbac import (
    DEFAULT_ROLE,
    Action,
    authorize,
    require_authenticated,
    validate_role,
)

logger = logging.getLogger(__name__)


def _internal_error(message: str, exc: Exception) -> CallableError:
    """Build an internal error carrying the backend message. Call from an except block."""
    logger.exception("%s %s", message, exc)
    return CallableError(ErrorKind.INTERNAL, message, details=str(exc))


def _invalid_department() -> CallableError:
    return CallableError(
        ErrorKind.INVALID_ARGUMENT,
        f"Department must be one of: {', '.join(DEPARTMENTS)}",
    )


class RoleMutationService:
    """Callable admin operations bound to one request's session and backends."""

    def __init__(
        self,
        db: Session,
        events: SystemEventLog,
        identity: IdentityProvider | None = None,
    ) -> None:
        self.db = db
        self.events = events
        self.identity = identity or IdentityProvider(db)

    def _prior_role(self, uid: str) -> str:
        """Role currently stored for uid, or 'unknown' if it cannot be read."""
        try:
            return role_store.get_stored_role(self.db, uid) or audit.UNKNOWN_ROLE
        except SQLAlchemyError as e:
            logger.warning("Could not read prior role for uid=%s: %s", uid, e)
            self.db.rollback()
            return audit.UNKNOWN_ROLE

    def set_user_role(
        self,
        caller: CallerIdentity | None,
        uid: str | None,
        role: str | None,
        note: str | None = None,
    ) -> MutationResponse:
        """Set uid's role in both the identity claims and the Role Store, and audit it."""
        caller = require_authenticated(caller)
        authorize(self.db, caller, Action.SET_ROLE)
        if not uid or not role:
            raise CallableError(ErrorKind.INVALID_ARGUMENT, "Both uid and role are required.")
        new_role = validate_role(role)

        old_role = self._prior_role(uid)

        try:
            self.identity.set_custom_claims(uid, {"role": new_role.value})
        except Exception as e:
            raise _internal_error("Failed to update user role.", e) from e

        try:
            role_store.upsert_user_record(self.db, uid, role=new_role.value)
            audit.append_role_change(
                self.db,
                target_user_id=uid,
                changed_by=caller.uid,
                changed_by_email=caller.email,
                old_role=old_role,
                new_role=new_role.value,
                note=note or "",
            )
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            raise _internal_error("Failed to update user role.", e) from e

        logger.info(
            "User role changed",
            extra={
                "target_uid": uid,
                "changed_by": caller.uid,
                "old_role": old_role,
                "new_role": new_role.value,
            },
        )
        self.events.record(
            EventType.ROLE_CHANGE,
            user_id=caller.uid,
            target_user_id=uid,
            email=caller.email,
            description=f"Role changed from {old_role} to {new_role.value}",
            details={"oldRole": old_role, "newRole": new_role.value},
        )
        return MutationResponse(success=True, message=f"User role updated to {new_role.value}")

    def create_user_with_role(
        self,
        caller: CallerIdentity | None,
        email: str | None,
        password: str | None,
        first_name: str | None = None,
        last_name: str | None = None,
        role: str | None = None,
        department: str | None = None,
    ) -> CreateUserResponse:
        """Create an identity with a role claim and its Role Store record."""
        caller = require_authenticated(caller)
        authorize(self.db, caller, Action.CREATE_USER)
        if not email or not password:
            raise CallableError(ErrorKind.INVALID_ARGUMENT, "Email and password are required.")
        new_role = validate_role(DEFAULT_ROLE.value if role is None else role)
        if not is_valid_department(department):
            raise _invalid_department()

        first_name = (first_name or "").strip()
        last_name = (last_name or "").strip()
        display_name = f"{first_name} {last_name}".strip() or email.strip()

        try:
            identity = self.identity.create_user(email, password, display_name)
            self.identity.set_custom_claims(identity.uid, {"role": new_role.value})
            new_uid = identity.uid
            role_store.upsert_user_record(
                self.db,
                new_uid,
                email=identity.email,
                first_name=first_name,
                last_name=last_name,
                display_name=display_name,
                role=new_role.value,
                department=department or "",
                is_active=True,
            )
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            raise _internal_error("Failed to create user.", e) from e

        logger.info(
            "User created",
            extra={"target_uid": new_uid, "changed_by": caller.uid, "new_role": new_role.value},
        )
        self.events.record(
            EventType.USER_CREATED,
            user_id=caller.uid,
            target_user_id=new_uid,
            email=caller.email,
            description=f"Created {identity.email} as {new_role.value}",
            details={"roleAssigned": new_role.value},
        )
        return CreateUserResponse(success=True, uid=new_uid)

    def delete_user_completely(
        self,
        caller: CallerIdentity | None,
        uid: str | None,
    ) -> DeleteUserResponse:
        """
        Delete uid's Role Store record and identity. Admins may delete anyone;
        any user may delete themselves.

        Both deletions are attempted even if the first fails; any failure is
        reported, so callers should re-check state after an error.
        """
        caller = require_authenticated(caller)
        if not uid:
            raise CallableError(ErrorKind.INVALID_ARGUMENT, "User ID is required.")
        authorize(self.db, caller, Action.DELETE_USER, target_uid=uid)

        failures: list[str] = []
        try:
            role_store.delete_user_record(self.db, uid)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.exception("Failed to delete Role Store record for uid=%s", uid)
            failures.append(f"role store: {e}")
        try:
            self.identity.delete_user(uid)
        except Exception as e:
            self.db.rollback()
            logger.exception("Failed to delete identity for uid=%s", uid)
            failures.append(f"identity: {e}")
        if failures:
            raise CallableError(ErrorKind.INTERNAL, "Failed to delete user.", details="; ".join(failures))

        logger.info(
            "User deleted",
            extra={"target_uid": uid, "changed_by": caller.uid, "self_delete": uid == caller.uid},
        )
        self.events.record(
            EventType.USER_DELETED,
            user_id=caller.uid,
            target_user_id=uid,
            email=caller.email,
            description="Self-deleted account" if uid == caller.uid else "Deleted user",
        )
        return DeleteUserResponse(success=True)

    def delete_self(self, caller: CallerIdentity | None) -> DeleteUserResponse:
        """Delete the caller's own account."""
        caller = require_authenticated(caller)
        return self.delete_user_completely(caller, caller.uid)

    def get_users(self, caller: CallerIdentity | None) -> UsersListResponse:
        """Return every Role Store record (admin only). No field redaction."""
        caller = require_authenticated(caller)
        authorize(self.db, caller, Action.LIST_USERS)
        try:
            records = role_store.list_user_records(self.db)
        except Exception as e:
            self.db.rollback()
            raise _internal_error("Failed to retrieve users.", e) from e
        return UsersListResponse(users=[UserRecordOut.model_validate(r) for r in records])

    def set_user_active(
        self,
        caller: CallerIdentity | None,
        uid: str | None,
        is_active: bool | None,
    ) -> MutationResponse:
        """Activate or deactivate uid's Role Store record (admin only)."""
        caller = require_authenticated(caller)
        authorize(self.db, caller, Action.SET_ACTIVE)
        if not uid or is_active is None:
            raise CallableError(ErrorKind.INVALID_ARGUMENT, "Both uid and isActive are required.")
        if role_store.get_user_record(self.db, uid) is None:
            raise CallableError(ErrorKind.NOT_FOUND, "User not found.")
        try:
            role_store.upsert_user_record(
                self.db,
                uid,
                is_active=is_active,
                deactivated_at=None if is_active else datetime.now(UTC),
            )
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            raise _internal_error("Failed to update user status.", e) from e

        self.events.record(
            EventType.STATUS_CHANGE,
            user_id=caller.uid,
            target_user_id=uid,
            email=caller.email,
            description="Activated user" if is_active else "Deactivated user",
            details={"isActive": is_active},
        )
        state = "active" if is_active else "inactive"
        return MutationResponse(success=True, message=f"User marked {state}")

    def set_user_department(
        self,
        caller: CallerIdentity | None,
        uid: str | None,
        department: str | None,
    ) -> MutationResponse:
        """Assign uid to a department, or clear it with an empty string (admin only)."""
        caller = require_authenticated(caller)
        authorize(self.db, caller, Action.SET_DEPARTMENT)
        if not uid or department is None:
            raise CallableError(ErrorKind.INVALID_ARGUMENT, "Both uid and department are required.")
        if not is_valid_department(department):
            raise _invalid_department()
        if role_store.get_user_record(self.db, uid) is None:
            raise CallableError(ErrorKind.NOT_FOUND, "User not found.")
        try:
            role_store.upsert_user_record(self.db, uid, department=department)
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            raise _internal_error("Failed to update user department.", e) from e

        self.events.record(
            EventType.PROFILE_UPDATE,
            user_id=caller.uid,
            target_user_id=uid,
            email=caller.email,
            description=f"Department set to {department or 'unassigned'}",
            details={"department": department},
        )
        return MutationResponse(success=True, message="User department updated")
