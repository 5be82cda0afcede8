"""Role-based access control: role resolution and permission decisions.

The caller's role is always read from the Role Store at decision time. Roles
carried in identity tokens or sent by the client are never trusted.
"""

import logging
from enum import Enum

from sqlalchemy.orm import Session

from app.core.errors import CallableError, ErrorKind
from app.models import UserRecord
from app.schemas.auth import CallerIdentity

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """The single authorization dimension. Exactly one per user."""

    MEMBER = "member"
    EXECUTIVE = "executive"
    ADMIN = "admin"


ALLOWED_ROLES: tuple[str, ...] = tuple(r.value for r in Role)
DEFAULT_ROLE = Role.MEMBER


class Action(str, Enum):
    """Privileged operations decided by authorize()."""

    SET_ROLE = "set_role"
    CREATE_USER = "create_user"
    DELETE_USER = "delete_user"
    LIST_USERS = "list_users"
    SET_ACTIVE = "set_active"
    SET_DEPARTMENT = "set_department"
    READ_AUDIT = "read_audit"


DENIAL_MESSAGES: dict[Action, str] = {
    Action.SET_ROLE: "Only administrators can change user roles.",
    Action.CREATE_USER: "Only admins can create users.",
    Action.DELETE_USER: "Only admins can delete other users.",
    Action.LIST_USERS: "Only administrators can view all users.",
    Action.SET_ACTIVE: "Only administrators can change account status.",
    Action.SET_DEPARTMENT: "Only administrators can change user departments.",
    Action.READ_AUDIT: "Only administrators can view audit logs.",
}

UNAUTHENTICATED_MESSAGE = "User must be authenticated to call this function."


def parse_role(value: object) -> Role | None:
    """Return the Role for value, or None when it is not an allowed role."""
    if not isinstance(value, str):
        return None
    try:
        return Role(value)
    except ValueError:
        return None


def validate_role(value: object) -> Role:
    """Return the Role for value or raise invalid-argument."""
    role = parse_role(value)
    if role is None:
        raise CallableError(
            ErrorKind.INVALID_ARGUMENT,
            f"Role must be one of: {', '.join(ALLOWED_ROLES)}",
        )
    return role


def resolve_role(db: Session, uid: str) -> Role:
    """Read uid's role from the Role Store. Absent record or unknown value -> member."""
    record = db.get(UserRecord, uid)
    if record is None:
        return DEFAULT_ROLE
    role = parse_role(record.role)
    if role is None:
        logger.warning("Unrecognised role %r stored for uid=%s; treating as member", record.role, uid)
        return DEFAULT_ROLE
    return role


def require_authenticated(caller: CallerIdentity | None) -> CallerIdentity:
    """Return caller or raise unauthenticated."""
    if caller is None:
        raise CallableError(ErrorKind.UNAUTHENTICATED, UNAUTHENTICATED_MESSAGE)
    return caller


def authorize(
    db: Session,
    caller: CallerIdentity | None,
    action: Action,
    target_uid: str | None = None,
) -> Role:
    """
    Permit or deny caller performing action on target_uid.

    Precedence: unauthenticated callers are rejected; deleting one's own account
    is always permitted; every other action requires the admin role as stored
    in the Role Store. Returns the caller's resolved role when permitted.
    """
    caller = require_authenticated(caller)
    role = resolve_role(db, caller.uid)
    if action is Action.DELETE_USER and target_uid is not None and target_uid == caller.uid:
        return role
    if role is not Role.ADMIN:
        logger.info(
            "Permission denied",
            extra={"uid": caller.uid, "action": action.value, "resolved_role": role.value},
        )
        raise CallableError(ErrorKind.PERMISSION_DENIED, DENIAL_MESSAGES[action])
    return role
