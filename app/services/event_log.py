"""System event log: best-effort activity trail written in its own session.

record() never raises. A failed write is reported as a warning and the
operation that triggered it carries on.
"""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from sqlalchemy.orm import Session

from app.core.database import SessionLocal
from app.models import SystemLogEntry

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 100
MAX_LIST_LIMIT = 1000


class EventType(str, Enum):
    SIGNUP = "signup"
    LOGIN = "login"
    LOGOUT = "logout"
    ROLE_CHANGE = "role_change"
    USER_CREATED = "user_created"
    USER_DELETED = "user_deleted"
    STATUS_CHANGE = "status_change"
    PROFILE_UPDATE = "profile_update"
    PROFILE_DEACTIVATED = "profile_deactivated"
    PROFILE_DELETED = "profile_deleted"
    ANNOUNCEMENT_CREATE = "announcement_create"
    PROJECT_CREATE = "project_create"
    PROJECT_UPDATE = "project_update"
    PROJECT_DELETE = "project_delete"
    PASSWORD_RESET_REQUESTED = "password_reset_requested"


class SystemEventLog:
    """Writes SystemLogEntry rows through a fresh session from session_factory."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def record(
        self,
        event_type: EventType,
        *,
        user_id: str | None = None,
        target_user_id: str | None = None,
        email: str | None = None,
        description: str = "",
        details: dict[str, Any] | None = None,
    ) -> bool:
        """Append one event. Returns False (and logs a warning) if the write failed."""
        try:
            session = self._session_factory()
        except Exception as e:
            logger.warning("Failed to log system event %s: %s", event_type.value, e)
            return False
        try:
            session.add(
                SystemLogEntry(
                    type=event_type.value,
                    user_id=user_id,
                    target_user_id=target_user_id,
                    email=email,
                    description=description,
                    details=details,
                )
            )
            session.commit()
            return True
        except Exception as e:
            logger.warning("Failed to log system event %s: %s", event_type.value, e)
            session.rollback()
            return False
        finally:
            session.close()


def get_event_log() -> SystemEventLog:
    """Dependency: event log writing through the application's session factory."""
    return SystemEventLog(SessionLocal)


def list_system_events(
    db: Session,
    event_type: str | None = None,
    limit: int = DEFAULT_LIST_LIMIT,
) -> list[SystemLogEntry]:
    """Return events newest first, optionally filtered by type."""
    limit = max(1, min(limit, MAX_LIST_LIMIT))
    query = db.query(SystemLogEntry)
    if event_type:
        query = query.filter(SystemLogEntry.type == event_type)
    return query.order_by(SystemLogEntry.id.desc()).limit(limit).all()
