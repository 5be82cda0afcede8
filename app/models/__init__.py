"""SQLAlchemy ORM models."""

from app.models.audit import RoleAuditEntry, SystemLogEntry
from app.models.base import Base
from app.models.content import Announcement, Notification, Project
from app.models.identity import Identity
from app.models.user import UserRecord

__all__ = [
    "Announcement",
    "Base",
    "Identity",
    "Notification",
    "Project",
    "RoleAuditEntry",
    "SystemLogEntry",
    "UserRecord",
]
