"""ORM models for the append-only role audit trail and system event log."""

from sqlalchemy import JSON, Column, DateTime, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB

from app.models.base import Base


class RoleAuditEntry(Base):
    """
    One row per role change. Rows are never updated or deleted.

    old_role is 'unknown' when the prior role could not be read.
    """

    __tablename__ = "role_audit"

    id = Column(Integer, primary_key=True, autoincrement=True)
    target_user_id = Column(String(128), nullable=False, index=True)
    changed_by = Column(String(128), nullable=False)
    changed_by_email = Column(String(255), nullable=False, default="")
    old_role = Column(String(32), nullable=False)
    new_role = Column(String(32), nullable=False)
    note = Column(Text, nullable=False, default="")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )


class SystemLogEntry(Base):
    """Best-effort activity trail (logins, profile edits, admin actions)."""

    __tablename__ = "system_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(64), nullable=False, index=True)
    user_id = Column(String(128), nullable=True, index=True)
    target_user_id = Column(String(128), nullable=True, index=True)
    email = Column(String(255), nullable=True)
    description = Column(Text, nullable=False, default="")
    details = Column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
