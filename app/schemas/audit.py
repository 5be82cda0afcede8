"""Schemas for reading the role audit trail and system event log (admin only)."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class RoleAuditEntryOut(BaseModel):
    id: int
    target_user_id: str
    changed_by: str
    changed_by_email: str = ""
    old_role: str
    new_role: str
    note: str = ""
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class SystemLogEntryOut(BaseModel):
    id: int
    type: str
    user_id: str | None = None
    target_user_id: str | None = None
    email: str | None = None
    description: str = ""
    details: dict[str, Any] | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class RoleAuditListResponse(BaseModel):
    entries: list[RoleAuditEntryOut]


class SystemLogListResponse(BaseModel):
    entries: list[SystemLogEntryOut]
