"""Read-only audit endpoints (admin only): role changes and system events."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.auth import get_optional_caller
from app.core.database import get_db
from app.schemas.audit import (
    RoleAuditEntryOut,
    RoleAuditListResponse,
    SystemLogEntryOut,
    SystemLogListResponse,
)
from app.schemas.auth import CallerIdentity
from app.services.audit import list_role_changes
from app.services.event_log import list_system_events
from app.services.rbac import Action, authorize

router = APIRouter()

Caller = Annotated[CallerIdentity | None, Depends(get_optional_caller)]


@router.get("/role-changes", response_model=RoleAuditListResponse)
def get_role_changes(
    caller: Caller,
    db: Annotated[Session, Depends(get_db)],
    target_user_id: str | None = None,
    limit: Annotated[int, Query(ge=1, le=1000)] = 100,
) -> RoleAuditListResponse:
    """Role audit entries, newest first."""
    authorize(db, caller, Action.READ_AUDIT)
    entries = list_role_changes(db, target_user_id=target_user_id, limit=limit)
    return RoleAuditListResponse(entries=[RoleAuditEntryOut.model_validate(e) for e in entries])


@router.get("/system-logs", response_model=SystemLogListResponse)
def get_system_logs(
    caller: Caller,
    db: Annotated[Session, Depends(get_db)],
    event_type: Annotated[str | None, Query(alias="type", max_length=64)] = None,
    limit: Annotated[int, Query(ge=1, le=1000)] = 100,
) -> SystemLogListResponse:
    """System events, newest first, optionally filtered by type."""
    authorize(db, caller, Action.READ_AUDIT)
    entries = list_system_events(db, event_type=event_type, limit=limit)
    return SystemLogListResponse(entries=[SystemLogEntryOut.model_validate(e) for e in entries])
