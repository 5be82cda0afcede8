"""Announcements (admin/executive post, everyone reads) and the caller's notification inbox."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.v1.auth import require_roles
from app.core.database import get_db
from app.schemas.auth import CallerIdentity
from app.schemas.content import AnnouncementCreate, AnnouncementOut, NotificationOut
from app.services.announcements import (
    NotificationNotFoundError,
    create_announcement,
    list_announcements,
    list_notifications,
    mark_notification_read,
)
from app.services.event_log import SystemEventLog, get_event_log
from app.services.rbac import Role, resolve_role

router = APIRouter()
notifications_router = APIRouter()

AnyCaller = Annotated[CallerIdentity, Depends(require_roles())]
Author = Annotated[CallerIdentity, Depends(require_roles(Role.ADMIN, Role.EXECUTIVE))]


@router.get("", response_model=list[AnnouncementOut])
def get_announcements(
    _caller: AnyCaller,
    db: Annotated[Session, Depends(get_db)],
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
) -> list[AnnouncementOut]:
    return [AnnouncementOut.model_validate(a) for a in list_announcements(db, limit=limit)]


@router.post("", response_model=AnnouncementOut, status_code=status.HTTP_201_CREATED)
def post_announcement(
    body: AnnouncementCreate,
    caller: Author,
    db: Annotated[Session, Depends(get_db)],
    events: Annotated[SystemEventLog, Depends(get_event_log)],
) -> AnnouncementOut:
    """Post an announcement and notify every member and executive."""
    role = resolve_role(db, caller.uid)
    return AnnouncementOut.model_validate(create_announcement(db, events, caller, role, body))


@notifications_router.get("", response_model=list[NotificationOut])
def get_notifications(
    caller: AnyCaller,
    db: Annotated[Session, Depends(get_db)],
    unread_only: bool = False,
) -> list[NotificationOut]:
    return [NotificationOut.model_validate(n) for n in list_notifications(db, caller, unread_only)]


@notifications_router.post("/{notification_id}/read", response_model=NotificationOut)
def read_notification(
    notification_id: int,
    caller: AnyCaller,
    db: Annotated[Session, Depends(get_db)],
) -> NotificationOut:
    try:
        notification = mark_notification_read(db, caller, notification_id)
    except NotificationNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found.") from e
    return NotificationOut.model_validate(notification)
