"""Announcements and the per-user notification inbox they fan out to."""

import logging

from sqlalchemy.orm import Session

from app.models import Announcement, Notification, UserRecord
from app.schemas.auth import CallerIdentity
from app.schemas.content import AnnouncementCreate
from app.services.event_log import EventType, SystemEventLog
from app.services.rbac import Role

logger = logging.getLogger(__name__)

# Roles that receive a notification when an announcement is posted.
NOTIFIED_ROLES = (Role.MEMBER.value, Role.EXECUTIVE.value)


class NotificationNotFoundError(Exception):
    """Raised when a notification does not exist or belongs to someone else."""


def list_announcements(db: Session, limit: int = 50) -> list[Announcement]:
    return (
        db.query(Announcement)
        .order_by(Announcement.created_at.desc(), Announcement.id.desc())
        .limit(limit)
        .all()
    )


def create_announcement(
    db: Session,
    events: SystemEventLog,
    caller: CallerIdentity,
    author_role: Role,
    body: AnnouncementCreate,
) -> Announcement:
    """Store the announcement and one unread notification per active member/executive except the author."""
    author = db.get(UserRecord, caller.uid)
    author_name = (author.display_name if author is not None else "") or caller.email
    announcement = Announcement(
        title=body.title,
        content=body.content,
        created_by=caller.uid,
        created_by_name=author_name,
        author_role=author_role.value,
    )
    db.add(announcement)
    recipients = (
        db.query(UserRecord.uid)
        .filter(
            UserRecord.role.in_(NOTIFIED_ROLES),
            UserRecord.is_active.is_(True),
            UserRecord.uid != caller.uid,
        )
        .all()
    )
    for (recipient_uid,) in recipients:
        db.add(
            Notification(
                user_id=recipient_uid,
                title=body.title,
                content=body.content,
                type="announcement",
                read=False,
                created_by=caller.uid,
            )
        )
    db.commit()
    db.refresh(announcement)
    logger.info(
        "Announcement created",
        extra={"announcement_id": announcement.id, "recipient_count": len(recipients)},
    )
    label = "Admin" if author_role is Role.ADMIN else "Executive"
    events.record(
        EventType.ANNOUNCEMENT_CREATE,
        user_id=caller.uid,
        email=caller.email,
        description=f"{label} {caller.email} created announcement: {announcement.title}",
        details={"announcementId": announcement.id, "recipients": len(recipients)},
    )
    return announcement


def list_notifications(db: Session, caller: CallerIdentity, unread_only: bool = False) -> list[Notification]:
    query = db.query(Notification).filter(Notification.user_id == caller.uid)
    if unread_only:
        query = query.filter(Notification.read.is_(False))
    return query.order_by(Notification.id.desc()).all()


def mark_notification_read(db: Session, caller: CallerIdentity, notification_id: int) -> Notification:
    notification = db.get(Notification, notification_id)
    if notification is None or notification.user_id != caller.uid:
        raise NotificationNotFoundError(notification_id)
    notification.read = True
    db.commit()
    db.refresh(notification)
    return notification
