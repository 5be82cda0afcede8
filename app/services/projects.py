"""Project tracker: plain CRUD with activity events."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import Project
from app.schemas.auth import CallerIdentity
from app.schemas.content import ProjectCreate, ProjectUpdate
from app.services.event_log import EventType, SystemEventLog


class ProjectNotFoundError(Exception):
    """Raised when a project id does not exist."""


def list_projects(db: Session) -> list[Project]:
    return db.query(Project).order_by(Project.created_at.desc(), Project.id.desc()).all()


def get_project(db: Session, project_id: int) -> Project:
    project = db.get(Project, project_id)
    if project is None:
        raise ProjectNotFoundError(project_id)
    return project


def create_project(
    db: Session, events: SystemEventLog, caller: CallerIdentity, body: ProjectCreate
) -> Project:
    project = Project(**body.model_dump(), progress=0, created_by=caller.uid)
    db.add(project)
    db.commit()
    db.refresh(project)
    events.record(
        EventType.PROJECT_CREATE,
        user_id=caller.uid,
        email=caller.email,
        description=project.name,
        details={"projectId": project.id},
    )
    return project


def update_project(
    db: Session,
    events: SystemEventLog,
    caller: CallerIdentity,
    project_id: int,
    body: ProjectUpdate,
) -> Project:
    project = get_project(db, project_id)
    for name, value in body.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(project, name, value)
    project.updated_at = func.now()
    db.commit()
    db.refresh(project)
    events.record(
        EventType.PROJECT_UPDATE,
        user_id=caller.uid,
        email=caller.email,
        description=project.name,
        details={"projectId": project.id},
    )
    return project


def delete_project(
    db: Session, events: SystemEventLog, caller: CallerIdentity, project_id: int
) -> None:
    project = get_project(db, project_id)
    db.delete(project)
    db.commit()
    events.record(
        EventType.PROJECT_DELETE,
        user_id=caller.uid,
        email=caller.email,
        description=str(project_id),
        details={"projectId": project_id},
    )
