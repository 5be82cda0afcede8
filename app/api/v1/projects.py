"""Project tracker endpoints. Reading needs a session; writing needs admin or executive."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.v1.auth import require_roles
from app.core.database import get_db
from app.schemas.auth import CallerIdentity
from app.schemas.content import ProjectCreate, ProjectOut, ProjectUpdate
from app.services.event_log import SystemEventLog, get_event_log
from app.services.projects import (
    ProjectNotFoundError,
    create_project,
    delete_project,
    list_projects,
    update_project,
)
from app.services.rbac import Role

router = APIRouter()

AnyCaller = Annotated[CallerIdentity, Depends(require_roles())]
Editor = Annotated[CallerIdentity, Depends(require_roles(Role.ADMIN, Role.EXECUTIVE))]


@router.get("", response_model=list[ProjectOut])
def get_projects(_caller: AnyCaller, db: Annotated[Session, Depends(get_db)]) -> list[ProjectOut]:
    return [ProjectOut.model_validate(p) for p in list_projects(db)]


@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def post_project(
    body: ProjectCreate,
    caller: Editor,
    db: Annotated[Session, Depends(get_db)],
    events: Annotated[SystemEventLog, Depends(get_event_log)],
) -> ProjectOut:
    return ProjectOut.model_validate(create_project(db, events, caller, body))


@router.patch("/{project_id}", response_model=ProjectOut)
def patch_project(
    project_id: int,
    body: ProjectUpdate,
    caller: Editor,
    db: Annotated[Session, Depends(get_db)],
    events: Annotated[SystemEventLog, Depends(get_event_log)],
) -> ProjectOut:
    try:
        project = update_project(db, events, caller, project_id, body)
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found.") from e
    return ProjectOut.model_validate(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_project(
    project_id: int,
    caller: Editor,
    db: Annotated[Session, Depends(get_db)],
    events: Annotated[SystemEventLog, Depends(get_event_log)],
) -> None:
    try:
        delete_project(db, events, caller, project_id)
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found.") from e
