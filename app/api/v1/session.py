"""Session endpoints: fresh role resolution and route decisions for the presentation layer."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_caller, get_optional_caller
from app.core.database import get_db
from app.schemas.auth import CallerIdentity
from app.schemas.session import RouteDecisionResponse, SessionResponse
from app.services.rbac import resolve_role
from app.services.route_guard import decide_route, normalize_path

router = APIRouter()


@router.get("", response_model=SessionResponse)
def read_session(
    caller: Annotated[CallerIdentity, Depends(get_current_caller)],
    db: Annotated[Session, Depends(get_db)],
) -> SessionResponse:
    """Return the caller with their role as currently stored. Clients must not cache it as truth."""
    role = resolve_role(db, caller.uid)
    return SessionResponse(uid=caller.uid, email=caller.email, role=role.value)


@router.get("/route", response_model=RouteDecisionResponse)
def read_route_decision(
    caller: Annotated[CallerIdentity | None, Depends(get_optional_caller)],
    db: Annotated[Session, Depends(get_db)],
    path: Annotated[str, Query(min_length=1, max_length=2048)],
) -> RouteDecisionResponse:
    """Decide whether path may render: allowed, or redirect to /login or /dashboard."""
    role = resolve_role(db, caller.uid) if caller is not None else None
    decision = decide_route(path, authenticated=caller is not None, role=role)
    return RouteDecisionResponse(
        path=normalize_path(path),
        allowed=decision.allowed,
        redirect_to=decision.redirect_to,
    )
