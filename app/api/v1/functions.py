"""Callable admin functions: POST /functions/<name>.

Errors are raised as CallableError and rendered by the app-level handler as
{"error": {"kind", "message", "details"}}.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import get_optional_caller
from app.core.database import get_db
from app.schemas.auth import CallerIdentity
from app.schemas.functions import (
    CreateUserResponse,
    CreateUserWithRoleRequest,
    DeleteUserRequest,
    DeleteUserResponse,
    MutationResponse,
    SetUserActiveRequest,
    SetUserDepartmentRequest,
    SetUserRoleRequest,
    UsersListResponse,
)
from app.services.event_log import SystemEventLog, get_event_log
from app.services.role_mutation import RoleMutationService

router = APIRouter()

Caller = Annotated[CallerIdentity | None, Depends(get_optional_caller)]


def get_role_mutation_service(
    db: Annotated[Session, Depends(get_db)],
    events: Annotated[SystemEventLog, Depends(get_event_log)],
) -> RoleMutationService:
    return RoleMutationService(db, events)


Service = Annotated[RoleMutationService, Depends(get_role_mutation_service)]


@router.post("/setUserRole", response_model=MutationResponse)
def set_user_role(
    caller: Caller,
    service: Service,
    body: SetUserRoleRequest | None = None,
) -> MutationResponse:
    """Set a user's role (admin only). Updates identity claims and the Role Store, and audits the change."""
    body = body or SetUserRoleRequest()
    return service.set_user_role(caller, body.uid, body.role, body.note)


@router.post("/createUserWithRole", response_model=CreateUserResponse)
def create_user_with_role(
    caller: Caller,
    service: Service,
    body: CreateUserWithRoleRequest | None = None,
) -> CreateUserResponse:
    """Create an account with a role (admin only)."""
    body = body or CreateUserWithRoleRequest()
    return service.create_user_with_role(
        caller,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        role=body.role,
        department=body.department,
    )


@router.post("/deleteUserCompletely", response_model=DeleteUserResponse)
def delete_user_completely(
    caller: Caller,
    service: Service,
    body: DeleteUserRequest | None = None,
) -> DeleteUserResponse:
    """Delete a user's record and identity (admin, or the user themselves)."""
    body = body or DeleteUserRequest()
    return service.delete_user_completely(caller, body.uid)


@router.post("/deleteSelf", response_model=DeleteUserResponse)
def delete_self(caller: Caller, service: Service) -> DeleteUserResponse:
    """Delete the caller's own account."""
    return service.delete_self(caller)


@router.post("/getUsers", response_model=UsersListResponse)
def get_users(caller: Caller, service: Service) -> UsersListResponse:
    """List every Role Store record (admin only)."""
    return service.get_users(caller)


@router.post("/setUserActive", response_model=MutationResponse)
def set_user_active(
    caller: Caller,
    service: Service,
    body: SetUserActiveRequest | None = None,
) -> MutationResponse:
    """Activate or deactivate a user (admin only)."""
    body = body or SetUserActiveRequest()
    return service.set_user_active(caller, body.uid, body.is_active)


@router.post("/setUserDepartment", response_model=MutationResponse)
def set_user_department(
    caller: Caller,
    service: Service,
    body: SetUserDepartmentRequest | None = None,
) -> MutationResponse:
    """Assign a user's department (admin only)."""
    body = body or SetUserDepartmentRequest()
    return service.set_user_department(caller, body.uid, body.department)
