"""Self-service profile endpoints for the signed-in user."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_caller
from app.core.database import get_db
from app.schemas.auth import CallerIdentity
from app.schemas.functions import DeleteUserResponse
from app.schemas.profile import ProfileUpdateRequest, UserRecordOut
from app.services.event_log import EventType, SystemEventLog, get_event_log
from app.services.profile import (
    ProfileNotFoundError,
    deactivate_own_profile,
    get_own_profile,
    update_own_profile,
)
from app.services.role_mutation import RoleMutationService

router = APIRouter()

PROFILE_NOT_FOUND = "Profile not found."


@router.get("/me", response_model=UserRecordOut)
def read_own_profile(
    caller: Annotated[CallerIdentity, Depends(get_current_caller)],
    db: Annotated[Session, Depends(get_db)],
) -> UserRecordOut:
    try:
        return UserRecordOut.model_validate(get_own_profile(db, caller))
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PROFILE_NOT_FOUND) from e


@router.patch("/me", response_model=UserRecordOut)
def edit_own_profile(
    body: ProfileUpdateRequest,
    caller: Annotated[CallerIdentity, Depends(get_current_caller)],
    db: Annotated[Session, Depends(get_db)],
    events: Annotated[SystemEventLog, Depends(get_event_log)],
) -> UserRecordOut:
    """Edit non-role profile fields. role, email and is_active are rejected with 422."""
    try:
        record = update_own_profile(db, events, caller, body)
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PROFILE_NOT_FOUND) from e
    return UserRecordOut.model_validate(record)


@router.post("/me/deactivate", response_model=UserRecordOut)
def deactivate_profile(
    caller: Annotated[CallerIdentity, Depends(get_current_caller)],
    db: Annotated[Session, Depends(get_db)],
    events: Annotated[SystemEventLog, Depends(get_event_log)],
) -> UserRecordOut:
    """Mark the caller inactive without deleting the account."""
    try:
        record = deactivate_own_profile(db, events, caller)
    except ProfileNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=PROFILE_NOT_FOUND) from e
    return UserRecordOut.model_validate(record)


@router.delete("/me", response_model=DeleteUserResponse)
def delete_own_profile(
    caller: Annotated[CallerIdentity, Depends(get_current_caller)],
    db: Annotated[Session, Depends(get_db)],
    events: Annotated[SystemEventLog, Depends(get_event_log)],
) -> DeleteUserResponse:
    """Permanently delete the caller's account (same as the deleteSelf function)."""
    result = RoleMutationService(db, events).delete_self(caller)
    events.record(
        EventType.PROFILE_DELETED,
        user_id=caller.uid,
        email=caller.email,
        description="Deleted own profile",
    )
    return result
