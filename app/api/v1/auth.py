"""Sign-up, sign-in and sign-out, plus caller dependencies (get_optional_caller, require_roles)."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.security import create_access_token, decode_access_token
from app.schemas.auth import (
    AcceptedResponse,
    CallerIdentity,
    LoginRequest,
    PasswordResetRequest,
    SignupRequest,
    TokenResponse,
)
from app.services import role_store
from app.services.access_gate import AccessTokenError, require_access_token
from app.services.event_log import EventType, SystemEventLog, get_event_log
from app.services.identity import EmailAlreadyExistsError, IdentityError, IdentityProvider
from app.services.rbac import DEFAULT_ROLE, Role, resolve_role

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)


def _check_gate(access_token: str) -> None:
    try:
        require_access_token(access_token, get_settings())
    except AccessTokenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message) from e


def get_optional_caller(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CallerIdentity | None:
    """Dependency: the caller behind a valid Bearer token, or None. Disabled or deleted identities are None."""
    if credentials is None:
        return None
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        return None
    sub = payload.get("sub")
    if not sub or not isinstance(sub, str):
        return None
    identity = IdentityProvider(db).find_user(sub)
    if identity is None or identity.disabled:
        return None
    return CallerIdentity(uid=identity.uid, email=identity.email)


def get_current_caller(
    caller: Annotated[CallerIdentity | None, Depends(get_optional_caller)],
) -> CallerIdentity:
    """Dependency: require an authenticated caller. Raises 401 otherwise."""
    if caller is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return caller


def require_roles(*roles: Role) -> Callable[..., CallerIdentity]:
    """
    Dependency factory: require an authenticated caller whose Role Store role is in roles.
    With no roles, any authenticated caller passes. Raises 401 / 403.
    """
    allowed = frozenset(roles)

    def dependency(
        caller: Annotated[CallerIdentity, Depends(get_current_caller)],
        db: Annotated[Session, Depends(get_db)],
    ) -> CallerIdentity:
        if allowed and resolve_role(db, caller.uid) not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You do not have permission to access this resource.",
            )
        return caller

    return dependency


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def signup(
    body: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
    events: Annotated[SystemEventLog, Depends(get_event_log)],
) -> TokenResponse:
    """
    Register a new member. Requires the organisation access token.
    New accounts always start as 'member'; only an admin can grant other roles.
    """
    _check_gate(body.access_token)

    provider = IdentityProvider(db)
    first_name = body.first_name.strip()
    last_name = body.last_name.strip()
    display_name = f"{first_name} {last_name}".strip()
    try:
        identity = provider.create_user(body.email, body.password, display_name)
        provider.set_custom_claims(identity.uid, {"role": DEFAULT_ROLE.value})
    except EmailAlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    except IdentityError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message) from e

    role_store.upsert_user_record(
        db,
        identity.uid,
        email=identity.email,
        first_name=first_name,
        last_name=last_name,
        display_name=display_name or identity.email,
        role=DEFAULT_ROLE.value,
        is_active=True,
        profile_complete=False,
    )
    db.commit()

    events.record(EventType.SIGNUP, user_id=identity.uid, email=identity.email, description="Signed up")
    token = create_access_token(identity.uid, identity.email, identity.custom_claims)
    return TokenResponse(access_token=token, uid=identity.uid, role=DEFAULT_ROLE.value)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    events: Annotated[SystemEventLog, Depends(get_event_log)],
) -> TokenResponse:
    """
    Authenticate with email and password plus the organisation access token.
    Include the returned token in the Authorization header as: Bearer <access_token>
    Identities disabled by an operator get 403.
    """
    _check_gate(body.access_token)

    identity = IdentityProvider(db).authenticate(body.email, body.password)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        )
    if identity.disabled:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This account has been disabled.",
        )

    # First sign-in without a Role Store record gets the default role.
    if role_store.get_user_record(db, identity.uid) is None:
        role_store.upsert_user_record(
            db,
            identity.uid,
            email=identity.email,
            display_name=identity.display_name or identity.email,
            role=DEFAULT_ROLE.value,
        )
    role_store.upsert_user_record(db, identity.uid, last_login_at=datetime.now(UTC))
    db.commit()

    role = resolve_role(db, identity.uid)
    events.record(EventType.LOGIN, user_id=identity.uid, email=identity.email, description="Logged in")
    token = create_access_token(identity.uid, identity.email, identity.custom_claims)
    return TokenResponse(access_token=token, uid=identity.uid, role=role.value)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    caller: Annotated[CallerIdentity, Depends(get_current_caller)],
    events: Annotated[SystemEventLog, Depends(get_event_log)],
) -> None:
    """Record the sign-out. Tokens are stateless; the client discards its copy."""
    events.record(EventType.LOGOUT, user_id=caller.uid, email=caller.email, description="Logged out")


@router.post("/password-reset", response_model=AcceptedResponse, status_code=status.HTTP_202_ACCEPTED)
def request_password_reset(
    body: PasswordResetRequest,
    db: Annotated[Session, Depends(get_db)],
    events: Annotated[SystemEventLog, Depends(get_event_log)],
) -> AcceptedResponse:
    """Record a reset request. Always 202 so the response does not reveal which emails exist."""
    identity = IdentityProvider(db).find_user_by_email(body.email)
    if identity is not None:
        events.record(
            EventType.PASSWORD_RESET_REQUESTED,
            user_id=identity.uid,
            email=identity.email,
            description="Password reset requested",
            details={"resetUrl": get_settings().PASSWORD_RESET_URL},
        )
    else:
        logger.info("Password reset requested for unknown email")
    return AcceptedResponse()
