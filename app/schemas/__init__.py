"""Pydantic request/response schemas."""

from app.schemas.audit import (
    RoleAuditEntryOut,
    RoleAuditListResponse,
    SystemLogEntryOut,
    SystemLogListResponse,
)
from app.schemas.auth import (
    AcceptedResponse,
    CallerIdentity,
    LoginRequest,
    PasswordResetRequest,
    SignupRequest,
    TokenResponse,
)
from app.schemas.content import (
    AnnouncementCreate,
    AnnouncementOut,
    NotificationOut,
    ProjectCreate,
    ProjectOut,
    ProjectUpdate,
)
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
from app.schemas.health import HealthResponse
from app.schemas.profile import DEPARTMENTS, ProfileUpdateRequest, UserRecordOut
from app.schemas.session import RouteDecisionResponse, SessionResponse

__all__ = [
    "AcceptedResponse",
    "AnnouncementCreate",
    "AnnouncementOut",
    "CallerIdentity",
    "CreateUserResponse",
    "CreateUserWithRoleRequest",
    "DEPARTMENTS",
    "DeleteUserRequest",
    "DeleteUserResponse",
    "HealthResponse",
    "LoginRequest",
    "MutationResponse",
    "NotificationOut",
    "PasswordResetRequest",
    "ProfileUpdateRequest",
    "ProjectCreate",
    "ProjectOut",
    "ProjectUpdate",
    "RoleAuditEntryOut",
    "RoleAuditListResponse",
    "RouteDecisionResponse",
    "SessionResponse",
    "SetUserActiveRequest",
    "SetUserDepartmentRequest",
    "SetUserRoleRequest",
    "SignupRequest",
    "SystemLogEntryOut",
    "SystemLogListResponse",
    "TokenResponse",
    "UserRecordOut",
]
