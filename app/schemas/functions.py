"""Request/response schemas for the callable admin functions.

Request fields are optional at the transport layer: authentication and
authorization run before structural validation, so a non-admin sending an
empty body gets permission-denied rather than a validation error.
"""

from pydantic import BaseModel, Field

from app.schemas.profile import UserRecordOut


class SetUserRoleRequest(BaseModel):
    uid: str | None = None
    role: str | None = None
    note: str | None = Field(default=None, max_length=1000)


class CreateUserWithRoleRequest(BaseModel):
    email: str | None = None
    password: str | None = None
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    role: str | None = None
    department: str | None = None

    class Config:
        populate_by_name = True


class DeleteUserRequest(BaseModel):
    uid: str | None = None


class SetUserActiveRequest(BaseModel):
    uid: str | None = None
    is_active: bool | None = Field(default=None, alias="isActive")

    class Config:
        populate_by_name = True


class SetUserDepartmentRequest(BaseModel):
    uid: str | None = None
    department: str | None = None


class MutationResponse(BaseModel):
    """Result of a role or status change."""

    success: bool = True
    message: str | None = None


class CreateUserResponse(BaseModel):
    """Result of createUserWithRole."""

    success: bool = True
    uid: str


class DeleteUserResponse(BaseModel):
    """Result of deleteUserCompletely / deleteSelf."""

    success: bool = True


class UsersListResponse(BaseModel):
    """Result of getUsers: every Role Store record keyed by uid."""

    users: list[UserRecordOut]
