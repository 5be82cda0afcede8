"""Schemas for Role Store records and self-service profile edits."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

# Fixed set of organisation departments; empty string means unassigned.
DEPARTMENTS = (
    "Media Relations & Creatives",
    "Events & Logistics",
    "Student Services & Academics",
    "Social Engagement & External Affairs",
    "Recreation & Sports",
)


def is_valid_department(value: str | None) -> bool:
    """True for an empty/absent department or one of DEPARTMENTS."""
    return not value or value in DEPARTMENTS


class UserRecordOut(BaseModel):
    """Full Role Store record. No field-level redaction is applied."""

    uid: str
    email: str | None = None
    first_name: str = ""
    last_name: str = ""
    display_name: str = ""
    role: str
    department: str = ""
    is_active: bool = True
    profile_complete: bool = False
    phone: str = ""
    birthday: str = ""
    position: str = ""
    location: str = ""
    bio: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_login_at: datetime | None = None
    deactivated_at: datetime | None = None

    class Config:
        from_attributes = True


class ProfileUpdateRequest(BaseModel):
    """Fields a user may change on their own record. Role, email and status are not accepted."""

    first_name: str | None = Field(default=None, min_length=1, max_length=255)
    last_name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = Field(default=None, max_length=64)
    birthday: str | None = Field(default=None, max_length=32)
    position: str | None = Field(default=None, max_length=255)
    department: str | None = Field(default=None, max_length=255)
    location: str | None = Field(default=None, max_length=255)
    bio: str | None = Field(default=None, max_length=5000)

    class Config:
        extra = "forbid"

    @field_validator("department")
    @classmethod
    def validate_department(cls, v: str | None) -> str | None:
        if not is_valid_department(v):
            raise ValueError(f"department must be one of: {', '.join(DEPARTMENTS)}")
        return v
