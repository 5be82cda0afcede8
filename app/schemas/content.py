"""Schemas for projects, announcements and notifications."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator

ProjectStatus = Literal["planning", "in-progress", "on-hold", "completed"]
ProjectPriority = Literal["low", "medium", "high"]


class ProjectCreate(BaseModel):
    name: str = Field(..., max_length=255)
    description: str = Field(default="", max_length=5000)
    status: ProjectStatus = "planning"
    priority: ProjectPriority = "medium"
    due_date: str = Field(default="", max_length=32)
    assigned_to: str = Field(default="", max_length=255)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Project name is required")
        return v.strip()


class ProjectUpdate(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    status: ProjectStatus | None = None
    priority: ProjectPriority | None = None
    due_date: str | None = Field(default=None, max_length=32)
    assigned_to: str | None = Field(default=None, max_length=255)
    progress: int | None = Field(default=None, ge=0, le=100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Project name is required")
        return v.strip() if v is not None else None


class ProjectOut(BaseModel):
    id: int
    name: str
    description: str
    status: str
    priority: str
    due_date: str
    assigned_to: str
    progress: int
    created_by: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class AnnouncementCreate(BaseModel):
    title: str = Field(..., max_length=255)
    content: str = Field(..., max_length=10000)

    @field_validator("title", "content")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Please fill in both title and content")
        return v.strip()


class AnnouncementOut(BaseModel):
    id: int
    title: str
    content: str
    created_by: str
    created_by_name: str
    author_role: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class NotificationOut(BaseModel):
    id: int
    title: str
    content: str
    type: str
    read: bool
    created_by: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True
