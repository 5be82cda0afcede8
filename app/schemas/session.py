"""Schemas for session role resolution and route decisions."""

from typing import Literal

from pydantic import BaseModel, Field


class SessionResponse(BaseModel):
    """Current caller with the role freshly resolved from the Role Store."""

    uid: str
    email: str
    role: Literal["member", "executive", "admin"]


class RouteDecisionResponse(BaseModel):
    """Whether the presentation layer may render path, or where to redirect."""

    path: str
    allowed: bool
    redirect_to: str | None = Field(
        default=None, description="Sign-in or landing surface when not allowed"
    )
