"""Schema for the health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service status plus Role Store reachability."""

    status: Literal["ok"] = "ok"
    environment: str = Field(description="APP_ENV the service runs under")
    database: Literal["connected", "disconnected"] | None = Field(
        default=None,
        description="Whether the Role Store database answered a trivial query",
    )
