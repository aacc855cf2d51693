"""Health check payload: overall status plus the state of each backing service."""

from typing import Literal

from pydantic import BaseModel, Field

BackingState = Literal["up", "down", "disabled"]


class HealthResponse(BaseModel):
    status: Literal["ok", "degraded"] = Field(
        default="ok", description="'degraded' when the database is unreachable"
    )
    environment: str = Field(description="APP_ENV of the running instance")
    database: Literal["connected", "disconnected"]
    profile_cache: BackingState = Field(
        description="Redis profile cache; 'disabled' when REDIS_URL is unset"
    )
    email: Literal["configured", "disabled"] = Field(
        description="Whether SMTP credentials are present"
    )
