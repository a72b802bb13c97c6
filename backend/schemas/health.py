"""Health check schema."""

from typing import Literal

from pydantic import BaseModel, Field

from .common import UTCDateTime


class HealthResponse(BaseModel):
    """Liveness plus database reachability."""

    status: Literal["ok"] = "ok"
    timestamp: UTCDateTime
    uptime: float = Field(ge=0, description="Seconds since the application started")
    database: Literal["connected", "disconnected"]
