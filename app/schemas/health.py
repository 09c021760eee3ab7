"""Health check response schema."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    uptime_seconds: int
    timestamp: str
    version: str
    env: str
    database: str
