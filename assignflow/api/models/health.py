"""Health check response model."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    sweeper_running: bool = False
