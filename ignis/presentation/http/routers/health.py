"""
Health check API endpoints.

This module provides an endpoint reporting whether the application's startup
sequence has completed.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from fastapi import APIRouter, Response, status
from pydantic import BaseModel, Field

from ....application.sequencer import SequencerState

if TYPE_CHECKING:
    from ....application.app import Ignis


class HealthStatus(BaseModel):
    """Health check response."""
    status: str = Field(..., description="healthy, starting or failed")
    startup: SequencerState = Field(..., description="Startup sequence state")
    error: Optional[str] = Field(None, description="Startup failure, if any")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


def create_health_router(app: 'Ignis') -> APIRouter:
    """
    Create a router reporting the health of one application.

    Args:
        app: Application whose startup state is reported
    """
    router = APIRouter()

    @router.get("", response_model=HealthStatus)
    async def health_check(response: Response) -> HealthStatus:
        """
        Basic health check endpoint.

        Responds 503 until startup has completed, and after it failed.
        """
        state = app.startup_state
        error = app.startup_error

        if state is SequencerState.RESOLVED:
            health = "healthy"
        elif state is SequencerState.FAILED:
            health = "failed"
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        else:
            health = "starting"
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

        return HealthStatus(
            status=health,
            startup=state,
            error=str(error) if error is not None else None
        )

    return router
