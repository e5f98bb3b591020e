"""Health check endpoint."""

from fastapi import APIRouter

from fitness_buddy_api.app.schemas.common import HealthRead

router = APIRouter()


@router.get("/health", response_model=HealthRead)
async def health() -> HealthRead:
    """Report that the server is up.  Always returns 200."""
    return HealthRead(status="OK", message="FitnessBuddy Backend is running")
