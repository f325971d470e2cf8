"""Health check endpoint."""

from fastapi import APIRouter

from timeful.schemas import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Detailed health check."""
    return HealthResponse(status="healthy")
