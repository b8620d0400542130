"""
Health check endpoint.
"""

from fastapi import APIRouter

from ..config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Liveness probe. No authentication."""
    return {"status": "ok", "message": f"{settings.app_name} server is running"}
