from fastapi import APIRouter, Response

from app.core.config import settings


router = APIRouter()


@router.get("/health")
def health() -> dict:
    """Liveness probe - always returns 200 if app is running."""
    return {"status": "ok"}


@router.get("/ready")
def readiness(response: Response) -> dict:
    """Readiness probe - returns 503 when no server-side API key is configured."""
    if not settings.gemini_api_key:
        response.status_code = 503
        return {"status": "not_ready", "error": "gemini_api_key not configured"}
    return {"status": "ready"}
