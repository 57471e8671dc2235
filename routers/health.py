# routers/health.py

from fastapi import APIRouter

from core.cache import get_cache
from services.backend_client import ping_backend

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


# -----------------------------------------------------
# GET /health/backend
# Checks the e-voting REST backend is reachable
# No auth required
# -----------------------------------------------------
@router.get("/backend", summary="E-voting backend health check")
def health_backend():
    """
    Calls the backend election status endpoint and reports the outcome.
    Safe for external health monitors (no auth required).
    """
    return ping_backend()


# -----------------------------------------------------
# GET /health/app
# -----------------------------------------------------
@router.get("/app", summary="App health check")
async def health_app():
    return {
        "service": "E-Voting Console API",
        "status": "ok",
        "cache_entries": get_cache().size(),
    }
