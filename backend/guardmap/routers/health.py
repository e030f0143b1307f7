"""
Root and health endpoints.
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter()


@router.get("/")
async def root(request: Request):
    """Root endpoint - basic liveness."""
    settings = request.app.state.settings
    return {
        "app": settings.app_name,
        "version": request.app.version,
        "status": "running",
    }


@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint for monitoring; reports 503 when the database is down."""
    if await request.app.state.database.ping():
        return {"status": "healthy", "database": "ok"}
    return JSONResponse(
        status_code=503,
        content={"status": "unhealthy", "database": "unavailable"},
    )
