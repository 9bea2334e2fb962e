"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from sartrack import __version__
from sartrack.db.database import ping_db
from sartrack.web.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "Database unavailable"}},
)
def health_check():
    """Check API and database health."""
    if not ping_db():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"ok": False, "error": "database unavailable"},
        )

    return HealthResponse(
        ok=True,
        version=__version__,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
