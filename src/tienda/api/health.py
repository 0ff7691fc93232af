"""Health check endpoint.

Verifies the server is running, the database answers, and reports
how many clients are listening on each notification channel.
"""

from fastapi import APIRouter, Request
from sqlalchemy import text

from tienda import __version__
from tienda.config import settings
from tienda.db.engine import engine

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Check server health and dependency connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"error: {e}"

    status = "healthy" if checks["database"] == "ok" else "degraded"

    return {
        "status": status,
        **checks,
        "cache": settings.cache_backend,
        "channels": request.app.state.channels.counts(),
    }
