"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection and attendance table status."""
    from ...db import get_supabase_client, supabase_configured
    from ...persistence.supabase_store import RECORDS_TABLE

    if not supabase_configured():
        return {
            "configured": False,
            "message": "Supabase not configured. Set ATT_SUPABASE_URL and ATT_SUPABASE_KEY environment variables.",
        }

    supabase = get_supabase_client()
    if supabase is None:
        return {"configured": True, "connected": False, "message": "Supabase client could not be created."}

    try:
        supabase.table(RECORDS_TABLE).select("id", count="exact").limit(1).execute()
        return {
            "configured": True,
            "connected": True,
            "message": "Database connected.",
        }
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
