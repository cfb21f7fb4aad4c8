"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/sites", status_code=status.HTTP_200_OK)
def health_sites() -> dict:
    """Check that the configured site file can be loaded."""
    from ...data.sites_repository import load_sites

    try:
        sites = load_sites()
        return {"source": str(settings.sites_file), "healthy": True, "sites": len(sites)}
    except Exception as e:
        return {"source": str(settings.sites_file), "healthy": False, "error": str(e)}
