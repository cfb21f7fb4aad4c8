"""Site endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status

from ...data.sites_repository import load_sites
from ...schemas.sites import ConsolidationSummary, SiteListResponse, SiteModel
from ...services.tasks import consolidate_sites, summarize_consolidation

router = APIRouter(prefix="/sites", tags=["sites"])


def _load():
    try:
        return load_sites()
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error loading sites: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to load sites: {str(exc)}",
        ) from exc


@router.get("", response_model=SiteListResponse, status_code=status.HTTP_200_OK)
def list_sites(
    with_tasks_only: bool = Query(default=False, description="Only return sites with pending tasks"),
) -> SiteListResponse:
    sites = _load()
    if with_tasks_only:
        sites = consolidate_sites(sites)
    return SiteListResponse(total=len(sites), items=[SiteModel.from_domain(site) for site in sites])


@router.get("/consolidation", response_model=ConsolidationSummary, status_code=status.HTTP_200_OK)
def consolidation_summary() -> ConsolidationSummary:
    """Explain how many historical task records collapse into site visits."""
    return ConsolidationSummary(**summarize_consolidation(_load()))
