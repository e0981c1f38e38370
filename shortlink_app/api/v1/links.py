from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse

from shortlink_app.config import settings
from shortlink_app.dependencies import get_link_service
from shortlink_app.schemas.link import (
    BatchCreateResponse,
    ClickCreate,
    ClickResponse,
    LinkBatchCreate,
    LinkResponse,
)
from shortlink_app.services.link_service import LinkService
from shortlink_app.services.statistics import LinkStats

router = APIRouter(tags=["links"])


@router.post("/links/", response_model=BatchCreateResponse)
def create_links(
    batch: LinkBatchCreate,
    link_service: LinkService = Depends(get_link_service)
):
    """Create a batch of short links; one outcome per request"""
    result = link_service.create_links(batch.requests)
    if result.error is not None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=result.model_dump(mode="json")
        )
    return result


@router.get("/links/", response_model=List[LinkResponse])
def list_links(link_service: LinkService = Depends(get_link_service)):
    """All links, newest first"""
    return link_service.list_links()


@router.get("/links/{short_code}", response_model=LinkResponse)
def get_link(
    short_code: str,
    link_service: LinkService = Depends(get_link_service)
):
    link = link_service.get_link(short_code)
    if not link:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )
    return link


@router.post(
    "/links/{short_code}/clicks",
    response_model=ClickResponse,
    status_code=status.HTTP_201_CREATED
)
def record_click(
    short_code: str,
    request: Request,
    click: Optional[ClickCreate] = Body(None),
    link_service: LinkService = Depends(get_link_service)
):
    """Record a click. Source and location default to the request headers."""
    click = click or ClickCreate()
    recorded = link_service.record_click(
        short_code,
        source=click.source or request.headers.get("referer", ""),
        location=click.location or request.headers.get("user-agent", ""),
    )
    if recorded is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )
    return recorded


@router.get("/links/{short_code}/clicks", response_model=List[ClickResponse])
def recent_clicks(
    short_code: str,
    limit: int = Query(settings.recent_clicks_limit, ge=1, le=1000),
    link_service: LinkService = Depends(get_link_service)
):
    """Most recent clicks first"""
    clicks = link_service.recent_clicks(short_code, limit)
    if clicks is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )
    return clicks


@router.get("/stats", response_model=LinkStats)
def get_stats(link_service: LinkService = Depends(get_link_service)):
    """Totals over every registered link"""
    return link_service.get_stats()
