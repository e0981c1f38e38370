from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse

from shortlink_app.dependencies import get_link_service
from shortlink_app.services.link_service import LinkService

router = APIRouter(tags=["redirect"])


@router.get("/{short_code}")
def redirect_to_original_url(
    short_code: str,
    request: Request,
    link_service: LinkService = Depends(get_link_service)
):
    """
    Redirect to the original URL and record the click.
    
    Expired links answer 410 and are not counted.
    """
    link = link_service.get_link(short_code)
    if not link:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Short URL not found"
        )
    
    if link.is_expired:
        raise HTTPException(
            status_code=status.HTTP_410_GONE,
            detail="Short URL has expired"
        )
    
    link_service.record_click(
        short_code,
        source=request.headers.get("referer", ""),
        location=request.headers.get("user-agent", ""),
    )
    
    return RedirectResponse(url=link.original_url, status_code=status.HTTP_302_FOUND)
