from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import HTMLResponse, RedirectResponse

from ..core.errors import StorageFailure
from ..schemas.link import ErrorResponse, LinkCreate, LinkRecord
from ..services.links import LinkService
from ..services.redirect import RedirectResolver
from .deps import get_link_service, get_resolver

router = APIRouter()

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate, max-age=0",
    "Pragma": "no-cache",
    "Expires": "0",
}

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _render_page(title: str, message: str) -> str:
    return f"""
    <!DOCTYPE html>
    <html><head><meta charset="UTF-8"><title>{title}</title></head>
    <body style="font-family: Arial; text-align: center; padding: 50px;">
        <h1>{title}</h1>
        <p>{message}</p>
        <a href="/">Go to the home page</a>
    </body></html>
    """


def get_404_page() -> str:
    """Render 404 error page"""
    return _render_page("404 - Link not found", "The requested short link does not exist.")


def get_error_page() -> str:
    """Render generic error page"""
    return _render_page("Error", "Something went wrong.")


@router.post(
    "/links",
    response_model=LinkRecord,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES
)
def create_link(link_data: LinkCreate, service: LinkService = Depends(get_link_service)):
    """
    Create a short link.

    Uses `shortCode` when given, otherwise generates a random 6-character code.
    """
    return service.create_link(link_data.url, link_data.short_code)


@router.get("/links", response_model=List[LinkRecord])
def list_links(search: Optional[str] = None, service: LinkService = Depends(get_link_service)):
    """List all links, newest first"""
    return service.list_links(search=search)


@router.get("/links/{short_code}", response_model=LinkRecord, responses=ERROR_RESPONSES)
def get_link(short_code: str, service: LinkService = Depends(get_link_service)):
    return service.get_link(short_code)


@router.delete(
    "/links/{short_code}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=ERROR_RESPONSES
)
def delete_link(short_code: str, service: LinkService = Depends(get_link_service)):
    """Delete a short link; its code becomes available again"""
    service.delete_link(short_code)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def redirect_to_url(short_code: str, resolver: RedirectResolver = Depends(get_resolver)):
    """
    Redirect to the original URL from short code.

    Records the click before redirecting. Must be registered after every
    other route since it matches any single path segment.
    """
    try:
        destination = resolver.resolve(short_code)
    except StorageFailure:
        return HTMLResponse(
            content=get_error_page(),
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            headers=NO_CACHE_HEADERS
        )

    if destination is None:
        return HTMLResponse(
            content=get_404_page(),
            status_code=status.HTTP_404_NOT_FOUND,
            headers=NO_CACHE_HEADERS
        )

    # 302 without caching so every visit reaches us and is counted
    return RedirectResponse(url=destination, status_code=status.HTTP_302_FOUND, headers=NO_CACHE_HEADERS)
