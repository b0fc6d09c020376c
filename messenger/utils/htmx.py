"""HTMX helpers."""

from fastapi import Request, Response
from fastapi.responses import RedirectResponse


def is_htmx(request: Request) -> bool:
    """Check if request is from HTMX."""
    return request.headers.get("HX-Request", "false").lower() == "true"


def hx_redirect(url: str) -> Response:
    """Instruct HTMX to navigate client-side; it ignores Location on XHR responses."""
    return Response(status_code=204, headers={"HX-Redirect": url})


def redirect_to(request: Request | None, url: str, status_code: int = 303) -> Response:
    """Redirect that works for both HTMX and plain browser requests."""
    if request is not None and is_htmx(request):
        return hx_redirect(url)
    return RedirectResponse(url, status_code=status_code)
