"""Web routes (HTML)."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from messenger.config import get_settings
from messenger.web import render

router = APIRouter()


@router.get("/", response_class=HTMLResponse, tags=["web"])
def index(request: Request) -> HTMLResponse:
    """Render home page, showing any message relayed by the previous request."""
    return render(request, "index.html", {"title": get_settings().app_name})
