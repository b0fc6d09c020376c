"""Infra/diagnostic routes (non-prod helpers)."""

import html

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import Response

from messenger.config import get_settings
from messenger.core import Messenger
from messenger.deps import get_messenger

router = APIRouter()


@router.get("/demo/escape", tags=["infra"])
def demo_escape(
    request: Request,
    msg: str = "Something went wrong",
    messenger: Messenger = Depends(get_messenger),
) -> Response:
    """Store an error message and redirect to the default route (HTMX-aware)."""
    # Query text is user input: store it as plain text
    return messenger.escape(html.escape(msg)).to_response(request)


@router.get("/demo/succeed", tags=["infra"])
def demo_succeed(
    request: Request,
    msg: str = "Operation completed",
    messenger: Messenger = Depends(get_messenger),
) -> Response:
    """Store a success message and redirect to the default route (HTMX-aware)."""
    return messenger.succeed(html.escape(msg)).to_response(request)


def _require_token(token: str, messenger: Messenger) -> None:
    if token != "letmein":
        messenger.escape("Invalid token").halt()


@router.get("/demo/halt", tags=["infra"])
def demo_halt(
    request: Request, token: str = "", messenger: Messenger = Depends(get_messenger)
) -> Response:
    """Bail out with an error redirect from a nested helper."""
    _require_token(token, messenger)
    return messenger.succeed("Token accepted").to_response(request)


@router.get("/debug/error", tags=["infra"])
def debug_error() -> None:
    """Intentionally raise an error to exercise the 500 handler in non-prod."""
    settings = get_settings()
    if settings.env == "prod":
        raise HTTPException(404, "Not found")
    raise RuntimeError("Simulated failure for testing purposes")
