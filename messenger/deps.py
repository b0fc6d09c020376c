"""FastAPI dependencies."""

from __future__ import annotations

from fastapi import Request

from messenger.config import get_settings
from messenger.core import Messenger
from messenger.session import RequestSessionStore


def get_messenger(request: Request) -> Messenger:
    """
    Return the request's Messenger, building it on first use.

    Construction drains the session, so every consumer within one request
    (route handler, page render, error handler) must share the same instance.
    """
    messenger = getattr(request.state, "messenger", None)
    if messenger is None:
        settings = get_settings()
        messenger = Messenger(
            RequestSessionStore(request),
            auto_close_session=settings.auto_close_session,
            default_route=settings.default_route,
            redirect_status=settings.redirect_status,
        )
        request.state.messenger = messenger
    return messenger
