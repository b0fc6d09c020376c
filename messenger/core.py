"""
Read-once status messages relayed through the session across a redirect.

A handler that hits an error (or finishes successfully) stores a message and
redirects the browser:

    messenger = Messenger(store, default_route="/login")
    if not user:
        return messenger.escape("Unknown user").to_response(request)

The page behind the route builds its own Messenger, which drains the message
from the session, and shows it with `render()`. The message is gone for every
later request whether it was displayed or not.
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from typing import Any

from fastapi import Request, Response
from markupsafe import Markup

from messenger.session import SessionStore
from messenger.templating import templates
from messenger.utils.htmx import redirect_to

logger = logging.getLogger(__name__)

SESSION_KEY_ERROR = "messenger_error"
SESSION_KEY_SUCCESS = "messenger_success"

MESSAGES_TEMPLATE = "partials/messenger.html"


def sanitize(value: Any) -> str | None:
    """Encode HTML special characters (quotes included); None for missing or empty values."""
    if value is None:
        return None
    text = str(value)
    if not text:
        return None
    return html.escape(text, quote=True)


def decode(value: str) -> str:
    """Reverse `sanitize`."""
    return html.unescape(value)


@dataclass(frozen=True)
class Redirect:
    """Redirect the framework must issue, ending the current request."""

    target: str
    status_code: int = 303

    def to_response(self, request: Request | None = None) -> Response:
        """Build the response; HTMX requests get an HX-Redirect instead of a Location."""
        return redirect_to(request, self.target, self.status_code)

    def halt(self) -> None:
        """Abort the request from anywhere in the call stack."""
        raise RedirectHalt(self)


class RedirectHalt(Exception):
    """Carries a Redirect up to the exception handler that answers with it."""

    def __init__(self, redirect: Redirect) -> None:
        super().__init__(redirect.target)
        self.redirect = redirect


class Messenger:
    """
    Error and success messages that survive exactly one redirect.

    Building an instance drains both session keys, so a pending message is
    delivered to the first request that constructs a Messenger and never again.
    With `auto_close_session` the store is released after every discrete
    operation; otherwise it stays open until the caller closes it at the end
    of the request.
    """

    def __init__(
        self,
        store: SessionStore,
        auto_close_session: bool = True,
        default_route: str | None = None,
        redirect_status: int = 303,
    ) -> None:
        self.store = store
        self.auto_close_session = auto_close_session
        self.redirect_status = redirect_status
        self.route: str | None = default_route or None
        self.error: str | None = None
        self.success_message: str | None = None

        self._start()
        self.error = self._get_saved(SESSION_KEY_ERROR)
        self._clear_saved(SESSION_KEY_ERROR)
        self.success_message = self._get_saved(SESSION_KEY_SUCCESS)
        self._clear_saved(SESSION_KEY_SUCCESS)
        if self.auto_close_session:
            self.store.close()

        if self.has_message():
            logger.debug(
                "Drained message (error=%s, success=%s)",
                self.error is not None,
                self.success_message is not None,
            )

    def has_message(self) -> bool:
        """True if an error or a success message was drained for this request."""
        return self.error is not None or self.success_message is not None

    def get_error(self) -> str | None:
        """Drained error message, HTML-encoded."""
        return self.error

    def get_success(self) -> str | None:
        """Drained success message, HTML-encoded."""
        return self.success_message

    def render(self) -> Markup:
        """Alert blocks for the drained messages, empty markup when there are none."""
        if not self.has_message():
            return Markup("")
        context = {
            "error": Markup(decode(self.error)) if self.error is not None else None,
            "success": (
                Markup(decode(self.success_message))
                if self.success_message is not None
                else None
            ),
        }
        return Markup(templates.get_template(MESSAGES_TEMPLATE).render(context))

    # Alias kept for templates that call `messenger.display()`
    display = render

    def escape(self, message: str) -> Redirect:
        """Store an error message and redirect to `route`."""
        # An empty message is dropped: it reads back as absent
        self.error = message or None
        self._set_saved(SESSION_KEY_ERROR, message)
        logger.info("Escaping to %r with an error message", self.route)
        return self._redirect()

    def succeed(self, message: str = "Success!") -> Redirect:
        """Store a success message and redirect to `route`."""
        self.success_message = message or None
        self._set_saved(SESSION_KEY_SUCCESS, message)
        logger.info("Redirecting to %r with a success message", self.route)
        return self._redirect()

    def _redirect(self) -> Redirect:
        # An unset route is the caller's problem: the target is just empty
        return Redirect(self.route or "", status_code=self.redirect_status)

    def _start(self) -> None:
        if not self.store.active:
            self.store.start()

    def _set_saved(self, key: str, value: str) -> None:
        self._start()
        self.store.set(key, value)
        if self.auto_close_session:
            self.store.close()

    def _get_saved(self, key: str) -> str | None:
        self._start()
        return sanitize(self.store.get(key))

    def _clear_saved(self, key: str) -> None:
        self._start()
        self.store.unset(key)
