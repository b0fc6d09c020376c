"""Session stores the messenger relays its messages through."""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any, Protocol

from fastapi import Request

logger = logging.getLogger(__name__)


class SessionStoreError(RuntimeError):
    """Raised when the session store cannot be used."""


class SessionUnavailableError(SessionStoreError):
    """Raised when no session is attached to the request."""


class SessionStore(Protocol):
    """Key/value store bound to one client session."""

    @property
    def active(self) -> bool: ...

    def start(self) -> None: ...

    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: str) -> None: ...

    def unset(self, key: str) -> None: ...

    def close(self) -> None: ...


class RequestSessionStore:
    """
    Adapter over the Starlette request session (SessionMiddleware).

    The middleware serializes `request.session` into the signed cookie when the
    response starts, so closing only releases the adapter. Any later access
    starts it again.
    """

    def __init__(self, request: Request) -> None:
        self._request = request
        self._data: MutableMapping[str, Any] | None = None

    @property
    def active(self) -> bool:
        return self._data is not None

    def start(self) -> None:
        if self._data is not None:
            return
        if "session" not in self._request.scope:
            raise SessionUnavailableError("SessionMiddleware must be installed to use sessions")
        self._data = self._request.session
        logger.debug("Session store started for %s", self._request.url.path)

    def get(self, key: str) -> Any:
        return self._require().get(key)

    def set(self, key: str, value: str) -> None:
        self._require()[key] = value

    def unset(self, key: str) -> None:
        self._require().pop(key, None)

    def close(self) -> None:
        if self._data is not None:
            logger.debug("Session store closed for %s", self._request.url.path)
        self._data = None

    def _require(self) -> MutableMapping[str, Any]:
        if self._data is None:
            raise SessionStoreError("Session store is not started")
        return self._data


class MemorySessionStore:
    """
    Process-local store keyed by session id.

    `start()` takes a working copy of the session and `close()` writes it back,
    so changes made while the store is open are only visible to other stores
    once it is flushed. Used outside HTTP and as a test double.
    """

    def __init__(
        self,
        sessions: dict[str, dict[str, Any]] | None = None,
        session_id: str = "default",
    ) -> None:
        self.sessions = sessions if sessions is not None else {}
        self.session_id = session_id
        self.starts = 0
        self.flushes = 0
        self._data: dict[str, Any] | None = None

    @property
    def active(self) -> bool:
        return self._data is not None

    def start(self) -> None:
        if self._data is not None:
            return
        self._data = dict(self.sessions.get(self.session_id, {}))
        self.starts += 1

    def get(self, key: str) -> Any:
        return self._require().get(key)

    def set(self, key: str, value: str) -> None:
        self._require()[key] = value

    def unset(self, key: str) -> None:
        self._require().pop(key, None)

    def close(self) -> None:
        if self._data is None:
            return
        self.sessions[self.session_id] = self._data
        self._data = None
        self.flushes += 1

    def __enter__(self) -> MemorySessionStore:
        return self

    def __exit__(self, *exc: object) -> None:
        # End of request: flush whatever is still open
        self.close()

    def _require(self) -> dict[str, Any]:
        if self._data is None:
            raise SessionStoreError("Session store is not started")
        return self._data
