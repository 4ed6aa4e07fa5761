"""Request-scoped context using contextvars.

Holds the request ID (set by RequestIDMiddleware) and the authenticated
user ID (set by the auth gate) so log lines can be correlated without
passing the request around.
"""

import logging
from contextvars import ContextVar

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)
_current_user_id: ContextVar[str | None] = ContextVar("current_user_id", default=None)


def set_request_id(request_id: str | None) -> None:
    _request_id.set(request_id)


def get_request_id() -> str | None:
    return _request_id.get()


def set_current_user_id(user_id: str | None) -> None:
    _current_user_id.set(user_id)


def get_current_user_id() -> str | None:
    return _current_user_id.get()


class RequestContextFilter(logging.Filter):
    """Attach request_id and user_id to every log record ('-' when unset)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        record.user_id = get_current_user_id() or "-"
        return True
