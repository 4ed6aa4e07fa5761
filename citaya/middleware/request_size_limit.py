"""Request body size limit middleware.

Base64 upload bodies can be large; reject anything above max_upload_size
before it is buffered by the JSON parser. Checks Content-Length up front and
counts streamed bytes for chunked bodies. Raw ASGI (no BaseHTTPMiddleware).
"""

import json
from typing import Callable

from starlette.exceptions import HTTPException

from citaya.middleware.request_id import get_header


async def _send_413(send: Callable, max_bytes: int) -> None:
    """Send 413 Payload Too Large in the API error envelope."""
    body = json.dumps(
        {
            "success": False,
            "error": f"Request body must be at most {max_bytes} bytes",
        }
    ).encode()
    await send({
        "type": "http.response.start",
        "status": 413,
        "headers": [
            (b"content-type", b"application/json"),
            (b"content-length", str(len(body)).encode()),
        ],
    })
    await send({"type": "http.response.body", "body": body, "more_body": False})


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject requests whose body exceeds max_bytes. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        content_length = get_header(scope, "content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                declared = None
            if declared is not None and declared > max_bytes:
                await _send_413(send, max_bytes)
                return

        received = 0
        response_started = False

        async def limited_receive() -> dict:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > max_bytes:
                    raise _BodyTooLarge(max_bytes)
            return message

        async def tracking_send(message: dict) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await app(scope, limited_receive, tracking_send)
        except _BodyTooLarge:
            if response_started:
                raise
            await _send_413(send, max_bytes)

    return asgi_app


class _BodyTooLarge(HTTPException):
    """Streamed body crossed the limit.

    An HTTPException so the framework renders it as 413 when raised while the
    endpoint is reading its body.
    """

    def __init__(self, max_bytes: int) -> None:
        super().__init__(
            status_code=413,
            detail=f"Request body must be at most {max_bytes} bytes",
        )
