"""Request body size limit middleware.

Rejects uploads whose body exceeds settings.max_upload_size before the
multipart parser buffers them. Declared Content-Length is checked up front;
bodies without one are buffered up to the limit and replayed.
Uses raw ASGI (no BaseHTTPMiddleware).
"""

import json
from typing import Callable

from cowconnect.middleware.request_id import get_header

_BODY_METHODS = {"POST", "PUT", "PATCH"}


async def _send_413(send: Callable, max_bytes: int) -> None:
    body = json.dumps(
        {
            "error": "PAYLOAD_TOO_LARGE",
            "message": f"Request body must be at most {max_bytes} bytes",
            "details": {"max_bytes": max_bytes},
            "retryable": False,
        }
    ).encode()
    await send({
        "type": "http.response.start",
        "status": 413,
        "headers": [(b"content-type", b"application/json")],
    })
    await send({"type": "http.response.body", "body": body, "more_body": False})


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject request bodies larger than max_bytes with 413. Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or scope.get("method") not in _BODY_METHODS:
            await app(scope, receive, send)
            return

        declared = get_header(scope, "content-length")
        if declared is not None:
            try:
                too_large = int(declared) > max_bytes
            except ValueError:
                too_large = False
            if too_large:
                await _send_413(send, max_bytes)
                return
            await app(scope, receive, send)
            return

        # No Content-Length: buffer the body, then replay it to the app.
        chunks: list[bytes] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body = message.get("body", b"")
            total += len(body)
            if total > max_bytes:
                await _send_413(send, max_bytes)
                return
            chunks.append(body)
            if not message.get("more_body", False):
                break

        body_sent = False

        async def replay_receive() -> dict:
            nonlocal body_sent
            if body_sent:
                return await receive()
            body_sent = True
            return {"type": "http.request", "body": b"".join(chunks), "more_body": False}

        await app(scope, replay_receive, send)

    return asgi_app
