"""Security headers middleware.

Adds security-related response headers to API responses. Media files served
by the local storage backend are embedded by the web client, so paths under
the media prefix skip the framing and CSP headers.
Uses raw ASGI (no BaseHTTPMiddleware).
"""

from typing import Callable

API_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

MEDIA_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "Cross-Origin-Resource-Policy": "cross-origin",
}

HSTS_HEADER = ("Strict-Transport-Security", "max-age=31536000; includeSubDomains")


def _encode(headers: dict[str, str]) -> list[tuple[bytes, bytes]]:
    return [(k.lower().encode(), v.encode()) for k, v in headers.items()]


def SecurityHeadersMiddleware(
    app: Callable,
    media_prefix: str = "/media",
    hsts: bool = True,
) -> Callable:
    """Set security headers on all HTTP responses. Raw ASGI.

    Args:
        app: Wrapped ASGI app.
        media_prefix: Path prefix of locally served media files.
        hsts: Add Strict-Transport-Security (disable for plain-HTTP development).
    """
    api_headers = dict(API_HEADERS)
    media_headers = dict(MEDIA_HEADERS)
    if hsts:
        api_headers[HSTS_HEADER[0]] = HSTS_HEADER[1]
        media_headers[HSTS_HEADER[0]] = HSTS_HEADER[1]
    api_list = _encode(api_headers)
    media_list = _encode(media_headers)

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        is_media = scope.get("path", "").startswith(media_prefix.rstrip("/") + "/")
        extra = media_list if is_media else api_list

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                seen = {h[0].lower() for h in headers}
                headers.extend(h for h in extra if h[0] not in seen)
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
