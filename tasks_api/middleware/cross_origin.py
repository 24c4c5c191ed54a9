"""Cross-origin headers middleware.

Sets Access-Control-Allow-Origin and Access-Control-Allow-Headers on every
HTTP response, whether or not the request carried an Origin header, and
answers CORS preflight requests directly (any method is allowed).
Uses raw ASGI (no BaseHTTPMiddleware) for production-safe streaming and background tasks.
"""

from typing import Callable

DEFAULT_ALLOWED_HEADERS = "Origin, X-Requested-With, Content-Type, Accept"


def _get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("latin-1")
    return None


def _split(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def CrossOriginHeadersMiddleware(
    app: Callable,
    allowed_origins: str = "*",
    allowed_headers: str = DEFAULT_ALLOWED_HEADERS,
) -> Callable:
    """Inject cross-origin headers on all responses. Raw ASGI.

    allowed_origins is "*" or a comma-separated list; with a list, the
    request Origin is echoed back only when it is listed.
    """
    origins = _split(allowed_origins)
    wildcard = "*" in origins
    headers_value = ", ".join(_split(allowed_headers)).encode()

    def _cors_headers(scope: dict) -> list[tuple[bytes, bytes]]:
        out = [(b"access-control-allow-headers", headers_value)]
        if wildcard:
            out.append((b"access-control-allow-origin", b"*"))
            return out
        out.append((b"vary", b"Origin"))
        origin = _get_header(scope, "origin")
        if origin and origin in origins:
            out.append((b"access-control-allow-origin", origin.encode("latin-1")))
        return out

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        cors_headers = _cors_headers(scope)

        requested_method = _get_header(scope, "access-control-request-method")
        if scope["method"] == "OPTIONS" and requested_method:
            headers = cors_headers + [
                (b"access-control-allow-methods", requested_method.encode("latin-1")),
                (b"content-length", b"0"),
            ]
            await send({"type": "http.response.start", "status": 204, "headers": headers})
            await send({"type": "http.response.body", "body": b""})
            return

        async def send_wrapper(message: dict) -> None:
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                seen = {h[0].lower() for h in headers}
                for name_b, value_b in cors_headers:
                    if name_b not in seen:
                        headers.append((name_b, value_b))
                        seen.add(name_b)
                message["headers"] = headers
            await send(message)

        await app(scope, receive, send_wrapper)

    return asgi_app
