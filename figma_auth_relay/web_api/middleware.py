"""
HTTP middleware of the relay, as plain functions.

`middleware_chain` returns them outermost first. Any of them may answer a request
on its own instead of calling `call_next`.
"""

from collections.abc import Awaitable, Callable
from typing import TypeAlias

from fastapi import Request, Response
from fastapi.responses import PlainTextResponse, RedirectResponse
from loguru import logger

from figma_auth_relay.contracts.settings import ServerSettings

CallNext: TypeAlias = Callable[[Request], Awaitable[Response]]
Middleware: TypeAlias = Callable[[Request, CallNext], Awaitable[Response]]

CORS_ALLOW_HEADERS = ", ".join(
    [
        "Content-Type",
        "Content-Length",
        "Accept-Encoding",
        "X-CSRF-Token",
        "authorization",
        "accept",
        "origin",
        "Cache-Control",
        "X-Requested-With",
    ]
)
CORS_ALLOW_METHODS = "POST, OPTIONS, GET, PUT, DELETE"

SECURING_ERROR_MESSAGE = "error securing session"


def cors_headers(origin: str) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Credentials": "true",
        "Access-Control-Allow-Headers": CORS_ALLOW_HEADERS,
        "Access-Control-Allow-Methods": CORS_ALLOW_METHODS,
    }


async def cors_middleware(request: Request, call_next: CallNext) -> Response:
    """
    Permissive CORS: whatever origin asks is the allowed origin.
    Every OPTIONS request ends here with a 204.
    """
    if request.method == "OPTIONS":
        response = Response(status_code=204)
    else:
        response = await call_next(request)

    if origin := request.headers.get("Origin"):
        response.headers.update(cors_headers(origin))

    return response


def https_redirect_url(request: Request) -> str | None:
    """
    Returns:
        Where to send the client, or None if the request already came in over https.
    Raises:
        ValueError: If no https url can be built from the request.
    """
    if request.url.scheme == "https":
        return None

    host = request.headers.get("host")
    if not host:
        raise ValueError("Request has no Host header")

    return str(request.url.replace(scheme="https", netloc=host))


async def https_redirect_middleware(request: Request, call_next: CallNext) -> Response:
    """
    Plain http gets a permanent redirect to https. No other security headers are added.
    """
    try:
        target = https_redirect_url(request)
    except ValueError as e:
        logger.opt(exception=e).error("Failed to secure request: {}", str(e))
        return PlainTextResponse(SECURING_ERROR_MESSAGE, status_code=500)

    if target is not None:
        return RedirectResponse(target, status_code=301)

    return await call_next(request)


def middleware_chain(server: ServerSettings) -> list[Middleware]:
    chain: list[Middleware] = [cors_middleware]
    if server.enforce_https:
        chain.append(https_redirect_middleware)
    elif server.use_tls:
        logger.info("Development environment - not redirecting http to https")
    return chain
