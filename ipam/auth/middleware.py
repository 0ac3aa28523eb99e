"""
IPAM Authentication Middleware

Applies the Authenticator to every request outside the public allow-list
and stores the resulting Principal on ``request.state``.
"""

from collections.abc import Callable

import structlog  # type: ignore[import-untyped]
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from ..core.exceptions import UnauthorizedException
from .authenticator import Authenticator

logger = structlog.get_logger()

PUBLIC_PATHS = frozenset({"/healthz", "/readyz", "/openapi.json", "/redoc"})
PUBLIC_PREFIXES = ("/docs",)


def is_public_path(path: str) -> bool:
    return path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES)


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


def _unauthorized(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content={"error": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Authentication gate

    ``authenticator_provider`` is called per request so the authenticator
    built during application startup is picked up; when it returns None
    authentication is disabled and every request passes through.
    """

    def __init__(
        self,
        app: ASGIApp,
        authenticator_provider: Callable[[], Authenticator | None],
    ):
        super().__init__(app)
        self.authenticator_provider = authenticator_provider

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        authenticator = self.authenticator_provider()
        if authenticator is None or is_public_path(request.url.path):
            return await call_next(request)

        token = extract_bearer_token(request.headers.get("Authorization"))
        if token is None:
            return _unauthorized("missing token")

        try:
            principal = await authenticator.authenticate(token)
        except UnauthorizedException:
            logger.info("request_unauthorized", path=request.url.path, method=request.method)
            return _unauthorized("invalid token")

        request.state.principal = principal
        return await call_next(request)
