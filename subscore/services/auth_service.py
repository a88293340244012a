"""Request authentication stage and get_current_identity dependency."""

import logging

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response
from starlette.middleware.base import RequestResponseEndpoint

from subscore.constants import (
    BEARER_PREFIX,
    PUBLIC_PATHS,
    TOKEN_LOG_PREFIX_CHARS,
    UNAUTHORIZED_MESSAGE,
)
from subscore.errors import TokenExtractionFailed, Unauthorized
from subscore.schemas.auth import Identity
from subscore.services.identity_service import IdentityExtractor

logger = logging.getLogger(__name__)


def _unauthorized() -> Response:
    return PlainTextResponse(UNAUTHORIZED_MESSAGE, status_code=401)


def bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX):]


async def authenticate_request(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """HTTP middleware: install the caller's identity on request.state or reply 401."""
    if request.method == "OPTIONS" or request.url.path in PUBLIC_PATHS:
        return await call_next(request)

    token = bearer_token(request.headers.get("Authorization"))
    if token is None:
        logger.debug("%s %s: missing bearer token", request.method, request.url.path)
        return _unauthorized()

    logger.debug(
        "%s %s: token %s...", request.method, request.url.path, token[:TOKEN_LOG_PREFIX_CHARS]
    )

    extractor: IdentityExtractor = request.app.state.identity_extractor
    try:
        identity = extractor.extract(token)
    except TokenExtractionFailed as e:
        logger.info("Rejected bearer token on %s %s: %s", request.method, request.url.path, e)
        return _unauthorized()

    request.state.identity = identity
    return await call_next(request)


def get_current_identity(request: Request) -> Identity:
    """FastAPI dependency: the identity installed by authenticate_request, or 401."""
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise Unauthorized()
    return identity
