"""Bearer token → caller identity.

Two extractors share one interface so the authentication stage never cares
which is active:

* ``UnverifiedClaimsExtractor`` reads the claims segment as-is. The token's
  signature is NOT checked; whoever holds a well-formed token is trusted.
* ``SignedTokenVerifier`` checks the signature with PyJWT first.
"""

import binascii
import json
import logging
from typing import Any, Protocol

import jwt
from jwt.utils import base64url_decode

from subscore.config import Settings
from subscore.errors import InvalidTokenFormat, TokenExtractionFailed
from subscore.schemas.auth import Identity

logger = logging.getLogger(__name__)

_CLAIM_FIELDS = ("email", "name", "picture")


def _text_claim(claims: dict[str, Any], key: str) -> str:
    value = claims.get(key)
    return value if isinstance(value, str) else ""


def identity_from_claims(claims: dict[str, Any], verified: bool = False) -> Identity:
    """Build an Identity, defaulting missing or non-string claims to ''."""
    return Identity(**{key: _text_claim(claims, key) for key in _CLAIM_FIELDS}, verified=verified)


class IdentityExtractor(Protocol):
    """Protocol for bearer token decoders (unverified claims, signed JWT, etc.)."""

    def extract(self, token: str) -> Identity:
        """Turn an opaque token into an Identity or raise TokenExtractionFailed."""
        ...


class UnverifiedClaimsExtractor:
    def extract(self, token: str) -> Identity:
        segments = token.split(".")
        if len(segments) < 2:
            raise InvalidTokenFormat("Token must contain a header and a claims segment")

        # RecursionError: deeply nested JSON arrays/objects in the claims
        try:
            claims = json.loads(base64url_decode(segments[1]).decode("utf-8"))
        except (binascii.Error, UnicodeDecodeError, ValueError, RecursionError) as e:
            raise TokenExtractionFailed(f"Failed to decode token claims: {type(e).__name__}") from e

        if not isinstance(claims, dict):
            raise TokenExtractionFailed("Token claims are not a JSON object")
        return identity_from_claims(claims)


class SignedTokenVerifier:
    def __init__(self, secret: str, algorithm: str = "HS256"):
        self._secret = secret
        self._algorithm = algorithm

    def extract(self, token: str) -> Identity:
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except (jwt.InvalidTokenError, RecursionError) as e:
            raise TokenExtractionFailed(f"Token verification failed: {type(e).__name__}") from e
        return identity_from_claims(claims, verified=True)


def build_identity_extractor(settings: Settings) -> IdentityExtractor:
    """Pick the extractor for the configured AUTH_MODE."""
    if settings.auth_mode == "signed":
        logger.info("Bearer tokens verified with %s", settings.jwt_algorithm)
        return SignedTokenVerifier(settings.jwt_secret, settings.jwt_algorithm)
    logger.warning("Bearer token signatures are NOT verified (AUTH_MODE=unverified)")
    return UnverifiedClaimsExtractor()
