"""Domain exceptions mapped to HTTP status codes by the app's exception handlers."""


class SubscoreError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(SubscoreError):
    status_code = 401
    default_message = "Authentication required"


class NotFound(SubscoreError):
    status_code = 404
    default_message = "Resource not found"


class SubscriptionNotFound(NotFound):
    default_message = "Subscription not found"


class UserNotFound(NotFound):
    default_message = "User not found"


class ValidationFailed(SubscoreError):
    status_code = 400
    default_message = "Invalid request payload"


class InternalFailure(SubscoreError):
    status_code = 500
    default_message = "An unexpected error occurred. Please try again later."


class TokenExtractionFailed(Exception):
    """Bearer token could not be turned into an identity.

    The underlying decode/parse error is kept as ``__cause__``.
    """


class InvalidTokenFormat(TokenExtractionFailed):
    """Token does not have at least a header and a claims segment."""
