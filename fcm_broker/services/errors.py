"""Errors raised by the broker services.

Each error carries the HTTP status and message reported to the caller, so the
routing layer can translate any of them without knowing the individual kinds.
"""

from __future__ import annotations

from http import HTTPStatus


class BrokerError(Exception):
    """Base class for request-terminating broker failures."""

    status_code: int = HTTPStatus.BAD_REQUEST
    message: str = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class MissingCredentialsError(BrokerError):
    status_code = HTTPStatus.UNAUTHORIZED
    message = "Missing client credentials"


class InvalidCredentialsError(BrokerError):
    status_code = HTTPStatus.UNAUTHORIZED
    message = "Invalid client credentials"


class InvalidGrantError(BrokerError):
    status_code = HTTPStatus.BAD_REQUEST
    message = "Grant type invalid or missing"


class InvalidScopeError(BrokerError):
    status_code = HTTPStatus.BAD_REQUEST
    message = "Scope invalid or missing"


class MissingBearerTokenError(BrokerError):
    status_code = HTTPStatus.UNAUTHORIZED
    message = "No Bearer token found in authorization header"


class InvalidOrExpiredTokenError(BrokerError):
    status_code = HTTPStatus.UNAUTHORIZED
    message = "Invalid or expired access token"


class UnexpectedProjectIdentityError(BrokerError):
    status_code = HTTPStatus.UNAUTHORIZED
    message = "Unexpected FCM project number"


class MintingCollaboratorError(BrokerError):
    """Raised when the FCM credential could not be minted."""

    status_code = HTTPStatus.BAD_GATEWAY
    message = "Failed to obtain FCM credentials"


__all__ = [
    "BrokerError",
    "InvalidCredentialsError",
    "InvalidGrantError",
    "InvalidOrExpiredTokenError",
    "InvalidScopeError",
    "MintingCollaboratorError",
    "MissingBearerTokenError",
    "MissingCredentialsError",
    "UnexpectedProjectIdentityError",
]
