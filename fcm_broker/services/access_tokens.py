"""Client-credentials exchange issuing broker access tokens."""

from __future__ import annotations

import logging
from typing import Optional

from fcm_broker.schemas import TokenResponse
from fcm_broker.services.credentials import CredentialValidator
from fcm_broker.services.errors import (
    InvalidCredentialsError,
    InvalidGrantError,
    InvalidScopeError,
    MissingCredentialsError,
)
from fcm_broker.services.token_store import TokenStore

logger = logging.getLogger(__name__)


class AccessTokenService:
    """Issues access tokens to clients presenting valid credentials."""

    def __init__(self, *, validator: CredentialValidator, store: TokenStore) -> None:
        self._validator = validator
        self._store = store

    def issue_access_token(
        self,
        *,
        client_id: Optional[str],
        client_secret: Optional[str],
        grant_type: Optional[str],
        scope: Optional[str],
    ) -> TokenResponse:
        """
        Validate the request and issue a new access token.

        Checks run in a fixed order and the first failure is raised: presence
        of credentials, their correctness, the grant type, then the scope.
        """
        if not client_id or not client_secret:
            raise MissingCredentialsError()
        if not self._validator.validate_client_credentials(client_id, client_secret):
            logger.info("Rejected access token request with invalid client credentials")
            raise InvalidCredentialsError()
        if not self._validator.validate_grant_type(grant_type):
            raise InvalidGrantError()
        if not self._validator.validate_scope(scope):
            raise InvalidScopeError()

        token = self._store.issue()
        return TokenResponse(
            access_token=token.value,
            expires_in=self._store.ttl_seconds,
            token_type="Bearer",
        )


__all__ = ["AccessTokenService"]
