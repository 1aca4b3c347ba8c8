"""
Exchange of broker access tokens for FCM credentials.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional

from fcm_broker.schemas import TokenResponse
from fcm_broker.services.credentials import FCM_SCOPE, CredentialValidator
from fcm_broker.services.errors import (
    InvalidGrantError,
    InvalidOrExpiredTokenError,
    MissingBearerTokenError,
    UnexpectedProjectIdentityError,
)
from fcm_broker.services.token_store import Clock, TokenStore, utcnow

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from fcm_broker.clients.fcm_credentials import PushCredentialMinter

BEARER_PREFIX = "Bearer "


class FcmExchangeService:
    """Trades a valid access token for a freshly minted FCM credential.

    Access tokens are not consumed: the same token may be exchanged any number
    of times until it expires.
    """

    def __init__(
        self,
        *,
        validator: CredentialValidator,
        store: TokenStore,
        minter: "PushCredentialMinter",
        ttl_override_seconds: Optional[int] = None,
        clock: Clock = utcnow,
    ) -> None:
        self._validator = validator
        self._store = store
        self._minter = minter
        self._ttl_override = ttl_override_seconds
        self._clock = clock

    async def exchange(
        self,
        *,
        authorization: Optional[str],
        fcm_project_number: Optional[str],
        grant_type: Optional[str],
    ) -> TokenResponse:
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise MissingBearerTokenError()

        bearer_token = authorization[len(BEARER_PREFIX):]
        if not self._store.is_valid(bearer_token):
            raise InvalidOrExpiredTokenError()

        if not self._validator.validate_fcm_project_identity(fcm_project_number):
            raise UnexpectedProjectIdentityError()

        if not self._validator.validate_grant_type(grant_type):
            raise InvalidGrantError()

        credential = await self._minter.mint(FCM_SCOPE)

        if self._ttl_override:
            expires_in = self._ttl_override
        else:
            remaining = credential.expires_at - self._clock()
            expires_in = math.floor(remaining.total_seconds())

        return TokenResponse(
            access_token=credential.access_token,
            expires_in=expires_in,
            token_type="Bearer",
        )


__all__ = ["BEARER_PREFIX", "FcmExchangeService"]
