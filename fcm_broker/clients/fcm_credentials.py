"""
Google service account utilities.

Mints the short-lived OAuth credential that authorizes calls to Firebase Cloud
Messaging on behalf of the configured project.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Protocol

import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2 import service_account

from fcm_broker.services.errors import MintingCollaboratorError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PushCredential:
    """Credential minted by Google for the FCM API."""

    access_token: str
    expires_at: datetime


class PushCredentialMinter(Protocol):
    async def mint(self, scope: str) -> PushCredential:
        ...


class ServiceAccountCredentialMinter:
    """Mint FCM credentials from a Google service account document."""

    def __init__(self, service_account_info: Dict[str, Any], *, timeout_seconds: float = 10.0) -> None:
        self._info = service_account_info
        self._timeout = timeout_seconds

    async def mint(self, scope: str) -> PushCredential:
        """Request a fresh access token for ``scope`` from Google's token endpoint."""

        def _refresh() -> service_account.Credentials:
            credentials = service_account.Credentials.from_service_account_info(
                self._info, scopes=[scope]
            )
            credentials.refresh(Request())
            return credentials

        try:
            credentials = await asyncio.wait_for(asyncio.to_thread(_refresh), self._timeout)
        except asyncio.TimeoutError as exc:
            logger.error("Timed out after %ss minting FCM credentials", self._timeout)
            raise MintingCollaboratorError() from exc
        except (google.auth.exceptions.GoogleAuthError, ValueError) as exc:
            logger.exception("Failed to mint FCM credentials")
            raise MintingCollaboratorError() from exc

        if not credentials.token or credentials.expiry is None:
            logger.error("Google returned an incomplete FCM credential")
            raise MintingCollaboratorError()

        expires_at = credentials.expiry
        # google-auth reports expiry as naive UTC.
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return PushCredential(access_token=credentials.token, expires_at=expires_at)


__all__ = ["PushCredential", "PushCredentialMinter", "ServiceAccountCredentialMinter"]
