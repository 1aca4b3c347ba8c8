"""Service layer exports."""

from .access_tokens import AccessTokenService
from .credentials import CredentialValidator
from .fcm_exchange import FcmExchangeService
from .token_store import AccessToken, TokenStore, TokenSweeper

__all__ = [
    "AccessToken",
    "AccessTokenService",
    "CredentialValidator",
    "FcmExchangeService",
    "TokenStore",
    "TokenSweeper",
]
