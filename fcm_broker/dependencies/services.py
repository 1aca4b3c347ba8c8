"""
Factory functions to provide the shared token store and services as FastAPI dependencies.
"""

from functools import lru_cache

from fcm_broker.clients import ServiceAccountCredentialMinter
from fcm_broker.core.config import get_settings, load_service_account_info
from fcm_broker.services import (
    AccessTokenService,
    CredentialValidator,
    FcmExchangeService,
    TokenStore,
)


@lru_cache()
def _settings():
    """Internal helper to cache settings for service factories."""
    return get_settings()


@lru_cache()
def get_token_store() -> TokenStore:
    """Provide the process-wide access token store."""
    settings = _settings()
    return TokenStore(ttl_seconds=settings.access_token.ttl_seconds)


@lru_cache()
def get_credential_validator() -> CredentialValidator:
    """Provide the validator for client credentials and request parameters."""
    settings = _settings()
    return CredentialValidator(settings.client, settings.fcm)


@lru_cache()
def get_push_credential_minter() -> ServiceAccountCredentialMinter:
    """Provide the FCM credential minter backed by the configured service account."""
    settings = _settings()
    return ServiceAccountCredentialMinter(
        load_service_account_info(settings.fcm.service_account_file),
        timeout_seconds=settings.fcm.mint_timeout_seconds,
    )


@lru_cache()
def get_access_token_service() -> AccessTokenService:
    """Build the client-credentials exchange service."""
    return AccessTokenService(
        validator=get_credential_validator(),
        store=get_token_store(),
    )


@lru_cache()
def get_fcm_exchange_service() -> FcmExchangeService:
    """Build the access token to FCM credential exchange service."""
    settings = _settings()
    return FcmExchangeService(
        validator=get_credential_validator(),
        store=get_token_store(),
        minter=get_push_credential_minter(),
        ttl_override_seconds=settings.fcm.token_ttl_override_seconds,
    )


__all__ = [
    "get_access_token_service",
    "get_credential_validator",
    "get_fcm_exchange_service",
    "get_push_credential_minter",
    "get_token_store",
]
