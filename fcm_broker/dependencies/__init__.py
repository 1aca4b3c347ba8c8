"""Expose dependency helpers for FastAPI routers."""

from .services import (
    get_access_token_service,
    get_credential_validator,
    get_fcm_exchange_service,
    get_push_credential_minter,
    get_token_store,
)

__all__ = [
    "get_access_token_service",
    "get_credential_validator",
    "get_fcm_exchange_service",
    "get_push_credential_minter",
    "get_token_store",
]
