"""Expose constructed client wrappers."""

from .fcm_credentials import PushCredential, PushCredentialMinter, ServiceAccountCredentialMinter

__all__ = [
    "PushCredential",
    "PushCredentialMinter",
    "ServiceAccountCredentialMinter",
]
