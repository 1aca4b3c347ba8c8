"""Credential broker issuing access tokens and exchanging them for FCM credentials."""

__version__ = "0.1.0"
