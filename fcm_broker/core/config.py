"""
Application configuration models and helpers.

Centralizes settings for the broker: the client credentials it accepts, the
lifetime of the access tokens it issues, and the FCM service account used to
mint push credentials.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Type

import json

from dotenv import dotenv_values, load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class ConfigurationInvalidError(Exception):
    """Raised when configuration is missing, malformed or still a placeholder."""


# Variables already set in the process environment win over .env entries.
load_dotenv()


class ClientCredentialSettings(BaseSettings):
    """Credentials a client must present to obtain an access token."""

    client_id: str = Field(..., validation_alias="BROKER_CLIENT_ID")
    client_secret: str = Field(..., validation_alias="BROKER_CLIENT_SECRET")


class AccessTokenSettings(BaseSettings):
    """Lifetime and housekeeping of issued access tokens."""

    ttl_seconds: int = Field(3600, validation_alias="ACCESS_TOKEN_TTL_SECONDS", gt=0)
    sweep_interval_seconds: float = Field(
        0,
        validation_alias="TOKEN_SWEEP_INTERVAL_SECONDS",
        ge=0,
        description=(
            "Interval for the background sweep of expired tokens. "
            "Zero disables it; requests still sweep on arrival."
        ),
    )


class FcmSettings(BaseSettings):
    """Configuration for minting Firebase Cloud Messaging credentials."""

    expected_project_number: str = Field(
        ..., validation_alias="FCM_EXPECTED_PROJECT_NUMBER"
    )
    service_account_file: Path = Field(
        Path("configs/service-account.json"),
        validation_alias="FCM_SERVICE_ACCOUNT_FILE",
    )
    token_ttl_override_seconds: Optional[int] = Field(
        None,
        validation_alias="FCM_TOKEN_TTL_OVERRIDE_SECONDS",
        gt=0,
        description=(
            "Report this lifespan for FCM credentials instead of the real one. "
            "Useful during development for quicker build-test iterations."
        ),
    )
    mint_timeout_seconds: float = Field(
        10.0, validation_alias="FCM_MINT_TIMEOUT_SECONDS", gt=0
    )

    @field_validator("token_ttl_override_seconds", mode="before")
    @classmethod
    def _blank_override_is_unset(cls, value: object) -> object:
        """Treat an empty environment value as no override."""
        if isinstance(value, str) and not value.strip():
            return None
        return value


class BrokerSettings(BaseSettings):
    """Root settings object for the broker application."""

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    client: ClientCredentialSettings = Field(default_factory=ClientCredentialSettings)
    access_token: AccessTokenSettings = Field(default_factory=AccessTokenSettings)
    fcm: FcmSettings = Field(default_factory=FcmSettings)


def _aliased_values(model: Type[BaseSettings], values: Mapping[str, Optional[str]]) -> Dict[str, Any]:
    """Select the entries of ``values`` that name one of ``model``'s variables."""
    aliases = {field.validation_alias for field in model.model_fields.values()}
    return {key: value for key, value in values.items() if key in aliases and value is not None}


def settings_from_env_file(path: Path) -> BrokerSettings:
    """Build settings in which the entries of ``path`` override the process environment.

    Variables the file does not mention still come from the environment.
    """
    values = dotenv_values(path)
    return BrokerSettings(
        **_aliased_values(BrokerSettings, values),
        client=ClientCredentialSettings(**_aliased_values(ClientCredentialSettings, values)),
        access_token=AccessTokenSettings(**_aliased_values(AccessTokenSettings, values)),
        fcm=FcmSettings(**_aliased_values(FcmSettings, values)),
    )


def load_service_account_info(path: Path) -> dict:
    """Read the Google service account document used to mint FCM credentials."""
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigurationInvalidError(
            f"Service account file {path} does not exist."
        ) from exc
    try:
        info = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigurationInvalidError(
            f"Service account file {path} is not valid JSON."
        ) from exc
    if not isinstance(info, dict):
        raise ConfigurationInvalidError(
            f"Service account file {path} must contain a JSON object."
        )
    return info


@lru_cache()
def get_settings() -> BrokerSettings:
    """Return a cached settings object."""
    return BrokerSettings()  # type: ignore[call-arg]


__all__ = [
    "AccessTokenSettings",
    "BrokerSettings",
    "ClientCredentialSettings",
    "ConfigurationInvalidError",
    "FcmSettings",
    "get_settings",
    "load_service_account_info",
    "settings_from_env_file",
]
