"""
FastAPI application entrypoint for the FCM credential broker.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from fcm_broker import __version__
from fcm_broker.api.pipeline import install_request_pipeline
from fcm_broker.api.routes import router as api_router
from fcm_broker.core.config import BrokerSettings, get_settings, load_service_account_info
from fcm_broker.core.logging import configure_logging
from fcm_broker.dependencies import get_token_store
from fcm_broker.services import TokenSweeper
from fcm_broker.services.config_gate import verify_no_placeholders

logger = logging.getLogger(__name__)


def _warn_about_development_defaults(settings: BrokerSettings) -> None:
    if settings.fcm.token_ttl_override_seconds is None:
        logger.warning(
            "Using the default lifespan of FCM tokens (1 hour). Clients should cache "
            "FCM tokens according to their lifespan; set FCM_TOKEN_TTL_OVERRIDE_SECONDS "
            "(e.g. 60) during development for quicker build-test iterations."
        )
    logger.warning(
        "The service account private key is read from %s in plain text. This is only "
        "suitable for development; store it securely before deploying to production.",
        settings.fcm.service_account_file,
    )


def _build_lifespan(settings: BrokerSettings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        interval = settings.access_token.sweep_interval_seconds
        if not interval:
            yield
            return
        sweeper = TokenSweeper(get_token_store(), interval_seconds=interval)
        await sweeper.start()
        try:
            yield
        finally:
            await sweeper.stop()

    return lifespan


def create_app() -> FastAPI:
    """Factory for the FastAPI application.

    Raises ``ConfigurationInvalidError`` when configuration is missing or still
    contains placeholder values, so the service never serves traffic with them.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    service_account_info = load_service_account_info(settings.fcm.service_account_file)
    verify_no_placeholders(settings, service_account_info)
    _warn_about_development_defaults(settings)

    app = FastAPI(
        title="FCM Token Broker",
        version=__version__,
        description=(
            "Issues short-lived access tokens to authenticated clients and exchanges "
            "them for Firebase Cloud Messaging credentials."
        ),
        lifespan=_build_lifespan(settings),
    )
    install_request_pipeline(app)
    app.include_router(api_router)
    return app


app = create_app()

__all__ = ["app", "create_app"]
