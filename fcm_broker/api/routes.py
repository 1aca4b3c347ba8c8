"""
FastAPI routes for the credential broker.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Form, Header, HTTPException

from fcm_broker.api.pipeline import sweep_expired_tokens
from fcm_broker.dependencies import get_access_token_service, get_fcm_exchange_service
from fcm_broker.schemas import TokenResponse
from fcm_broker.services.errors import BrokerError, MintingCollaboratorError

router = APIRouter(dependencies=[Depends(sweep_expired_tokens)])
logger = logging.getLogger(__name__)


def _to_http_exception(exc: BrokerError) -> HTTPException:
    if not isinstance(exc, MintingCollaboratorError):
        logger.info("Request rejected: %s", exc.message)
    return HTTPException(status_code=exc.status_code, detail=exc.message)


@router.get("/ping", status_code=HTTPStatus.OK)
async def ping() -> str:
    """Liveness probe."""
    return "Service is up and running"


@router.post("/access_token", response_model=TokenResponse)
async def issue_access_token(
    service: Annotated[Any, Depends(get_access_token_service)],
    client_id: Annotated[str | None, Form()] = None,
    client_secret: Annotated[str | None, Form()] = None,
    grant_type: Annotated[str | None, Form()] = None,
    scope: Annotated[str | None, Form()] = None,
) -> TokenResponse:
    """Issue a broker access token in exchange for valid client credentials."""
    try:
        return service.issue_access_token(
            client_id=client_id,
            client_secret=client_secret,
            grant_type=grant_type,
            scope=scope,
        )
    except BrokerError as exc:
        raise _to_http_exception(exc) from exc


@router.post("/fcm-token", response_model=TokenResponse)
async def exchange_fcm_token(
    service: Annotated[Any, Depends(get_fcm_exchange_service)],
    authorization: Annotated[str | None, Header()] = None,
    fcm_project_number: Annotated[str | None, Form()] = None,
    grant_type: Annotated[str | None, Form()] = None,
) -> TokenResponse:
    """Exchange a broker access token for a short-lived FCM credential."""
    try:
        return await service.exchange(
            authorization=authorization,
            fcm_project_number=fcm_project_number,
            grant_type=grant_type,
        )
    except BrokerError as exc:
        raise _to_http_exception(exc) from exc


__all__ = ["router"]
