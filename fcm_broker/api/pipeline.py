"""
Request pipeline shared by every route: content-type gate, logging and the
per-request sweep of expired access tokens.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Awaitable, Callable

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse

from fcm_broker.dependencies import get_token_store
from fcm_broker.services import TokenStore

logger = logging.getLogger(__name__)

URL_ENCODED_CONTENT_TYPE = "application/x-www-form-urlencoded"
UNGATED_PATHS = frozenset({"/ping"})

CallNext = Callable[[Request], Awaitable[Response]]


def is_url_encoded(content_type: str | None) -> bool:
    """Return whether a Content-Type header declares form encoding, ignoring parameters."""
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == URL_ENCODED_CONTENT_TYPE


async def reject_unsupported_content_type(request: Request, call_next: CallNext) -> Response:
    if request.url.path not in UNGATED_PATHS and not is_url_encoded(
        request.headers.get("content-type")
    ):
        logger.info(
            "Rejected %s %s with content type %r",
            request.method,
            request.url.path,
            request.headers.get("content-type"),
        )
        return JSONResponse(
            status_code=HTTPStatus.BAD_REQUEST,
            content={"detail": "Unsupported Content-type"},
        )
    return await call_next(request)


async def log_requests(request: Request, call_next: CallNext) -> Response:
    # Bodies carry client secrets, so only the request line is logged.
    logger.info("Request (%s): %s", request.url.path, request.method)
    response = await call_next(request)
    logger.info("Response (%s): %s", request.url.path, response.status_code)
    return response


def sweep_expired_tokens(store: Annotated[TokenStore, Depends(get_token_store)]) -> None:
    """Router dependency purging expired access tokens before each handler runs."""
    store.sweep()


def install_request_pipeline(app: FastAPI) -> None:
    """Register the pipeline middleware; the content-type gate runs outermost."""
    app.middleware("http")(log_requests)
    app.middleware("http")(reject_unsupported_content_type)


__all__ = [
    "URL_ENCODED_CONTENT_TYPE",
    "install_request_pipeline",
    "is_url_encoded",
    "sweep_expired_tokens",
]
