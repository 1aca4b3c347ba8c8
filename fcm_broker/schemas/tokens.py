"""Schemas for token responses."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class TokenResponse(BaseModel):
    """OAuth-style bearer token response."""

    access_token: str = Field(..., description="Opaque bearer credential.")
    expires_in: int = Field(..., description="Remaining lifetime in seconds.")
    token_type: Literal["Bearer"] = "Bearer"


__all__ = ["TokenResponse"]
