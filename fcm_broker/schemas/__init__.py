"""Public schema exports."""

from .tokens import TokenResponse

__all__ = ["TokenResponse"]
