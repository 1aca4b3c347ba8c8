"""Startup check refusing configuration that still holds placeholder values."""

from __future__ import annotations

from typing import Any, Iterator, List, Mapping

from pydantic import BaseModel

from fcm_broker.core.config import ConfigurationInvalidError

PLACEHOLDER_MARKER = "PLACEHOLDER"


def _walk(node: Any, path: str) -> Iterator[tuple[str, Any]]:
    """Yield ``(path, scalar)`` for every key and leaf value below ``node``."""
    if isinstance(node, BaseModel):
        node = node.model_dump(mode="json")
    if isinstance(node, Mapping):
        for key, value in node.items():
            child = f"{path}.{key}" if path else str(key)
            yield child, key
            yield from _walk(value, child)
    elif isinstance(node, (list, tuple)):
        for index, value in enumerate(node):
            yield from _walk(value, f"{path}[{index}]")
    else:
        yield path, node


def find_placeholders(*documents: Any) -> List[str]:
    """Return the paths of all keys or values that contain the placeholder marker."""
    hits: List[str] = []
    for document in documents:
        for path, scalar in _walk(document, ""):
            if isinstance(scalar, str) and PLACEHOLDER_MARKER in scalar:
                hits.append(path)
    return hits


def verify_no_placeholders(*documents: Any) -> None:
    """Raise ``ConfigurationInvalidError`` if any document still has placeholders."""
    hits = find_placeholders(*documents)
    if hits:
        raise ConfigurationInvalidError(
            "All configuration values must be replaced with actual values before "
            f"the service can start; placeholders remain at: {', '.join(hits)}"
        )


__all__ = ["PLACEHOLDER_MARKER", "find_placeholders", "verify_no_placeholders"]
