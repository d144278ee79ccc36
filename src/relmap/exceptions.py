"""Custom exceptions for relmap.

Every exception carries a human-readable message plus a JSON-serializable
context dict, so callers (and the CLI's --json mode) can report failures
without parsing strings.
"""

from __future__ import annotations

from typing import Any


class RelmapError(Exception):
    """Base exception for all relmap errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Return error as JSON-serializable dict."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class RelationshipNotDefinedError(RelmapError):
    """No declaration connects the two entity types."""

    def __init__(
        self,
        entity_type: str,
        related_entity_type: str,
        known_related: list[str] | None = None,
    ) -> None:
        known = known_related or []
        message = f"No relationship defined between {entity_type} and {related_entity_type}"
        if known:
            message = f"{message}. {entity_type} is related to: {', '.join(known)}"

        super().__init__(
            message,
            {
                "entity_type": entity_type,
                "related_entity_type": related_entity_type,
                "known_related": known,
            },
        )
        self.entity_type = entity_type
        self.related_entity_type = related_entity_type
        self.known_related = known


class RegistryLoadError(RelmapError):
    """Relationship declarations could not be loaded."""

    def __init__(self, source: str, reason: str) -> None:
        message = f"Cannot load relationship declarations from '{source}': {reason}"
        super().__init__(message, {"source": source, "reason": reason})
        self.source = source
        self.reason = reason


# === API transport errors ===


class ApiError(RelmapError):
    """A call to the platform API failed."""

    pass


class ApiRequestError(ApiError):
    """The API answered with a non-success status code."""

    def __init__(self, method: str, path: str, status_code: int, body: str = "") -> None:
        message = f"{status_code}: {body}" if body else f"{status_code}: {method} {path} failed"
        super().__init__(
            message,
            {"method": method, "path": path, "status_code": status_code, "body": body},
        )
        self.method = method
        self.path = path
        self.status_code = status_code
        self.body = body


class ApiConnectionError(ApiError):
    """The API could not be reached (network failure or timeout)."""

    def __init__(self, method: str, path: str, reason: str) -> None:
        message = f"Could not reach API for {method} {path}: {reason}"
        super().__init__(message, {"method": method, "path": path, "reason": reason})
        self.method = method
        self.path = path
        self.reason = reason


class ApiResponseError(ApiError):
    """The API answered with a body that is not valid JSON."""

    def __init__(self, method: str, path: str, reason: str) -> None:
        message = f"Invalid JSON in response to {method} {path}: {reason}"
        super().__init__(message, {"method": method, "path": path, "reason": reason})
        self.method = method
        self.path = path
        self.reason = reason
