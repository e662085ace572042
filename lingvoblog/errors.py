"""Error taxonomy shared by the HTTP handlers.

Every error carries the HTTP status it maps to; the API layer turns it into
the ``{"error": ..., "details": ...}`` envelope.
"""

from __future__ import annotations

from typing import Any


class BlogError(Exception):
    """Base class for errors that surface as a JSON error envelope."""

    status_code: int = 500

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class AuthenticationError(BlogError):
    """Bad or missing API key."""

    status_code = 401


class InvalidRequestError(BlogError):
    """Missing required field, empty URL list, wrongly typed body."""

    status_code = 400


class NotFoundError(BlogError):
    status_code = 404


class UpstreamError(BlogError):
    """A database write or outbound call that was the sole operation failed."""

    status_code = 500


class ConfigurationError(BlogError):
    """A required secret is not configured."""

    status_code = 500


class MailDeliveryError(BlogError):
    status_code = 500
