"""Error taxonomy shared by services and routers.

Every error carries the HTTP status it maps to; ``guardian.app`` installs a
single handler that renders them as ``{"error": message}``.
"""

from __future__ import annotations

from typing import Any


class GuardianError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self) -> dict[str, Any]:
        return {"error": self.message}


class ValidationError(GuardianError):
    status_code = 400
    default_message = "Validation failed"

    def __init__(self, details: list[dict[str, Any]] | None = None, message: str | None = None):
        super().__init__(message)
        self.details = details or []

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        if self.details:
            payload["details"] = self.details
        return payload


class UnauthorizedError(GuardianError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(GuardianError):
    status_code = 404
    default_message = "Not found"


class ConflictError(GuardianError):
    status_code = 409
    default_message = "Conflict"


class ConfigurationError(GuardianError):
    """Operator-supplied setting is missing; the message is shown to the caller."""

    status_code = 500


class InternalError(GuardianError):
    """Uncategorized failure; callers only ever see the generic message."""

    status_code = 500

    def __init__(self, message: str | None = None):
        super().__init__(message)
        self.detail = self.message
        self.message = self.default_message


class AutomationServiceError(InternalError):
    """The external automation service failed or answered with garbage."""
