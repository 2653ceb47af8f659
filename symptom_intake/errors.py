# symptom_intake/errors.py
from __future__ import annotations


class ServiceError(Exception):
    """
    Base class for every failure that is reported back to the caller
    as ``{"success": false, "error": ...}``.
    """

    status_code: int = 400
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    """Bad or missing input. The message is shown to the user as-is."""

    default_message = "Invalid request"


class AuthError(ServiceError):
    default_message = "Unauthorized"


class UpstreamError(ServiceError):
    """Completion provider unreachable, non-2xx, or reply did not match AnalysisResult."""

    default_message = "Failed to analyze symptoms with AI"


class StorageError(ServiceError):
    default_message = "Failed to store analysis"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Not found"


class ConfigurationError(ServiceError):
    """A component's credentials are missing; only requests that need it fail."""

    status_code = 503
    default_message = "Service is not configured"
