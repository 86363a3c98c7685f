"""Domain exceptions for the content cache service.

Defines exceptions that represent request or upstream failures. Cache-layer
problems never appear here: CacheService degrades to "cache absent" instead
of raising. Presentation layer maps these to HTTP responses in exception
handlers.
"""

from typing import Any


class SagenaException(Exception):
    """Base exception for all application errors.

    Presentation layer maps these to HTTP responses using message,
    error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, slug).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used for the HTTP error response."""
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class AuthenticationException(SagenaException):
    """Raised when the shared secret is missing, wrong, or not configured."""

    def __init__(self, message: str = "Invalid or missing secret") -> None:
        super().__init__(message, "Unauthorized")


class InvalidWebhookPayloadException(SagenaException):
    """Raised when a webhook body is not JSON or lacks the model field."""

    def __init__(self, message: str = "Invalid payload") -> None:
        super().__init__(message, "INVALID_PAYLOAD")


class ResourceNotFoundException(SagenaException):
    """Raised when requested CMS content does not exist."""

    def __init__(self, resource_type: str, identifier: str) -> None:
        """Initialize with resource type and identifier.

        Args:
            resource_type: Kind of content (e.g. "page", "news-article").
            identifier: Slug or locale that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {identifier}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "identifier": identifier},
        )


class CmsUnavailableException(SagenaException):
    """Raised when the Strapi API fails or returns a non-success status."""

    def __init__(self, message: str, status_code: int | None = None, path: str | None = None) -> None:
        details: dict[str, Any] = {}
        if status_code is not None:
            details["status_code"] = status_code
        if path is not None:
            details["path"] = path
        super().__init__(message, "CMS_UNAVAILABLE", details)
