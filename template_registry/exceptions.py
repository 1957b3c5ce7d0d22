"""Exceptions for the template registry SDK."""

from typing import Any


class RegistryError(Exception):
    """Base exception for all template registry SDK errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error: str | None = None,
    ) -> None:
        """
        Initialize RegistryError.

        Args:
            message: Error message
            status_code: HTTP status code if applicable
            error: Server-reported error name (e.g. "Forbidden") if applicable
        """
        self.message = message
        self.status_code = status_code
        self.error = error
        super().__init__(self.message)


class TemplateLoadError(RegistryError):
    """Raised when a template file cannot be read."""


class TemplateParseError(RegistryError):
    """Raised when a template file is not a valid YAML mapping."""


class TransportError(RegistryError):
    """Raised when the registry cannot be reached."""


class TemplateValidationError(RegistryError):
    """Raised when the registry reports the template as invalid."""

    def __init__(
        self,
        message: str,
        errors: list[Any] | None = None,
        status_code: int | None = None,
        error: str | None = None,
    ) -> None:
        """Initialize TemplateValidationError."""
        self.errors = errors or []
        super().__init__(message, status_code=status_code, error=error)


class PublishError(RegistryError):
    """Raised when publishing a template fails."""


class TagError(RegistryError):
    """Raised when tagging a template version fails."""


class RemoveError(RegistryError):
    """Raised when removing a template, version or tag fails."""


class TemplateLookupError(RegistryError):
    """Raised when a template version cannot be resolved."""
