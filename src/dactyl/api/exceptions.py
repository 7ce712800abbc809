"""Custom exceptions for the panel API client."""

from __future__ import annotations


class PanelAPIError(Exception):
    """Base exception for panel API errors."""

    def __init__(self, message: str, status_code: int = 0) -> None:
        self.status_code = status_code
        super().__init__(message)


class PanelAuthenticationError(PanelAPIError):
    """401 - Invalid or missing API key."""


class PanelForbiddenError(PanelAPIError):
    """403 - Key lacks permission (or is a client key used on /application)."""


class PanelNotFoundError(PanelAPIError):
    """404 - Resource not found."""


class PanelValidationError(PanelAPIError):
    """422 - Validation error with details."""

    def __init__(self, details: list | dict, status_code: int = 422) -> None:
        self.details = details
        super().__init__(str(details), status_code)


class PanelRateLimitError(PanelAPIError):
    """429 - Rate limit exceeded."""


class PanelConnectionError(PanelAPIError):
    """The request never reached the panel (DNS, refused, timeout)."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=0)


class ConnectionCheckError(PanelAPIError):
    """The connectivity self-test failed. ``hint`` suggests a likely cause."""

    def __init__(self, status_code: int, hint: str | None) -> None:
        self.hint = hint
        message = f"Non success status code received: {status_code}"
        message += f". Possible solution: {hint}" if hint else "."
        super().__init__(message, status_code)
