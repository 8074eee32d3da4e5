"""
Custom Exception Classes for the i18n router

This module defines the exceptions raised by the locale-routing core and
the consistent error responses built from them by the HTTP layer.
"""

from typing import Any

from fastapi import status


class I18nRouterError(Exception):
    """Base exception class for all i18n router exceptions"""

    error_type = "Router Error"

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(I18nRouterError):
    """Raised when the locale configuration is invalid.

    Fatal at startup: the host must not serve requests with a config
    that failed to build.
    """

    error_type = "Configuration Error"

    def __init__(self, message: str, field: str | None = None, value: Any | None = None):
        details: dict[str, Any] = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details)


# ============================================================================
# Lookup Exceptions
# ============================================================================


class UnknownLocaleError(I18nRouterError):
    """Raised when a URL is generated for a locale that is not configured"""

    error_type = "Unknown Locale"

    def __init__(self, locale: str, available: list[str] | None = None):
        details: dict[str, Any] = {"locale": locale}
        if available is not None:
            details["available"] = available
        super().__init__(
            message=f"Locale '{locale}' is not configured",
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
        )
