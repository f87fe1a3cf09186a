"""
Shared exception definitions.
"""

from typing import Any, Dict, Optional


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        code: str = "APP_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}


class ConfigurationError(AppException):
    """Missing or malformed configuration, e.g. the provider credential."""

    def __init__(self, message: str = "Configuration error", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="CONFIGURATION_ERROR", status_code=500, details=details)


class ProviderError(AppException):
    """Delivery rejected by the email provider."""

    def __init__(
        self,
        message: str = "Email provider error",
        kind: str = "provider",
        name: Optional[str] = None,
        provider_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, code="PROVIDER_ERROR", status_code=502, details=details)
        self.kind = kind
        self.name = name
        self.provider_status = provider_status


class SandboxRestriction(ProviderError):
    """Provider refused delivery because the account is in sandbox/testing mode."""

    def __init__(
        self,
        message: str = "Email delivery restricted by provider sandbox",
        name: Optional[str] = None,
        provider_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            kind="sandbox_restricted",
            name=name,
            provider_status=provider_status,
            details=details,
        )


class StoreError(AppException):
    """Submission could not be persisted."""

    def __init__(self, message: str = "Failed to store submission", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="STORE_ERROR", status_code=500, details=details)

