"""
Email transport interfaces and data types.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Classification of a failed delivery."""
    CONFIGURATION = "configuration"
    DOMAIN_NOT_VERIFIED = "domain_not_verified"
    SANDBOX_RESTRICTED = "sandbox_restricted"
    CREDENTIAL_REJECTED = "credential_rejected"
    PROVIDER = "provider"
    TRANSPORT = "transport"


@dataclass(frozen=True)
class NotificationDocument:
    """Rendered, recipient-agnostic notification body."""
    html: str
    text: Optional[str] = None

    def with_banner(self, banner_html: str, banner_text: Optional[str] = None) -> "NotificationDocument":
        """Return a copy with a notice prepended to both bodies."""
        text = self.text
        if text is not None and banner_text:
            text = f"{banner_text}\n\n{text}"
        return replace(self, html=f"{banner_html}<hr/>{self.html}", text=text)


@dataclass(frozen=True)
class EmailMessage:
    """Email message handed to a transport."""
    from_address: str
    to: list[str]
    subject: str
    body_html: str
    body_text: Optional[str] = None


@dataclass(frozen=True)
class ProviderErrorDetail:
    """Error reported by the provider for a rejected message."""
    message: str
    name: Optional[str] = None
    status_code: Optional[int] = None


@dataclass(frozen=True)
class TransportResponse:
    """Raw result of one provider call: an id on success, an error otherwise."""
    id: Optional[str] = None
    error: Optional[ProviderErrorDetail] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class EmailOutcome:
    """Result of one ``Notifier.send`` call."""
    success: bool
    provider_id: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    fallback_used: bool = False

    @classmethod
    def sent(cls, provider_id: Optional[str], fallback_used: bool = False) -> "EmailOutcome":
        return cls(success=True, provider_id=provider_id, fallback_used=fallback_used)

    @classmethod
    def failed(
        cls,
        error: str,
        kind: ErrorKind = ErrorKind.PROVIDER,
        fallback_used: bool = False,
    ) -> "EmailOutcome":
        return cls(success=False, error=error, error_kind=kind, fallback_used=fallback_used)


class EmailTransport(ABC):
    """
    Abstract interface for a transactional email provider.

    Implementations report provider rejections through
    ``TransportResponse.error`` and raise only for transport-level faults
    (network errors, unparseable responses).
    """

    @abstractmethod
    async def send(self, message: EmailMessage) -> TransportResponse:
        """
        Send an email message.

        Args:
            message: The email message to send.

        Returns:
            TransportResponse with the provider id or the provider error.
        """
        pass
