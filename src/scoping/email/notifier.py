"""
Single-recipient email delivery with credential checks and sender fallback.
"""

import html
import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from scoping.config import Settings
from scoping.email.classification import classify_provider_error, is_domain_not_verified
from scoping.email.interfaces import (
    EmailMessage,
    EmailOutcome,
    EmailTransport,
    ErrorKind,
    NotificationDocument,
    TransportResponse,
)
from scoping.email.resend_transport import ResendTransport
from scoping.shared.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_FROM_EMAIL = "onboarding@resend.dev"
DEFAULT_FROM_NAME = "Cobry Survey"
API_KEY_PREFIX = "re_"
MAX_FROM_NAME_LENGTH = 50
FALLBACK_SUBJECT_PREFIX = "[Fallback] "

_QUOTES = re.compile(r"['\"]+")
_BEARER = re.compile(r"Bearer\s+", re.IGNORECASE)
_ANGLE_BRACKETS = re.compile(r"[<>]")

TransportFactory = Callable[[str], EmailTransport]


@dataclass(frozen=True)
class SenderIdentity:
    """Sender address and display name used for the From header."""
    address: str
    name: str

    @property
    def formatted(self) -> str:
        return f"{self.name} <{self.address}>" if self.name else self.address

    @property
    def is_default(self) -> bool:
        return self.address == DEFAULT_FROM_EMAIL


DEFAULT_SENDER = SenderIdentity(address=DEFAULT_FROM_EMAIL, name=DEFAULT_FROM_NAME)


def sanitize_api_key(raw: str) -> str:
    """Strip quotes and a pasted ``Bearer`` prefix from an API key."""
    key = _QUOTES.sub("", raw.strip())
    key = _BEARER.sub("", key)
    return key.strip()


def resolve_api_key(raw: Optional[str]) -> str:
    """
    Validate the configured API key before any network call.

    Raises:
        ConfigurationError: If the key is missing or not a Resend key.
    """
    if not raw or not raw.strip():
        raise ConfigurationError("RESEND_API_KEY secret is missing. Please set it in the environment.")
    key = sanitize_api_key(raw)
    if not key.startswith(API_KEY_PREFIX):
        raise ConfigurationError(
            f"Invalid API Key format. Resend API keys must start with '{API_KEY_PREFIX}'."
        )
    return key


def resolve_sender_identity(from_email: Optional[str], from_name: Optional[str]) -> SenderIdentity:
    """
    Resolve the sender from operator configuration.

    A from-address without ``@`` is almost always a secret pasted into the
    wrong variable, so it is replaced by the default sender.
    """
    from_email = (from_email or "").strip()
    from_name = (from_name or "").strip()

    address = from_email if from_email and "@" in from_email else DEFAULT_FROM_EMAIL
    name = from_name if from_name and len(from_name) < MAX_FROM_NAME_LENGTH else DEFAULT_FROM_NAME

    return SenderIdentity(
        address=_ANGLE_BRACKETS.sub("", address).strip(),
        name=_ANGLE_BRACKETS.sub("", name).strip(),
    )


def fallback_banner(sender_address: str) -> tuple[str, str]:
    """HTML and text notice prepended to a message re-sent from the default sender."""
    text = (
        f"Note: This email was sent via Resend's onboarding domain because "
        f"{sender_address} is not verified."
    )
    return f"<p><strong>{html.escape(text)}</strong></p>", text


class Notifier:
    """
    Sends one notification document to one recipient.

    ``send`` never raises: configuration problems, provider rejections and
    transport faults all come back as a failed ``EmailOutcome``. Nothing is
    cached between calls; the credential and sender are resolved and a
    transport is built on every call.
    """

    def __init__(
        self,
        settings: Settings,
        transport_factory: Optional[TransportFactory] = None,
    ):
        """
        Initialize notifier.

        Args:
            settings: Application settings holding the Resend configuration.
            transport_factory: Builds a transport from a validated API key.
        """
        self._settings = settings
        self._transport_factory = transport_factory or self._resend_transport

    def _resend_transport(self, api_key: str) -> EmailTransport:
        return ResendTransport(
            api_key=api_key,
            base_url=self._settings.resend_base_url,
            timeout_seconds=self._settings.email_timeout_seconds,
        )

    async def send(
        self,
        recipient: str,
        subject: str,
        document: NotificationDocument,
    ) -> EmailOutcome:
        """
        Deliver ``document`` to ``recipient``.

        Args:
            recipient: Destination address.
            subject: Subject line.
            document: Rendered notification.

        Returns:
            EmailOutcome describing the final attempt.
        """
        try:
            api_key = resolve_api_key(self._settings.resend_api_key)
        except ConfigurationError as e:
            logger.error("Email not sent: %s", e.message, extra={"recipient": recipient})
            return EmailOutcome.failed(e.message, ErrorKind.CONFIGURATION)

        sender = resolve_sender_identity(
            self._settings.resend_from_email,
            self._settings.resend_from_name,
        )

        try:
            transport = self._transport_factory(api_key)
            return await self._deliver(transport, sender, recipient, subject, document)
        except Exception as e:
            logger.exception("Email transport failure", extra={"recipient": recipient})
            return EmailOutcome.failed(str(e) or type(e).__name__, ErrorKind.TRANSPORT)

    async def _deliver(
        self,
        transport: EmailTransport,
        sender: SenderIdentity,
        recipient: str,
        subject: str,
        document: NotificationDocument,
    ) -> EmailOutcome:
        response = await self._attempt(transport, sender, recipient, subject, document)
        fallback_used = False

        if not response.ok and is_domain_not_verified(response.error) and not sender.is_default:
            logger.info(
                "Sender domain not verified, retrying from default sender",
                extra={"recipient": recipient, "sender": sender.address},
            )
            banner_html, banner_text = fallback_banner(sender.address)
            response = await self._attempt(
                transport,
                DEFAULT_SENDER,
                recipient,
                f"{FALLBACK_SUBJECT_PREFIX}{subject}",
                document.with_banner(banner_html, banner_text),
            )
            fallback_used = True

        if not response.ok:
            error = classify_provider_error(response.error, sender.address)
            logger.error(
                "Email delivery failed",
                extra={
                    "recipient": recipient,
                    "error_kind": error.kind,
                    "provider_error": response.error.name,
                    "provider_status": response.error.status_code,
                    "fallback_used": fallback_used,
                },
            )
            return EmailOutcome.failed(error.message, ErrorKind(error.kind), fallback_used)

        logger.info(
            "Email sent",
            extra={"recipient": recipient, "provider_id": response.id, "fallback_used": fallback_used},
        )
        return EmailOutcome.sent(response.id, fallback_used)

    async def _attempt(
        self,
        transport: EmailTransport,
        sender: SenderIdentity,
        recipient: str,
        subject: str,
        document: NotificationDocument,
    ) -> TransportResponse:
        message = EmailMessage(
            from_address=sender.formatted,
            to=[recipient],
            subject=subject,
            body_html=document.html,
            body_text=document.text,
        )
        return await transport.send(message)
