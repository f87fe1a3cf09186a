"""
Email delivery through the Resend transactional email API.

- Credential and sender validated before any network call
- Unverified sender domain falls back once to the onboarding sender
- Provider errors classified into actionable messages
"""

from scoping.email.interfaces import (
    EmailMessage,
    EmailOutcome,
    EmailTransport,
    ErrorKind,
    NotificationDocument,
    TransportResponse,
)
from scoping.email.notifier import Notifier
from scoping.email.resend_transport import ResendTransport
from scoping.email.template_renderer import TemplateRenderer

__all__ = [
    "EmailMessage",
    "EmailOutcome",
    "EmailTransport",
    "ErrorKind",
    "NotificationDocument",
    "Notifier",
    "ResendTransport",
    "TemplateRenderer",
    "TransportResponse",
]
