"""
Resend HTTP API transport.
"""

import logging
from typing import Any

import httpx

from scoping.email.interfaces import (
    EmailMessage,
    EmailTransport,
    ProviderErrorDetail,
    TransportResponse,
)

logger = logging.getLogger(__name__)


class MalformedResponseError(Exception):
    """Provider answered with a body that is not a Resend payload."""


class ResendTransport(EmailTransport):
    """
    Sends email through ``POST /emails`` on the Resend API.

    A new ``httpx.AsyncClient`` is opened for every call; instances hold only
    immutable configuration and can be shared freely.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.resend.com",
        timeout_seconds: float = 30.0,
    ) -> None:
        self._api_key = api_key
        self._endpoint = f"{base_url.rstrip('/')}/emails"
        self._timeout_seconds = timeout_seconds

    async def send(self, message: EmailMessage) -> TransportResponse:
        payload: dict[str, Any] = {
            "from": message.from_address,
            "to": list(message.to),
            "subject": message.subject,
            "html": message.body_html,
        }
        if message.body_text:
            payload["text"] = message.body_text

        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
            r = await client.post(self._endpoint, json=payload, headers=headers)

        try:
            data = r.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Resend returned a non-JSON response (HTTP {r.status_code})"
            ) from e
        if not isinstance(data, dict):
            raise MalformedResponseError(f"Unexpected Resend response (HTTP {r.status_code})")

        if r.is_success:
            message_id = data.get("id")
            if not message_id:
                raise MalformedResponseError("Resend response is missing the message id")
            return TransportResponse(id=str(message_id))

        error = ProviderErrorDetail(
            message=str(data.get("message") or f"Resend error {r.status_code}"),
            name=data.get("name"),
            status_code=data.get("statusCode", r.status_code),
        )
        logger.debug(
            "Resend rejected message",
            extra={"status_code": error.status_code, "error_name": error.name},
        )
        return TransportResponse(error=error)
