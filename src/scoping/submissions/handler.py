"""
Submission processing: persist, render, notify admin and submitter.

Delivery outcomes are aggregated into one response:
- both deliveries succeed (or the submitter copy is skipped): success
- a sandbox-mode restriction on either side: success with a warning
- any other delivery failure: failure, but the submission id is returned
  because the record is already stored
- store failure or unexpected exception: failure with status 500
"""

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional

from scoping.email.classification import is_sandbox_outcome
from scoping.email.interfaces import EmailOutcome, NotificationDocument
from scoping.email.notifier import Notifier
from scoping.shared.exceptions import StoreError
from scoping.storage.interfaces import SubmissionStore
from scoping.submissions.document import SubmissionDocumentRenderer
from scoping.submissions.schemas import SubmissionRecord, SubmitRequest

logger = logging.getLogger(__name__)

ADMIN_SUBJECT = "New Looker Scoping Document Completed"
USER_SUBJECT = "Your Looker Scoping Document - Cobry"

USER_COPY_SANDBOX_WARNING = (
    "User copy could not be sent because the domain is not yet verified in Resend. "
    "The admin notification was processed."
)
SANDBOX_WARNING = (
    "Submission saved, but email delivery is restricted by Resend Sandbox. "
    "Please verify your domain at resend.com/domains."
)


def generate_submission_id() -> str:
    """``submission_<epoch ms>_<random>``; the suffix keeps same-millisecond ids apart."""
    return f"submission_{int(time.time() * 1000)}_{uuid.uuid4().hex[:12]}"


@dataclass(frozen=True)
class SubmissionOutcome:
    """Aggregated result of one submission."""
    success: bool
    submission_id: Optional[str] = None
    warning: Optional[str] = None
    error: Optional[str] = None
    status_code: int = 200

    @classmethod
    def ok(cls, submission_id: str, warning: Optional[str] = None) -> "SubmissionOutcome":
        return cls(success=True, submission_id=submission_id, warning=warning)

    @classmethod
    def failure(
        cls,
        error: str,
        submission_id: Optional[str] = None,
        status_code: int = 200,
    ) -> "SubmissionOutcome":
        return cls(success=False, submission_id=submission_id, error=error, status_code=status_code)

    def to_response(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, "submissionId": self.submission_id, "warning": self.warning}
        body: dict[str, Any] = {"success": False, "error": self.error}
        if self.submission_id is not None:
            body["submissionId"] = self.submission_id
        return body


class SubmissionHandler:
    """Runs one submission end to end. ``handle`` never raises."""

    def __init__(
        self,
        store: SubmissionStore,
        notifier: Notifier,
        admin_email: str,
        user_copy_delay_seconds: float = 1.0,
        document_renderer: Optional[SubmissionDocumentRenderer] = None,
        id_factory: Callable[[], str] = generate_submission_id,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize handler.

        Args:
            store: Key-value store the record is persisted to.
            notifier: Sends the rendered document to one recipient.
            admin_email: Fixed recipient of every notification.
            user_copy_delay_seconds: Pause before the submitter copy.
            document_renderer: Builds the notification document.
            id_factory: Produces submission ids.
            sleep: Awaitable delay, replaceable in tests.
        """
        self._store = store
        self._notifier = notifier
        self._admin_email = admin_email
        self._delay = user_copy_delay_seconds
        self._renderer = document_renderer or SubmissionDocumentRenderer()
        self._id_factory = id_factory
        self._sleep = sleep

    async def handle(self, request: SubmitRequest) -> SubmissionOutcome:
        submission_id: Optional[str] = None
        try:
            new_id = self._id_factory()
            record = SubmissionRecord.from_request(request)
            await self._store.put(new_id, record.to_store_value())
            submission_id = new_id
            logger.info(
                "Submission stored",
                extra={"submission_id": submission_id, "file_count": len(record.file_urls)},
            )

            document = self._renderer.render(record, submission_id)

            admin_outcome = await self._notifier.send(self._admin_email, ADMIN_SUBJECT, document)
            user_outcome, user_warning = await self._send_user_copy(record.user_email, document)

            return self._aggregate(submission_id, admin_outcome, user_outcome, user_warning)
        except StoreError as e:
            logger.error("Submission could not be stored", extra={"error": e.message})
            return SubmissionOutcome.failure(e.message, status_code=500)
        except Exception as e:
            logger.exception("Submission error", extra={"submission_id": submission_id})
            return SubmissionOutcome.failure(
                str(e) or type(e).__name__,
                submission_id=submission_id,
                status_code=500,
            )

    async def _send_user_copy(
        self,
        user_email: Optional[str],
        document: NotificationDocument,
    ) -> tuple[EmailOutcome, Optional[str]]:
        if not user_email or user_email.lower() == self._admin_email.lower():
            return EmailOutcome(success=True), None

        # Provider allows a limited number of requests per second.
        if self._delay > 0:
            await self._sleep(self._delay)

        outcome = await self._notifier.send(user_email, USER_SUBJECT, document)
        if is_sandbox_outcome(outcome):
            logger.info("User copy skipped due to sandbox restrictions")
            return EmailOutcome(success=True), USER_COPY_SANDBOX_WARNING
        return outcome, None

    def _aggregate(
        self,
        submission_id: str,
        admin: EmailOutcome,
        user: EmailOutcome,
        user_warning: Optional[str],
    ) -> SubmissionOutcome:
        if admin.success and user.success:
            return SubmissionOutcome.ok(submission_id, warning=user_warning)

        which, failed = ("admin", admin) if not admin.success else ("user", user)
        if is_sandbox_outcome(failed):
            logger.warning(
                "Email delivery restricted by provider sandbox",
                extra={"submission_id": submission_id, "recipient_role": which},
            )
            return SubmissionOutcome.ok(submission_id, warning=SANDBOX_WARNING)

        logger.error(
            "Email delivery failed",
            extra={"submission_id": submission_id, "recipient_role": which, "error": failed.error},
        )
        return SubmissionOutcome.failure(
            f"Submission saved to database, but {which} email delivery failed: {failed.error}",
            submission_id=submission_id,
        )
