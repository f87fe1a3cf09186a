"""
HTTP routes for survey submission.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from scoping.config import get_settings
from scoping.email.notifier import Notifier
from scoping.storage.factory import create_store
from scoping.storage.interfaces import SubmissionStore
from scoping.submissions.handler import SubmissionHandler
from scoping.submissions.schemas import SubmitRequest, SubmitResponse

router = APIRouter(tags=["submissions"])


def get_store() -> SubmissionStore:
    return create_store(get_settings())


def get_notifier() -> Notifier:
    # Built per request so credential changes apply without a restart.
    return Notifier(get_settings())


def get_submission_handler(
    store: SubmissionStore = Depends(get_store),
    notifier: Notifier = Depends(get_notifier),
) -> SubmissionHandler:
    settings = get_settings()
    return SubmissionHandler(
        store=store,
        notifier=notifier,
        admin_email=settings.admin_email,
        user_copy_delay_seconds=settings.user_copy_delay_seconds,
    )


@router.post(
    "/submit",
    response_model=SubmitResponse,
    responses={500: {"model": SubmitResponse, "description": "Submission could not be processed"}},
)
async def submit_survey(
    body: SubmitRequest,
    handler: SubmissionHandler = Depends(get_submission_handler),
) -> JSONResponse:
    """Store a survey submission and email it to the admin and the submitter."""
    outcome = await handler.handle(body)
    return JSONResponse(status_code=outcome.status_code, content=outcome.to_response())
