"""
Survey submission intake.
"""

from scoping.submissions.handler import SubmissionHandler, SubmissionOutcome
from scoping.submissions.schemas import SubmissionRecord, SubmitRequest

__all__ = [
    "SubmissionHandler",
    "SubmissionOutcome",
    "SubmissionRecord",
    "SubmitRequest",
]
