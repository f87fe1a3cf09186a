"""
Pydantic schemas for survey submissions.
"""

import copy
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SubmitRequest(BaseModel):
    """Body of ``POST /submit``."""

    model_config = ConfigDict(populate_by_name=True)

    form_data: dict[str, Any] = Field(
        default_factory=dict,
        alias="formData",
        description="Survey sections part1..part6, each a mapping of field name to value",
    )
    user_email: str | None = Field(
        default=None,
        alias="userEmail",
        description="Submitter address that receives a copy",
    )
    timestamp: str | None = Field(
        default=None,
        description="Client submission time, ISO-8601",
    )
    file_urls: list[str] = Field(
        default_factory=list,
        alias="fileUrls",
        description="Links to assets uploaded alongside the survey",
    )

    @field_validator("form_data", mode="before")
    @classmethod
    def default_form_data(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("user_email", mode="before")
    @classmethod
    def blank_email_is_none(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @field_validator("file_urls", mode="before")
    @classmethod
    def default_file_urls(cls, v: Any) -> Any:
        return [] if v is None else v


class SubmissionRecord(BaseModel):
    """What gets persisted for one submission."""

    form_data: dict[str, Any]
    user_email: str | None
    timestamp: str
    file_urls: list[str]

    @classmethod
    def from_request(cls, request: SubmitRequest) -> "SubmissionRecord":
        return cls(
            form_data=copy.deepcopy(request.form_data),
            user_email=request.user_email,
            timestamp=request.timestamp or datetime.now(timezone.utc).isoformat(),
            file_urls=list(request.file_urls),
        )

    def to_store_value(self) -> dict[str, Any]:
        """Flatten into the stored JSON shape: sections plus submission metadata."""
        value = copy.deepcopy(self.form_data)
        value.update(
            {
                "userEmail": self.user_email,
                "timestamp": self.timestamp,
                "fileUrls": list(self.file_urls),
            }
        )
        return value


class SubmitResponse(BaseModel):
    """Documented shape of the submission response."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    submission_id: str | None = Field(
        default=None,
        alias="submissionId",
        description="Present once the record is stored",
    )
    warning: str | None = Field(default=None, description="Soft delivery failure note")
    error: str | None = Field(default=None, description="Failure description")


class HealthResponse(BaseModel):
    status: str = "ok"
