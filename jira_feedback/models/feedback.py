"""Feedback, submitter configuration and Jira exchange models."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Feedback(BaseModel):
    """Feedback handed over by the collecting client. Never mutated here."""

    model_config = ConfigDict(frozen=True)

    user_comment: str = ""
    device_and_app_info: dict[str, str | None] = Field(default_factory=dict)
    include_screenshot: bool = False
    include_logs: bool = False
    screenshot: bytes | None = None
    logs: bytes | None = None

    @classmethod
    def from_paths(
        cls,
        user_comment: str = "",
        device_and_app_info: dict[str, str | None] | None = None,
        screenshot_path: str | Path | None = None,
        logs_path: str | Path | None = None,
    ) -> "Feedback":
        """Build a Feedback whose screenshot/log resources live on disk."""
        screenshot = Path(screenshot_path).read_bytes() if screenshot_path else None
        logs = Path(logs_path).read_bytes() if logs_path else None
        return cls(
            user_comment=user_comment,
            device_and_app_info=device_and_app_info or {},
            include_screenshot=screenshot is not None,
            include_logs=logs is not None,
            screenshot=screenshot,
            logs=logs,
        )


class SubmitterConfig(BaseModel):
    """Static configuration of a submitter, fixed for its lifetime."""

    model_config = ConfigDict(frozen=True)

    base_url: str
    username: str
    password: str

    project_key: str
    summary_prefix: str | None = "Mobile"
    description_prefix: str | None = None
    description_suffix: str | None = None
    issue_type: str | None = None
    assignee: str | None = None
    reporter: str | None = None
    priority_id: str | None = None
    custom_fields: dict[str, Any] = Field(default_factory=dict)

    wait_dialog_title: str = "Please hold on..."
    wait_dialog_message: str = "Submitting your feedback to JIRA Project: {project_key} ..."
    success_message: str = "Thank you for your feedback!"
    failure_message: str = "An error happened - please try again later"

    debug: bool = False

    @property
    def issue_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/issue"

    def attachments_url(self, issue_key: str) -> str:
        return f"{self.issue_url}/{issue_key}/attachments"

    @property
    def wait_message(self) -> str:
        """Wait dialog message with ``{project_key}`` filled in."""
        return self.wait_dialog_message.replace("{project_key}", self.project_key)


class IssueResponse(BaseModel):
    """Jira's reply to an issue creation request.

    ``body`` is the parsed JSON, the raw text when Jira did not answer
    with JSON, or None for an empty body. Transport failures are recorded
    with status 0 and the error text as body.
    """

    status_code: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return 100 <= self.status_code < 399

    @property
    def issue_key(self) -> str | None:
        if isinstance(self.body, dict):
            key = self.body.get("key")
            return str(key) if key else None
        return None


class AttachmentUploadResult(BaseModel):
    """Outcome of the attachment upload step."""

    status_code: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return 100 <= self.status_code < 399


# Used when there is nothing to attach
NO_ATTACHMENTS = AttachmentUploadResult(status_code=201)


class FeedbackAccepted(BaseModel):
    """Response after feedback has been handed to the submitter."""

    accepted: bool
    message: str = ""


class NotificationLog(BaseModel):
    """Notifications emitted so far, oldest first."""

    notifications: list[str]
