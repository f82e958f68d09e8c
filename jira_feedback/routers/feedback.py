"""Feedback intake endpoints: hand feedback from remote clients to Jira."""

import json
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile
from pydantic import ValidationError

from jira_feedback.config import get_settings
from jira_feedback.middleware import request_id_var
from jira_feedback.models.feedback import Feedback, FeedbackAccepted, NotificationLog
from jira_feedback.services.notifications import RecordingNotifier
from jira_feedback.services.submitter import (
    NO_CONNECTION_MESSAGE,
    JiraFeedbackSubmitter,
)

router = APIRouter(prefix="/feedback", tags=["feedback"])
logger = logging.getLogger(__name__)

# Process-wide submitter, built from settings on first use
_submitter: JiraFeedbackSubmitter | None = None


def get_submitter() -> JiraFeedbackSubmitter:
    global _submitter
    if _submitter is None:
        settings = get_settings()
        _submitter = JiraFeedbackSubmitter(
            settings.submitter_config(), notifier=RecordingNotifier()
        )
    return _submitter


def _parse_device_info(raw: str) -> dict[str, str | None]:
    try:
        data = json.loads(raw) if raw else {}
    except json.JSONDecodeError:
        raise HTTPException(status_code=400, detail="device_info must be JSON")
    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="device_info must be an object")
    return data


@router.post("", response_model=FeedbackAccepted, status_code=202)
async def submit_feedback(
    comment: str = Form(""),
    device_info: str = Form("{}"),
    screenshot: UploadFile | None = File(None),
    logs: UploadFile | None = File(None),
    submitter: JiraFeedbackSubmitter = Depends(get_submitter),
):
    """Submit feedback. Created as a Jira issue in the background."""
    screenshot_data = await screenshot.read() if screenshot is not None else None
    logs_data = await logs.read() if logs is not None else None

    try:
        feedback = Feedback(
            user_comment=comment,
            device_and_app_info=_parse_device_info(device_info),
            include_screenshot=screenshot_data is not None,
            include_logs=logs_data is not None,
            screenshot=screenshot_data,
            logs=logs_data,
        )
    except ValidationError as e:
        logger.warning("Rejected feedback: %s", e)
        raise HTTPException(status_code=400, detail="Invalid device_info values")

    if not submitter.on_submit(feedback):
        raise HTTPException(status_code=503, detail=NO_CONNECTION_MESSAGE)

    logger.info(
        "Accepted feedback [%s] (screenshot=%s, logs=%s)",
        request_id_var.get(),
        feedback.include_screenshot,
        feedback.include_logs,
    )
    return FeedbackAccepted(
        accepted=True,
        message=submitter.config.wait_message,
    )


@router.post("/dismiss", status_code=204)
async def dismiss_feedback(
    submitter: JiraFeedbackSubmitter = Depends(get_submitter),
) -> Response:
    submitter.on_dismiss()
    return Response(status_code=204)


@router.get("/notifications", response_model=NotificationLog)
async def list_notifications(
    submitter: JiraFeedbackSubmitter = Depends(get_submitter),
):
    """Notifications emitted by the submitter, oldest first."""
    notifier = submitter.notifier
    messages = list(notifier.messages) if isinstance(notifier, RecordingNotifier) else []
    return NotificationLog(notifications=messages)
