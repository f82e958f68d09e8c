"""Feedback submission to Jira.

``JiraFeedbackSubmitter`` is the listener a feedback client calls when the
user sends or dismisses feedback. Sending runs a short pipeline on the
event loop:

1. local connectivity precheck (synchronous, may abort with ``False``)
2. POST ``{base_url}/issue`` with the feedback as a new issue
3. POST ``{base_url}/issue/{key}/attachments`` if there is anything to attach
4. one final notification: success, partial success or failure

Steps 2-4 run in a background task; ``on_submit`` returns ``True`` as soon
as that task is launched. The outcome reaches the user only through the
notifier.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

import httpx

from jira_feedback.models.feedback import (
    NO_ATTACHMENTS,
    AttachmentUploadResult,
    Feedback,
    SubmitterConfig,
)
from jira_feedback.services.connectivity import (
    ConnectivityProbe,
    InterfaceConnectivityProbe,
)
from jira_feedback.services.http_client import post_attachments, post_issue
from jira_feedback.services.issue_builder import (
    build_attachment_files,
    build_issue_fields,
)
from jira_feedback.services.notifications import (
    LoggingNotifier,
    Notifier,
    WaitIndicator,
)

NO_CONNECTION_MESSAGE = "An Internet connection is required to send your feedback"
DISMISSED_MESSAGE = "Dismissed"


class SubmissionOutcome(str, Enum):
    """Terminal state of a submission that got past the connectivity check."""

    ISSUE_FAILED = "issue_failed"
    DONE = "done"
    DONE_PARTIAL = "done_partial"


class FeedbackListener(ABC):
    """What a feedback-collecting client calls back into."""

    @abstractmethod
    def on_submit(self, feedback: Feedback | None) -> bool:
        """Handle a send action. Returns False if sending could not start."""

    @abstractmethod
    def on_dismiss(self) -> None:
        """Handle the user closing the feedback form without sending."""


def _format_body(body: Any) -> str:
    if body is None:
        return "null"
    if isinstance(body, (dict, list)):
        return json.dumps(body)
    return str(body)


class JiraFeedbackSubmitter(FeedbackListener):
    """Creates a Jira issue per feedback and uploads its attachments.

    Args:
        config: Jira endpoint, credentials, issue fields and messages.
        notifier: Where user-visible messages and the wait indicator go.
        connectivity: Precheck run before anything is sent.
        logger: Sink for request/response traces, used only when
            ``config.debug`` is set.
    """

    def __init__(
        self,
        config: SubmitterConfig,
        notifier: Notifier | None = None,
        connectivity: ConnectivityProbe | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config
        self.notifier = notifier if notifier is not None else LoggingNotifier()
        self.connectivity = (
            connectivity if connectivity is not None else InterfaceConnectivityProbe()
        )
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self._auth = httpx.BasicAuth(config.username, config.password)
        # Strong references so running submissions are not garbage collected
        self._pending: set[asyncio.Task[SubmissionOutcome]] = set()

    def _trace(self, msg: str, *args: Any) -> None:
        if self.config.debug:
            self.logger.debug(msg, *args)

    def on_submit(self, feedback: Feedback | None) -> bool:
        """Start sending ``feedback`` to Jira.

        Must be called from the thread running the event loop. Returns
        False only when the connectivity precheck fails; otherwise True
        once the background submission has been launched, whatever its
        eventual outcome.
        """
        self._trace("on_submit")

        if not self.connectivity.is_connected_or_connecting():
            self.notifier.notify(NO_CONNECTION_MESSAGE)
            return False

        # Raises RuntimeError off the loop thread, before any indicator is shown
        loop = asyncio.get_running_loop()
        fields = build_issue_fields(self.config, feedback)

        indicator = self.notifier.show_wait(
            self.config.wait_dialog_title, self.config.wait_message
        )
        task = loop.create_task(self._run(feedback, fields, indicator))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return True

    submit = on_submit

    def on_dismiss(self) -> None:
        self._trace("on_dismiss")
        self.notifier.notify(DISMISSED_MESSAGE)

    dismiss = on_dismiss

    @property
    def pending(self) -> int:
        """Number of submissions still in flight."""
        return len(self._pending)

    async def wait_pending(self) -> list[SubmissionOutcome]:
        """Wait for every in-flight submission and return their outcomes."""
        if not self._pending:
            return []
        return list(await asyncio.gather(*self._pending))

    async def _run(
        self,
        feedback: Feedback | None,
        fields: dict[str, Any],
        indicator: WaitIndicator,
    ) -> SubmissionOutcome:
        try:
            return await self._create_and_attach(feedback, fields, indicator)
        finally:
            indicator.cancel()

    async def _create_and_attach(
        self,
        feedback: Feedback | None,
        fields: dict[str, Any],
        indicator: WaitIndicator,
    ) -> SubmissionOutcome:
        issue_url = self.config.issue_url
        issue = await post_issue(issue_url, fields, self._auth)
        self._trace(">>> POST %s", issue_url)
        self._trace(
            "<<< [%d] POST %s: \n%s", issue.status_code, issue_url, issue.body
        )

        issue_key = issue.issue_key
        if not issue.ok or issue_key is None:
            indicator.cancel()
            self._trace("Jira response body: %s", issue.body)
            self.notifier.notify(
                f"[{issue.status_code}] {self.config.failure_message} : "
                f"{_format_body(issue.body)}"
            )
            return SubmissionOutcome.ISSUE_FAILED

        upload = await self._upload_attachments(issue_key, feedback)

        indicator.cancel()
        created = f"{self.config.success_message}. Issue created: {issue_key}"
        if upload.ok:
            self.notifier.notify(created)
            return SubmissionOutcome.DONE

        self._trace("Jira response body: %s", upload.body)
        self.notifier.notify(
            f"{created}, but could not upload attachments: "
            f"[{upload.status_code}] {_format_body(upload.body)}"
        )
        return SubmissionOutcome.DONE_PARTIAL

    async def _upload_attachments(
        self, issue_key: str, feedback: Feedback | None
    ) -> AttachmentUploadResult:
        files = build_attachment_files(feedback)
        if not files:
            return NO_ATTACHMENTS

        url = self.config.attachments_url(issue_key)
        result = await post_attachments(url, files, self._auth)
        self._trace(">>> POST %s", url)
        self._trace("<<< [%d] POST %s: \n%s", result.status_code, url, result.body)
        return result
