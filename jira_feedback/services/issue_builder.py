"""Jira issue payload construction from feedback."""

from typing import Any

from jira_feedback.models.feedback import Feedback, SubmitterConfig

SUMMARY_LABEL = "New Feedback"
SCREENSHOT_FILENAME = "screenshot.png"
LOGS_FILENAME = "logcat.txt"


def format_device_info(info: dict[str, str | None] | None) -> str:
    """Render metadata as ``- key : value`` lines, skipping absent values."""
    if not info:
        return ""
    return "\n".join(
        f"- {key} : {value}" for key, value in info.items() if value is not None
    )


def build_summary(prefix: str | None) -> str:
    tag = f"[{prefix}] " if prefix is not None else ""
    return f"{tag}{SUMMARY_LABEL}"


def build_description(
    comment: str,
    device_info: dict[str, str | None] | None,
    prefix: str | None = None,
    suffix: str | None = None,
) -> str:
    """Assemble the issue description.

    Order is fixed: prefix, comment, suffix, blank line, Context header,
    metadata lines.
    """
    prefix_line = f"{prefix}\n" if prefix is not None else ""
    suffix_line = f"{suffix}\n" if suffix is not None else ""
    return (
        f"{prefix_line}{comment}\n{suffix_line}\n"
        f"\n\n**Context**\n{format_device_info(device_info)}"
    )


def build_issue_fields(
    config: SubmitterConfig, feedback: Feedback | None
) -> dict[str, Any]:
    """Build the ``fields`` object of a Jira create-issue request.

    Custom fields are merged last and may override the standard keys.
    """
    comment = feedback.user_comment if feedback is not None else ""
    device_info = feedback.device_and_app_info if feedback is not None else {}

    fields: dict[str, Any] = {
        "project": {"key": config.project_key},
        "summary": build_summary(config.summary_prefix),
        "description": build_description(
            comment,
            device_info,
            prefix=config.description_prefix,
            suffix=config.description_suffix,
        ),
        "issuetype": {"name": config.issue_type or ""},
        "assignee": {"name": config.assignee or ""},
        "reporter": {"name": config.reporter or ""},
        "priority": {"id": config.priority_id or ""},
    }
    fields.update(config.custom_fields)
    return fields


def build_attachment_files(
    feedback: Feedback | None,
) -> list[tuple[str, tuple[str, bytes, str]]]:
    """Collect the files to upload, in httpx multipart form.

    Jira expects every attachment under the ``file`` form field.
    """
    if feedback is None:
        return []
    files: list[tuple[str, tuple[str, bytes, str]]] = []
    if feedback.include_screenshot and feedback.screenshot is not None:
        files.append(("file", (SCREENSHOT_FILENAME, feedback.screenshot, "image/png")))
    if feedback.include_logs and feedback.logs is not None:
        files.append(("file", (LOGS_FILENAME, feedback.logs, "text/plain")))
    return files
