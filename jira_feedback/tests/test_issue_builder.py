"""Tests for issue payload construction — pure logic, no mocks needed."""

from jira_feedback.models.feedback import Feedback
from jira_feedback.services.issue_builder import (
    build_attachment_files,
    build_description,
    build_issue_fields,
    build_summary,
    format_device_info,
)


def test_description_skips_absent_metadata():
    description = build_description(
        "broken button", {"os": "v1", "device": None}, prefix="BUG", suffix=None
    )
    assert description == "BUG\nbroken button\n\n\n\n**Context**\n- os : v1"


def test_description_with_suffix_keeps_order():
    description = build_description(
        "slow", {"app": "2.0", "os": "14"}, prefix=None, suffix="Sent from QA"
    )
    assert description == (
        "slow\nSent from QA\n\n\n\n**Context**\n- app : 2.0\n- os : 14"
    )


def test_description_without_metadata_ends_with_context_header():
    assert build_description("", None) == "\n\n\n\n**Context**\n"


def test_format_device_info_preserves_insertion_order():
    info = {"b": "2", "a": "1", "skip": None}
    assert format_device_info(info) == "- b : 2\n- a : 1"


def test_summary_prefix():
    assert build_summary("Mobile") == "[Mobile] New Feedback"
    assert build_summary(None) == "New Feedback"


def test_issue_fields_standard_keys(submitter_config):
    feedback = Feedback(user_comment="hello", device_and_app_info={"os": "v1"})
    fields = build_issue_fields(submitter_config, feedback)

    assert fields["project"] == {"key": "MOB"}
    assert fields["summary"] == "[Mobile] New Feedback"
    assert fields["description"].startswith("hello\n")
    assert fields["issuetype"] == {"name": "Bug"}
    # Unset optional values are sent as empty strings
    assert fields["assignee"] == {"name": ""}
    assert fields["reporter"] == {"name": ""}
    assert fields["priority"] == {"id": ""}


def test_issue_fields_without_feedback(submitter_config):
    fields = build_issue_fields(submitter_config, None)
    assert fields["description"] == "\n\n\n\n**Context**\n"


def test_custom_fields_merged_alongside_standard_fields(submitter_config):
    config = submitter_config.model_copy(update={"custom_fields": {"labels": "mobile"}})
    fields = build_issue_fields(config, Feedback(user_comment="x"))

    assert fields["labels"] == "mobile"
    assert fields["project"] == {"key": "MOB"}
    assert "summary" in fields


def test_custom_fields_override_standard_fields(submitter_config):
    config = submitter_config.model_copy(
        update={"custom_fields": {"summary": "Custom title"}}
    )
    fields = build_issue_fields(config, Feedback())
    assert fields["summary"] == "Custom title"


def test_attachment_files_follow_flags():
    feedback = Feedback(
        include_screenshot=True,
        include_logs=True,
        screenshot=b"\x89PNG",
        logs=b"line 1\n",
    )
    files = build_attachment_files(feedback)
    assert files == [
        ("file", ("screenshot.png", b"\x89PNG", "image/png")),
        ("file", ("logcat.txt", b"line 1\n", "text/plain")),
    ]


def test_attachment_files_ignore_unflagged_content():
    feedback = Feedback(include_screenshot=False, screenshot=b"\x89PNG")
    assert build_attachment_files(feedback) == []
    assert build_attachment_files(None) == []
