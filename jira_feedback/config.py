"""Application configuration via environment variables."""

from functools import lru_cache
from typing import Any

from pydantic_settings import BaseSettings

from jira_feedback.models.feedback import SubmitterConfig


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False

    # Jira REST API (e.g. https://jira.example.com/rest/api/2)
    jira_base_url: str = ""
    jira_username: str = ""
    jira_password: str = ""

    # Issue fields
    jira_project_key: str = ""
    jira_issue_summary_prefix: str | None = "Mobile"
    jira_issue_description_prefix: str | None = None
    jira_issue_description_suffix: str | None = None
    jira_issue_type: str | None = None
    jira_issue_assignee: str | None = None
    jira_issue_reporter: str | None = None
    jira_issue_priority_id: str | None = None
    jira_custom_fields: dict[str, Any] = {}  # JSON in the environment

    # User-facing messages
    wait_dialog_title: str = "Please hold on..."
    wait_dialog_message: str = "Submitting your feedback to JIRA Project: {project_key} ..."
    success_message: str = "Thank you for your feedback!"
    failure_message: str = "An error happened - please try again later"

    model_config = {"env_file": ".env", "extra": "ignore"}

    def submitter_config(self) -> SubmitterConfig:
        """Freeze the Jira-related settings into a submitter configuration."""
        return SubmitterConfig(
            base_url=self.jira_base_url,
            username=self.jira_username,
            password=self.jira_password,
            project_key=self.jira_project_key,
            summary_prefix=self.jira_issue_summary_prefix,
            description_prefix=self.jira_issue_description_prefix,
            description_suffix=self.jira_issue_description_suffix,
            issue_type=self.jira_issue_type,
            assignee=self.jira_issue_assignee,
            reporter=self.jira_issue_reporter,
            priority_id=self.jira_issue_priority_id,
            custom_fields=self.jira_custom_fields,
            wait_dialog_title=self.wait_dialog_title,
            wait_dialog_message=self.wait_dialog_message,
            success_message=self.success_message,
            failure_message=self.failure_message,
            debug=self.debug,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
