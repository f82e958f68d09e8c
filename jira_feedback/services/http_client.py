"""Shared HTTP client utilities — reusable httpx client and Jira calls."""

import logging
from typing import Any

import httpx

from jira_feedback.models.feedback import AttachmentUploadResult, IssueResponse

logger = logging.getLogger(__name__)

USER_AGENT = "jira-feedback (v0.1.0)"
APPLICATION_JSON = "application/json"

# Module-level shared client (created lazily, lives for the process lifetime)
_client: httpx.AsyncClient | None = None


def get_shared_client() -> httpx.AsyncClient:
    """Return a shared httpx.AsyncClient, creating it on first call.

    No timeout override: requests use httpx's default timeout.
    """
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient()
    return _client


async def close_shared_client() -> None:
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
    _client = None


def jira_headers() -> dict[str, str]:
    """Build the headers for JSON requests against the Jira REST API."""
    return {
        "User-Agent": USER_AGENT,
        "Content-Type": APPLICATION_JSON,
        "Accept": APPLICATION_JSON,
    }


def attachment_headers() -> dict[str, str]:
    """Headers for attachment uploads.

    Jira rejects multipart uploads without the XSRF opt-out header.
    """
    return {"User-Agent": USER_AGENT, "X-Atlassian-Token": "nocheck"}


def parse_body(resp: httpx.Response) -> Any:
    """Return the JSON body, the raw text if it is not JSON, or None if empty."""
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError:
        return resp.text


async def post_issue(
    url: str, fields: dict[str, Any], auth: httpx.BasicAuth
) -> IssueResponse:
    """POST an issue creation request.

    Never raises: transport errors and malformed URLs come back as status 0
    with the error text as body so callers can report them like any other
    failure.
    """
    client = get_shared_client()
    try:
        resp = await client.post(
            url, headers=jira_headers(), auth=auth, json={"fields": fields}
        )
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.exception("Jira issue creation failed for %s", url)
        return IssueResponse(status_code=0, body=str(e))
    return IssueResponse(status_code=resp.status_code, body=parse_body(resp))


async def post_attachments(
    url: str,
    files: list[tuple[str, tuple[str, bytes, str]]],
    auth: httpx.BasicAuth,
) -> AttachmentUploadResult:
    """POST multipart attachments to an existing issue. Never raises."""
    client = get_shared_client()
    try:
        resp = await client.post(
            url, headers=attachment_headers(), auth=auth, files=files
        )
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.exception("Jira attachment upload failed for %s", url)
        return AttachmentUploadResult(status_code=0, body=str(e))
    return AttachmentUploadResult(
        status_code=resp.status_code, body=parse_body(resp)
    )
