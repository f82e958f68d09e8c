"""Shared fixtures for jira-feedback tests."""

import httpx
import pytest

from jira_feedback.models.feedback import SubmitterConfig
from jira_feedback.services.connectivity import StaticConnectivityProbe
from jira_feedback.services.notifications import RecordingNotifier

JIRA_TEST_URL = "https://jira.test"


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Reset all module-level singletons and caches between tests."""
    yield

    # 1. Settings LRU cache
    from jira_feedback.config import get_settings

    get_settings.cache_clear()

    # 2. HTTP client singleton
    import jira_feedback.services.http_client as http_mod

    http_mod._client = None

    # 3. Submitter singleton behind the intake endpoints
    import jira_feedback.routers.feedback as fb_mod

    fb_mod._submitter = None


@pytest.fixture
def mock_settings(monkeypatch):
    """Provide a Settings object with safe test defaults."""
    from jira_feedback.config import Settings, get_settings

    test_settings = Settings(
        jira_base_url="https://jira.test/rest/api/2",
        jira_username="reporter",
        jira_password="secret",  # noqa: S106
        jira_project_key="MOB",
        jira_issue_type="Bug",
    )

    get_settings.cache_clear()
    monkeypatch.setattr("jira_feedback.config.get_settings", lambda: test_settings)

    # Patch get_settings in modules that import it directly
    for mod_path in [
        "jira_feedback.main",
        "jira_feedback.routers.feedback",
    ]:
        monkeypatch.setattr(f"{mod_path}.get_settings", lambda: test_settings)

    return test_settings


@pytest.fixture
def submitter_config():
    return SubmitterConfig(
        base_url="https://jira.test/rest/api/2",
        username="reporter",
        password="secret",  # noqa: S106
        project_key="MOB",
        issue_type="Bug",
    )


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def online():
    return StaticConnectivityProbe(True)


@pytest.fixture
def jira_api(monkeypatch):
    """Fake Jira: queue responses per URL suffix and inspect sent requests.

    Usage::

        jira_api.respond("/issue", httpx.Response(201, json={"key": "MOB-1"}))
        ...
        assert jira_api.calls[0]["url"].endswith("/issue")
    """

    class FakeJira:
        def __init__(self) -> None:
            self.calls: list[dict] = []
            self.responses: dict[str, httpx.Response | Exception] = {}

        def respond(self, suffix: str, response: httpx.Response | Exception) -> None:
            self.responses[suffix] = response

        def urls(self) -> list[str]:
            return [c["url"] for c in self.calls]

    fake = FakeJira()
    real_post = httpx.AsyncClient.post

    async def mock_post(self, url, **kwargs):
        # Requests against the app under test (ASGITransport) pass through
        if not str(url).startswith(JIRA_TEST_URL):
            return await real_post(self, url, **kwargs)
        fake.calls.append({"url": url, **kwargs})
        for suffix, response in fake.responses.items():
            if url.endswith(suffix):
                if isinstance(response, Exception):
                    raise response
                return response
        return httpx.Response(404, json={"errorMessages": ["not found"]})

    monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)
    return fake
