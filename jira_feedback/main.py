"""
Jira Feedback API

Thin FastAPI front for feedback clients: accepts feedback over HTTP and
forwards it to Jira as issues.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from jira_feedback.config import get_settings
from jira_feedback.middleware import RequestIDMiddleware
from jira_feedback.routers import feedback
from jira_feedback.services.connectivity import InterfaceConnectivityProbe
from jira_feedback.services.http_client import close_shared_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown."""
    yield
    await close_shared_client()


app = FastAPI(
    title="Jira Feedback API",
    description="Forwards user feedback to Jira as issues with attachments",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(RequestIDMiddleware)

app.include_router(feedback.router, prefix="/api")


def _check_config() -> str:
    """Verify the Jira connection settings are present. Returns 'ok' or 'fail'."""
    s = get_settings()
    if s.jira_base_url and s.jira_project_key and s.jira_username:
        return "ok"
    return "fail"


def _run_health_checks() -> dict[str, Any]:
    config_status = _check_config()
    network_status = (
        "ok" if InterfaceConnectivityProbe().is_connected_or_connecting() else "fail"
    )

    checks = {"config": config_status, "network": network_status}
    failed = [k for k, v in checks.items() if v != "ok"]

    if failed:
        overall = "degraded"
        logger.warning("Health check degraded — failed: %s", ", ".join(failed))
    else:
        overall = "ok"

    return {
        "status": overall,
        "service": "jira-feedback-api",
        "version": "0.1.0",
        "checks": checks,
    }


@app.get("/api/health")
async def health_check() -> JSONResponse:
    """Health check verifying configuration and network state."""
    result = _run_health_checks()
    return JSONResponse(content=result, status_code=200)
