"""Submit one feedback to Jira from the command line.

Usage:
    python -m scripts.submit_feedback "The save button does nothing"
    python -m scripts.submit_feedback "Crash on start" --logs app.log --info os=14
    python -m scripts.submit_feedback "Layout glitch" --screenshot shot.png --debug

Jira settings come from the environment / .env (see jira_feedback.config).
"""

import argparse
import asyncio
import logging
import sys

from jira_feedback.config import get_settings
from jira_feedback.models.feedback import Feedback
from jira_feedback.services.http_client import close_shared_client
from jira_feedback.services.submitter import JiraFeedbackSubmitter, SubmissionOutcome

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def _parse_info(pairs: list[str]) -> dict[str, str | None]:
    info: dict[str, str | None] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        info[key] = value if sep else None
    return info


async def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("comment", help="Feedback text")
    parser.add_argument("--screenshot", help="PNG file to attach")
    parser.add_argument("--logs", help="Log file to attach")
    parser.add_argument(
        "--info",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Device/app context line (repeatable)",
    )
    parser.add_argument("--debug", action="store_true", help="Trace Jira requests")
    args = parser.parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    settings = get_settings()
    config = settings.submitter_config().model_copy(
        update={"debug": args.debug or settings.debug}
    )
    submitter = JiraFeedbackSubmitter(config)

    feedback = Feedback.from_paths(
        user_comment=args.comment,
        device_and_app_info=_parse_info(args.info),
        screenshot_path=args.screenshot,
        logs_path=args.logs,
    )

    try:
        if not submitter.on_submit(feedback):
            return 2
        outcomes = await submitter.wait_pending()
    finally:
        await close_shared_client()

    return 0 if outcomes == [SubmissionOutcome.DONE] else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
