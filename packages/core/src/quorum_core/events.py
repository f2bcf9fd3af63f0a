"""Route GitHub webhook deliveries to the review trigger."""

from __future__ import annotations

import logging

from quorum_core.bot import ReviewTrigger
from quorum_core.gh.pr_info import EventPRInfo
from quorum_core.gh.pull_request import get_pull

logger = logging.getLogger(__name__)


def dispatch(trigger: ReviewTrigger, event_name: str, payload: dict) -> None:
    if event_name == "issue_comment":
        handle_issue_comment(trigger, payload)
    elif event_name == "pull_request":
        handle_pull_request(trigger, payload)
    else:
        logger.debug("Ignoring %s event", event_name)


def handle_issue_comment(trigger: ReviewTrigger, payload: dict) -> None:
    issue = payload.get("issue") or {}
    if payload.get("action") != "created" or "pull_request" not in issue or issue.get("state") != "open":
        return

    comment = payload["comment"]
    pull = get_pull(trigger.repo, issue["number"])
    info = EventPRInfo(payload, pull=pull)
    trigger.handle_comment(pull, info, comment["user"]["login"], comment.get("body") or "")


def handle_pull_request(trigger: ReviewTrigger, payload: dict) -> None:
    pr = payload.get("pull_request") or {}
    if pr.get("state") != "open":
        return

    action = payload.get("action")
    if action not in ("opened", "synchronize", "labeled"):
        logger.debug("Ignoring pull_request action %s", action)
        return

    pull = get_pull(trigger.repo, pr["number"])
    info = EventPRInfo(payload, pull=pull)

    if action == "opened":
        if trigger.config.get("need_welcome"):
            trigger.welcome(pull, info)
    elif action == "synchronize":
        trigger.reset_to_review(pull, info)
    else:
        trigger.comment_after_ci(pull, info, (payload.get("label") or {}).get("name", ""))
