"""handle-event command: process one GitHub webhook delivery.

Meant for a GitHub Actions job triggered on ``issue_comment`` and
``pull_request``, where the event name and payload path are exposed as
GITHUB_EVENT_NAME and GITHUB_EVENT_PATH.
"""

from __future__ import annotations

import json

import click
from github import GithubException

from quorum_cli.commands.common import open_trigger
from quorum_core.errors import QuorumError
from quorum_core.events import dispatch


@click.command("handle-event")
@click.option("--repo", required=True, envvar="GITHUB_REPOSITORY", help="GitHub repository in owner/name format.")
@click.option("--event-name", required=True, envvar="GITHUB_EVENT_NAME", help="Webhook event name.")
@click.option(
    "--payload",
    "payload_path",
    required=True,
    envvar="GITHUB_EVENT_PATH",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to the webhook payload JSON.",
)
@click.pass_context
def handle_event_cmd(ctx, repo: str, event_name: str, payload_path: str):
    """Handle a pull request or comment event."""
    with open(payload_path, encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise click.ClickException(f"Invalid payload JSON: {e}")

    trigger = open_trigger(ctx, repo)
    try:
        dispatch(trigger, event_name, payload)
    except (QuorumError, GithubException) as e:
        raise click.ClickException(f"Handling {event_name} failed: {e}")
