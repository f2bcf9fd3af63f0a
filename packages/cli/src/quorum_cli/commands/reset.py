"""reset command: drop review state after new commits."""

from __future__ import annotations

import click
from rich.console import Console

from quorum_cli.commands.common import open_pull, open_trigger
from quorum_core.errors import QuorumError
from quorum_core.gh.pr_info import PullPRInfo

console = Console()


@click.command("reset")
@click.option("--repo", required=True, help="GitHub repository in owner/name format.")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.pass_context
def reset_cmd(ctx, repo: str, pr_number: int):
    """Remove review labels and the bot's review notifications."""
    trigger = open_trigger(ctx, repo)
    pull = open_pull(trigger, repo, pr_number)

    try:
        removed = trigger.reset_to_review(pull, PullPRInfo(repo, pull))
    except QuorumError as e:
        raise click.ClickException(str(e))

    if removed:
        console.print(f"Removed labels: {', '.join(removed)}")
    else:
        console.print("[yellow]No review labels to remove.[/yellow]")
