"""suggest command: propose reviewers for a pull request."""

from __future__ import annotations

import click
from rich.console import Console

from quorum_cli.commands.common import open_pull, open_trigger
from quorum_core.errors import QuorumError
from quorum_core.gh.pr_info import PullPRInfo

console = Console()


@click.command("suggest")
@click.option("--repo", required=True, help="GitHub repository in owner/name format.")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.option(
    "--count",
    type=click.IntRange(min=1),
    default=None,
    help="Number of reviewers. Defaults to review.total_number_of_reviewers.",
)
@click.option("--notify", is_flag=True, help="Post the suggestion as a review notification comment.")
@click.pass_context
def suggest_cmd(ctx, repo: str, pr_number: int, count: int | None, notify: bool):
    """Pick reviewers from the owners of the files the PR touches.

    Leaf owners are preferred over inherited ones; approvers fill in when
    there are not enough reviewers. The PR author is never suggested.
    """
    trigger = open_trigger(ctx, repo)
    pull = open_pull(trigger, repo, pr_number)
    info = PullPRInfo(repo, pull)

    try:
        if notify:
            reviewers = trigger.add_review_notification(pull, info)
        else:
            owners = trigger.gen_repo_owners(info.target_branch)
            reviewers = trigger.suggest(pull, info, owners, count=count)
    except QuorumError as e:
        raise click.ClickException(str(e))

    if not reviewers:
        console.print("[yellow]No eligible reviewers found.[/yellow]")
        return

    console.print(f"\nSuggested reviewers for [bold]{repo}#{pr_number}[/bold]:")
    for login in reviewers:
        console.print(f"  @{login}")
