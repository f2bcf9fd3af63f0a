"""check command: recount the review votes on a pull request."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from quorum_cli.commands.common import open_pull, open_trigger
from quorum_core.errors import QuorumError
from quorum_core.gh.pr_info import PullPRInfo
from quorum_core.gh.pull_request import get_labels

console = Console()

_STATUS_STYLE = {
    "rejected": "red",
    "changes requested": "red",
    "approved": "green",
    "lgtm": "cyan",
    "pending": "yellow",
}


def _names(identities) -> str:
    return ", ".join(identities) or "-"


@click.command("check")
@click.option("--repo", required=True, help="GitHub repository in owner/name format.")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.option("--apply", "apply_labels", is_flag=True, help="Sync review labels and the notification comment.")
@click.pass_context
def check_cmd(ctx, repo: str, pr_number: int, apply_labels: bool):
    """Show who agreed, who objected, and whether the PR is approved.

    Votes cast before the latest commit are ignored. With --apply the
    approved/lgtm/request-change labels are synced to the result.
    """
    trigger = open_trigger(ctx, repo)
    pull = open_pull(trigger, repo, pr_number)
    info = PullPRInfo(repo, pull)

    try:
        evaluation = trigger.evaluate(pull, info)
    except QuorumError as e:
        raise click.ClickException(str(e))

    summary, result = evaluation.summary, evaluation.result

    table = Table(title=f"Review votes for {repo}#{pr_number}", show_header=True, header_style="bold cyan")
    table.add_column("Role", style="bold")
    table.add_column("Agreed")
    table.add_column("Disagreed")
    table.add_row("Approvers", _names(summary.agreed_approvers), _names(summary.disagreed_approvers))
    table.add_row("Reviewers", _names(summary.agreed_reviewers), _names(summary.disagreed_reviewers))
    console.print(table)

    style = _STATUS_STYLE.get(result.status, "white")
    console.print(f"Status: [{style}]{result.status}[/{style}]  ({evaluation.coverage.number_of_files()} file(s))")
    if not result.is_lgtm and not result.is_rejected and not result.is_lbtm:
        console.print(f"  {result.need_lgtm_num} more /lgtm needed.")

    if apply_labels:
        try:
            trigger.post_review_result(pull, evaluation, can_review=trigger.can_start_review(get_labels(pull)))
        except QuorumError as e:
            raise click.ClickException(f"Could not apply the review result: {e}")
        console.print("[green]Review labels and notification updated.[/green]")
