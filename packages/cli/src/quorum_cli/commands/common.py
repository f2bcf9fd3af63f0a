"""Helpers shared by the commands that act on a repository."""

from __future__ import annotations

import click
from github import GithubException

from quorum_core.bot import ReviewTrigger
from quorum_core.config import validate_config
from quorum_core.gh.pull_request import get_pull, get_repo


def require_config(ctx: click.Context) -> dict:
    config = ctx.obj["config"]
    try:
        validate_config(config)
    except ValueError as e:
        raise click.UsageError(f"Invalid configuration: {e}")

    if not config.get("github_token"):
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    return config


def open_trigger(ctx: click.Context, repo: str) -> ReviewTrigger:
    config = require_config(ctx)
    try:
        repo_obj = get_repo(repo, token=config["github_token"])
    except GithubException as e:
        raise click.ClickException(f"Could not open {repo}: {e}")
    return ReviewTrigger(repo_obj, config)


def open_pull(trigger: ReviewTrigger, repo: str, pr_number: int):
    try:
        return get_pull(trigger.repo, pr_number)
    except GithubException:
        raise click.ClickException(f"PR #{pr_number} not found in {repo}.")
