"""CLI entry point for quorum.

Commands:
  check         recount review votes on a pull request (optionally sync labels)
  suggest       propose reviewers for a pull request
  reset         clear review labels and notifications after new commits
  handle-event  process a GitHub webhook payload (e.g. from GitHub Actions)
"""

from __future__ import annotations

import importlib.metadata
import logging

import click

from quorum_cli.commands.check import check_cmd
from quorum_cli.commands.event import handle_event_cmd
from quorum_cli.commands.reset import reset_cmd
from quorum_cli.commands.suggest import suggest_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("quorum"),
    prog_name="quorum",
)
@click.option(
    "--config",
    "config_path",
    default=".quorum.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="QUORUM_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Slash-command review governance for GitHub pull requests."""
    from quorum_core.config import load_config
    from quorum_cli.auth import resolve_github_token

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    ctx.ensure_object(dict)

    config = load_config(config_path)

    token = resolve_github_token()
    if token:
        config["github_token"] = token

    ctx.obj["config"] = config


main.add_command(check_cmd)
main.add_command(suggest_cmd)
main.add_command(reset_cmd)
main.add_command(handle_event_cmd)
