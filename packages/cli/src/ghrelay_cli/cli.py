"""CLI entry point for ghrelay.

Commands:
  notify    relay a discussion comment event to a Slack channel
  mentions  show the GitHub → Slack mention map stored in the repository
"""

from __future__ import annotations

import importlib.metadata
import logging
import sys

import click
from rich.console import Console

from ghrelay_cli.commands.mentions import mentions_cmd
from ghrelay_cli.commands.notify import notify_cmd

console = Console()


@click.group()
@click.version_option(
    version=importlib.metadata.version("ghrelay"),
    prog_name="ghrelay",
)
@click.option(
    "--config",
    "config_path",
    default=".ghrelay.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="GHRELAY_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Relay GitHub Discussion comments to Slack."""
    from ghrelay_core.config import load_config
    from ghrelay_core.errors import ConfigurationError
    from ghrelay_cli.auth import resolve_github_token

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    ctx.ensure_object(dict)

    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        console.print(str(e), markup=False, soft_wrap=True)
        sys.exit(1)

    # Resolve the token once so every subcommand shares the same result.
    if not config.github_token:
        config = config.with_overrides({"github_token": resolve_github_token()})

    ctx.obj["config"] = config


main.add_command(notify_cmd)
main.add_command(mentions_cmd)
