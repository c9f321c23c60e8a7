"""notify command: relay the triggering discussion comment to Slack."""

from __future__ import annotations

import sys

import click
from rich.console import Console

from ghrelay_core.errors import RelayError
from ghrelay_core.relay import run_relay

console = Console()


@click.command("notify")
@click.option("--event-path", default=None, help="Event payload file. Defaults to GITHUB_EVENT_PATH.")
@click.option("--repo", "repository", default=None, help="Repository holding the mention map (owner/name).")
@click.option(
    "--mention-map",
    "mention_map_path",
    default=None,
    help="Path of the mention map JSON file inside the repository.",
)
@click.option("--channel", "slack_channel", default=None, help="Slack channel ID to post to.")
@click.option(
    "--shadow",
    "-s",
    is_flag=True,
    help="Dry-run mode: print the message without posting to Slack.",
)
@click.pass_context
def notify_cmd(
    ctx,
    event_path: str | None,
    repository: str | None,
    mention_map_path: str | None,
    slack_channel: str | None,
    shadow: bool,
):
    """Post the discussion comment from the event payload to Slack.

    \b
    Recognised environment variables:
      GITHUB_EVENT_PATH              Event payload written by the runner
      GITHUB_REPOSITORY              Repository holding the mention map
      INPUT_SLACK_MENTION_MAP_PATH   Mention map path in the repository
      INPUT_GITHUB_TOKEN             GitHub token (or GITHUB_TOKEN / gh CLI)
      INPUT_SLACK_API_TOKEN          Slack bot token
      INPUT_SLACK_CHANNEL            Slack channel ID
    """
    config = ctx.obj["config"].with_overrides(
        {
            "event_path": event_path,
            "repository": repository,
            "mention_map_path": mention_map_path,
            "slack_channel": slack_channel,
        }
    )

    try:
        summary = run_relay(config, shadow=shadow)
    except RelayError as e:
        console.print(str(e), markup=False, soft_wrap=True)
        sys.exit(1)

    if summary.posted:
        console.print("Message sent successfully")
