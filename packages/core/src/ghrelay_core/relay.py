"""Relay orchestration: event file → formatted message → Slack."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console

from ghrelay_core.config import RelayConfig
from ghrelay_core.errors import RelayError
from ghrelay_core.event import load_event
from ghrelay_core.gh.contents import fetch_mention_map
from ghrelay_core.message import OutboundMessage, format_message, rewrite_mentions
from ghrelay_core.slack.notifier import send_message

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class RelaySummary:
    """Result returned by run_relay."""

    message: OutboundMessage
    mention_count: int
    posted: bool
    ts: str | None = None


def _stage(name: str, exc: RelayError) -> RelayError:
    """Prefix the error message with the failing stage, keeping its type."""
    exc.args = (f"{name}: {exc}",) + exc.args[1:]
    return exc


def load_mentions(config: RelayConfig) -> dict[str, str]:
    """Fetch the mention map configured in ``config``."""
    config.require("mention_map_path", "repository", "github_token")
    try:
        return fetch_mention_map(
            config.mention_map_path,
            config.repository,
            config.github_token,
            base_url=config.github_api_url,
            timeout=config.timeout,
        )
    except RelayError as exc:
        raise _stage("mention map", exc) from exc.__cause__


def run_relay(config: RelayConfig, shadow: bool = False) -> RelaySummary:
    """Run the whole pipeline once.

    Stages run strictly in order and the first failure aborts the run, so a
    failed mention map fetch never reaches Slack. In shadow mode the final
    message is printed instead of posted.
    """
    config.require("event_path")
    try:
        event = load_event(config.event_path)
    except RelayError as exc:
        raise _stage("event", exc) from exc.__cause__

    text = format_message(event)
    mention_map = load_mentions(config)
    message = OutboundMessage(channel=config.slack_channel or "", text=rewrite_mentions(text, mention_map))
    logger.debug("Rewrote mentions using %d entries", len(mention_map))

    if shadow:
        console.print(f"[bold]Shadow mode:[/bold] would post to {message.channel or '(no channel)'}:")
        console.print(message.text, markup=False, highlight=False, soft_wrap=True)
        return RelaySummary(message=message, mention_count=len(mention_map), posted=False)

    config.require("slack_token", "slack_channel")
    try:
        ts = send_message(
            config.slack_token,
            message.channel,
            message.text,
            base_url=config.slack_api_url,
            timeout=config.timeout,
        )
    except RelayError as exc:
        raise _stage("slack", exc) from exc.__cause__

    return RelaySummary(message=message, mention_count=len(mention_map), posted=True, ts=ts)
