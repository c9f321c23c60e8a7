"""mentions command: display the mention map stored in the repository."""

from __future__ import annotations

import sys

import click
from rich.console import Console
from rich.table import Table

from ghrelay_core.errors import RelayError
from ghrelay_core.relay import load_mentions

console = Console()


@click.command("mentions")
@click.option("--repo", "repository", default=None, help="Repository holding the mention map (owner/name).")
@click.option(
    "--mention-map",
    "mention_map_path",
    default=None,
    help="Path of the mention map JSON file inside the repository.",
)
@click.pass_context
def mentions_cmd(ctx, repository: str | None, mention_map_path: str | None):
    """Show which GitHub logins are rewritten to which Slack members."""
    config = ctx.obj["config"].with_overrides({"repository": repository, "mention_map_path": mention_map_path})

    try:
        mention_map = load_mentions(config)
    except RelayError as e:
        console.print(str(e), markup=False, soft_wrap=True)
        sys.exit(1)

    if not mention_map:
        console.print("[yellow]Mention map is empty.[/yellow]")
        return

    table = Table(title=f"Mention map: {config.repository}", show_header=True, header_style="bold cyan")
    table.add_column("GitHub login", style="bold")
    table.add_column("Slack mention")

    for login in sorted(mention_map, key=str.lower):
        table.add_row(f"@{login}", f"<@{mention_map[login]}>")

    console.print(table)
