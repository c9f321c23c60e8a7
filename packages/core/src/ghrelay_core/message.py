"""Message formatting and Slack mention rewriting."""

from __future__ import annotations

from dataclasses import dataclass

from ghrelay_core.event import Event

MESSAGE_TEMPLATE = "New comment by [{login}]({user_url}) on [{title}]({discussion_url}) in category {category}: {body}"


@dataclass(frozen=True)
class OutboundMessage:
    """The final Slack payload. Built once, after mentions are rewritten."""

    channel: str
    text: str


def format_message(event: Event) -> str:
    """Render the one-line notification for a discussion comment.

    Field values are inserted verbatim. Markdown characters in the title or
    body are not escaped.
    """
    return MESSAGE_TEMPLATE.format(
        login=event.comment.user.login,
        user_url=event.comment.user.html_url,
        title=event.discussion.title,
        discussion_url=event.discussion.html_url,
        category=event.discussion.category.name,
        body=event.comment.body,
    )


def rewrite_mentions(text: str, mention_map: dict[str, str]) -> str:
    """Replace every ``@login`` in ``text`` with ``<@SLACK_ID>``.

    Logins are applied longest first (then alphabetically) so ``@alice`` is
    rewritten before a shorter ``@al`` can claim its prefix. Matching is a plain
    substring match; logins missing from the map stay as ``@login``.
    """
    for login in sorted(mention_map, key=lambda name: (-len(name), name)):
        if not login:
            continue
        text = text.replace(f"@{login}", f"<@{mention_map[login]}>")
    return text
