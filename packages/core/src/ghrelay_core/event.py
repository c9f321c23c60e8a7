"""Discussion-comment event model and loader.

The runner writes the webhook payload that triggered the workflow to the file
named by GITHUB_EVENT_PATH. Only the fields used by the message formatter (and
a few siblings kept for completeness) are modeled; everything else in the
payload is ignored.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from ghrelay_core.errors import ConfigurationError, DecodeError, EventReadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class User:
    login: str = ""
    html_url: str = ""
    avatar_url: str = ""


@dataclass(frozen=True)
class Comment:
    body: str = ""
    html_url: str = ""
    created_at: str = ""
    user: User = field(default_factory=User)


@dataclass(frozen=True)
class Category:
    name: str = ""
    description: str = ""


@dataclass(frozen=True)
class Discussion:
    title: str = ""
    html_url: str = ""
    created_at: str = ""
    category: Category = field(default_factory=Category)


@dataclass(frozen=True)
class Event:
    """A ``discussion_comment`` event snapshot.

    Missing keys decode to empty strings, so ``Event()`` is the zero value
    returned when no event file exists.
    """

    action: str = ""
    comment: Comment = field(default_factory=Comment)
    discussion: Discussion = field(default_factory=Discussion)

    @classmethod
    def from_dict(cls, data: dict) -> Event:
        """Decode a parsed JSON payload, raising DecodeError on a shape mismatch."""
        payload = _object(data, "event")
        comment = _object(payload.get("comment"), "comment")
        user = _object(comment.get("user"), "comment.user")
        discussion = _object(payload.get("discussion"), "discussion")
        category = _object(discussion.get("category"), "discussion.category")

        return cls(
            action=_string(payload, "action", "event"),
            comment=Comment(
                body=_string(comment, "body", "comment"),
                html_url=_string(comment, "html_url", "comment"),
                created_at=_string(comment, "created_at", "comment"),
                user=User(
                    login=_string(user, "login", "comment.user"),
                    html_url=_string(user, "html_url", "comment.user"),
                    avatar_url=_string(user, "avatar_url", "comment.user"),
                ),
            ),
            discussion=Discussion(
                title=_string(discussion, "title", "discussion"),
                html_url=_string(discussion, "html_url", "discussion"),
                created_at=_string(discussion, "created_at", "discussion"),
                category=Category(
                    name=_string(category, "name", "discussion.category"),
                    description=_string(category, "description", "discussion.category"),
                ),
            ),
        )


def _object(value, where: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise DecodeError(f"failed to decode event payload: {where} must be an object, got {type(value).__name__}")
    return value


def _string(obj: dict, key: str, where: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(f"failed to decode event payload: {where}.{key} must be a string, got {type(value).__name__}")
    return value


def load_event(event_path: str) -> Event:
    """Read and decode the event file at ``event_path``.

    A path that does not exist yields the zero-valued ``Event()`` so test runs
    without a payload still produce (an empty) message.
    """
    if not event_path:
        raise ConfigurationError("required location not provided: GITHUB_EVENT_PATH")

    path = Path(event_path)
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        logger.info("Event file %s not found; continuing with an empty event.", event_path)
        return Event()
    except OSError as exc:
        raise EventReadError(f"could not read event file {event_path}: {exc}") from exc

    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise DecodeError(f"failed to decode event payload: {exc}") from exc

    event = Event.from_dict(data)
    logger.debug("Loaded %r event for comment %s", event.action, event.comment.html_url)
    return event
