"""Slack delivery via the Web API ``chat.postMessage`` method."""

from __future__ import annotations

import logging

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from ghrelay_core.errors import NetworkError, RemoteError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://slack.com/api/"


def get_client(token: str, base_url: str = DEFAULT_API_URL, timeout: float = 10) -> WebClient:
    base_url = base_url if base_url.endswith("/") else base_url + "/"
    # An empty handler list turns off slack_sdk's connection-error retry.
    return WebClient(token=token, base_url=base_url, timeout=timeout, retry_handlers=[])


def send_message(
    token: str,
    channel: str,
    text: str,
    *,
    base_url: str = DEFAULT_API_URL,
    timeout: float = 10,
    client: WebClient | None = None,
) -> str | None:
    """Post ``text`` to ``channel`` and return the message timestamp.

    slack_sdk sends ``{"channel": ..., "text": ...}`` as JSON with a bearer
    token. A non-200 status and an ``"ok": false`` body both raise RemoteError.
    """
    client = client or get_client(token, base_url=base_url, timeout=timeout)
    try:
        response = client.chat_postMessage(channel=channel, text=text)
    except SlackApiError as e:
        status = e.response.status_code
        data = e.response.data if isinstance(e.response.data, dict) else {}
        reason = data.get("error")
        raise RemoteError(f"error status not OK: {status} {reason or ''}".rstrip(), status=status, reason=reason) from e
    except OSError as e:
        # urllib's URLError and socket timeouts both derive from OSError.
        raise NetworkError(f"error sending request: {e}") from e

    logger.info("Posted message to Slack channel %s", channel)
    return response.get("ts")
