"""Mention map retrieval through the GitHub contents API.

The mention map is a JSON file committed to the repository that runs the
workflow, e.g. ``.github/slack-mentions.json``::

    {"octocat": "U024BE7LH", "hubot": "U0G9QF9C6"}

It is fetched over the API rather than read from the checkout so the workflow
does not need an ``actions/checkout`` step.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass

import requests
from github import Auth, Github, GithubException
from github.GithubException import BadAttributeException

from ghrelay_core.errors import DecodeError, NetworkError, RemoteError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"


@dataclass(frozen=True)
class ContentsEnvelope:
    """The single field consumed from a contents API response."""

    content: str

    def decode(self) -> bytes:
        """Return the file bytes. GitHub wraps the base64 text every 60 characters."""
        try:
            return base64.b64decode(self.content.replace("\n", ""), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodeError(f"error decoding content: {exc}") from exc


def get_repo(repo_name: str, token: str, base_url: str = DEFAULT_API_URL, timeout: float = 10):
    """Return a lazy Repository handle. No request is sent until it is used.

    Retries are disabled so each API call maps to exactly one HTTP request.
    """
    gh = Github(auth=Auth.Token(token), base_url=base_url.rstrip("/"), timeout=timeout, retry=None)
    return gh.get_repo(repo_name, lazy=True)


def fetch_contents(repo, file_path: str) -> ContentsEnvelope:
    """GET ``/repos/{owner}/{name}/contents/{file_path}`` and unwrap the envelope."""
    try:
        content_file = repo.get_contents(file_path)
    except GithubException as exc:
        raise RemoteError(f"error fetching file: status code {exc.status}", status=exc.status) from exc
    except requests.exceptions.RequestException as exc:
        raise NetworkError(f"error sending request: {exc}") from exc
    except (ValueError, TypeError) as exc:
        raise DecodeError(f"error unmarshalling JSON response: {exc}") from exc

    if isinstance(content_file, list):
        raise DecodeError(f"error retrieving content from JSON response: {file_path} is a directory")

    try:
        content = content_file.content
    except BadAttributeException as exc:
        raise DecodeError("error retrieving content from JSON response: content is not a string") from exc
    if not isinstance(content, str):
        raise DecodeError("error retrieving content from JSON response: content field missing")

    return ContentsEnvelope(content=content)


def parse_mention_map(raw: bytes) -> dict[str, str]:
    """Decode the mention map file into a flat ``{github_login: slack_id}`` dict."""
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise DecodeError(f"error unmarshalling mention map: {exc}") from exc

    if not isinstance(data, dict):
        raise DecodeError(f"error unmarshalling mention map: expected an object, got {type(data).__name__}")
    for login, slack_id in data.items():
        if not isinstance(slack_id, str):
            raise DecodeError(f"error unmarshalling mention map: value for {login!r} must be a string")
    return data


def fetch_mention_map(
    file_path: str,
    repo_name: str,
    token: str,
    *,
    base_url: str = DEFAULT_API_URL,
    timeout: float = 10,
) -> dict[str, str]:
    """Fetch and decode the mention map stored at ``file_path`` in ``repo_name``.

    Sends exactly one request. Raises NetworkError, RemoteError or DecodeError.
    """
    repo = get_repo(repo_name, token=token, base_url=base_url, timeout=timeout)
    envelope = fetch_contents(repo, file_path)
    mention_map = parse_mention_map(envelope.decode())
    logger.debug("Loaded %d mention entries from %s:%s", len(mention_map), repo_name, file_path)
    return mention_map
