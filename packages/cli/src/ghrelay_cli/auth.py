"""Locate a GitHub token for reading the mention map.

Inside a workflow the token arrives as the action's ``github-token`` input
(INPUT_GITHUB_TOKEN) or as GITHUB_TOKEN. Running ghrelay by hand, the session
of the GitHub CLI is used instead, so ``gh auth login`` is all the setup needed.
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

TOKEN_ENV_VARS = ("INPUT_GITHUB_TOKEN", "GITHUB_TOKEN")
GH_TIMEOUT_SECONDS = 5


def _token_from_gh_cli() -> str | None:
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=GH_TIMEOUT_SECONDS,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.debug("gh CLI unavailable for token lookup: %s", e)
        return None

    if result.returncode != 0:
        logger.debug("gh auth token exited with %d", result.returncode)
        return None
    return result.stdout.strip() or None


def resolve_github_token() -> str | None:
    """Return the first token found in TOKEN_ENV_VARS, then from ``gh``.

    Returns None when nothing is available. A missing token is reported later,
    by the stage that needs it, as a ConfigurationError.
    """
    for name in TOKEN_ENV_VARS:
        token = os.environ.get(name)
        if token:
            logger.debug("Using GitHub token from %s", name)
            return token
    return _token_from_gh_cli()
