import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

import yaml

from ghrelay_core.errors import ConfigurationError

DEFAULT_CONFIG: dict = {
    "github_api_url": "https://api.github.com",
    "slack_api_url": "https://slack.com/api/",
    "timeout": 10,
    "mention_map_path": None,  # path of the JSON mention map inside the repository
    "slack_channel": None,
}

# Keys a config file may set. Tokens are deliberately absent: they only come
# from the environment or the command line.
FILE_KEYS = {"github_api_url", "slack_api_url", "timeout", "mention_map_path", "slack_channel", "repository"}

# Environment variable → config field. Mirrors what the GitHub Actions runner
# injects: GITHUB_* for the workflow context and INPUT_* for `with:` inputs.
ENV_VARS: dict[str, tuple[str, ...]] = {
    "event_path": ("GITHUB_EVENT_PATH",),
    "repository": ("GITHUB_REPOSITORY",),
    "mention_map_path": ("INPUT_SLACK_MENTION_MAP_PATH",),
    "github_token": ("INPUT_GITHUB_TOKEN",),
    "slack_token": ("INPUT_SLACK_API_TOKEN", "SLACK_API_TOKEN"),
    "slack_channel": ("INPUT_SLACK_CHANNEL",),
    "github_api_url": ("GITHUB_API_URL",),
}

# Names reported when a required field is missing.
_DISPLAY_NAMES = {
    "event_path": "GITHUB_EVENT_PATH",
    "repository": "GITHUB_REPOSITORY",
    "mention_map_path": "SLACK_MENTION_MAP_PATH",
    "github_token": "GITHUB_TOKEN",
    "slack_token": "SLACK_API_TOKEN",
    "slack_channel": "SLACK_CHANNEL",
}


@dataclass(frozen=True)
class RelayConfig:
    """Everything the pipeline needs, resolved once at process start.

    Stages receive this object (or the individual values from it) and never
    look at the environment themselves.
    """

    event_path: Optional[str] = None
    repository: Optional[str] = None
    mention_map_path: Optional[str] = None
    github_token: Optional[str] = None
    slack_token: Optional[str] = None
    slack_channel: Optional[str] = None
    github_api_url: str = DEFAULT_CONFIG["github_api_url"]
    slack_api_url: str = DEFAULT_CONFIG["slack_api_url"]
    timeout: float = DEFAULT_CONFIG["timeout"]

    def require(self, *names: str) -> None:
        """Raise ConfigurationError for the first of ``names`` that is unset."""
        for name in names:
            if not getattr(self, name):
                raise ConfigurationError(f"{_DISPLAY_NAMES.get(name, name)} not found")

    def with_overrides(self, overrides: Optional[dict]) -> "RelayConfig":
        """Return a copy with every non-None override applied."""
        if not overrides:
            return self
        known = {f.name for f in fields(self)}
        changes = {k: v for k, v in overrides.items() if v is not None and k in known}
        return replace(self, **changes)


def _from_environment(environ) -> dict:
    values = {}
    for field_name, names in ENV_VARS.items():
        for name in names:
            value = environ.get(name)
            if value:
                values[field_name] = value
                break
    return values


def load_config(
    config_path: str = ".ghrelay.yml",
    cli_overrides: Optional[dict] = None,
    environ=None,
) -> RelayConfig:
    """
    Build the relay configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .ghrelay.yml in the current directory
      3. Environment variables (GitHub Actions conventions)
      4. CLI argument overrides
    """
    environ = os.environ if environ is None else environ
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        try:
            with open(path) as f:
                file_config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(f"could not load config file {config_path}: {exc}") from exc
        if not isinstance(file_config, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")
        config.update({k: v for k, v in file_config.items() if k in FILE_KEYS})

    config.update(_from_environment(environ))

    try:
        config["timeout"] = float(config["timeout"])
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"timeout must be a number, got {config['timeout']!r}") from exc

    return RelayConfig(**config).with_overrides(cli_overrides)
