"""Tests for configuration loading."""

from dataclasses import FrozenInstanceError

import pytest

from ghrelay_core.config import RelayConfig, load_config
from ghrelay_core.errors import ConfigurationError

ACTIONS_ENV = {
    "GITHUB_EVENT_PATH": "/github/workflow/event.json",
    "GITHUB_REPOSITORY": "octo/repo",
    "INPUT_SLACK_MENTION_MAP_PATH": ".github/mentions.json",
    "INPUT_GITHUB_TOKEN": "gh-token",
    "INPUT_SLACK_API_TOKEN": "xoxb-token",
    "INPUT_SLACK_CHANNEL": "C123",
}


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"), environ={})
    assert config.github_api_url == "https://api.github.com"
    assert config.slack_api_url == "https://slack.com/api/"
    assert config.timeout == 10
    assert config.mention_map_path is None
    assert config.slack_channel is None
    assert config.github_token is None


def test_actions_environment_loaded(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"), environ=ACTIONS_ENV)
    assert config.event_path == "/github/workflow/event.json"
    assert config.repository == "octo/repo"
    assert config.mention_map_path == ".github/mentions.json"
    assert config.github_token == "gh-token"
    assert config.slack_token == "xoxb-token"
    assert config.slack_channel == "C123"


def test_plain_slack_token_used_when_input_missing(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"), environ={"SLACK_API_TOKEN": "xoxb-plain"})
    assert config.slack_token == "xoxb-plain"


def test_empty_env_values_ignored(tmp_path):
    cfg = tmp_path / ".ghrelay.yml"
    cfg.write_text("slack_channel: C999\n")
    config = load_config(config_path=str(cfg), environ={"INPUT_SLACK_CHANNEL": ""})
    assert config.slack_channel == "C999"


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".ghrelay.yml"
    cfg.write_text("slack_api_url: http://localhost:9000/api/\ntimeout: 3\nmention_map_path: mentions.json\n")
    config = load_config(config_path=str(cfg), environ={})
    assert config.slack_api_url == "http://localhost:9000/api/"
    assert config.timeout == 3.0
    assert config.mention_map_path == "mentions.json"


def test_environment_overrides_config_file(tmp_path):
    cfg = tmp_path / ".ghrelay.yml"
    cfg.write_text("slack_channel: C999\n")
    config = load_config(config_path=str(cfg), environ={"INPUT_SLACK_CHANNEL": "C123"})
    assert config.slack_channel == "C123"


def test_tokens_in_config_file_ignored(tmp_path):
    cfg = tmp_path / ".ghrelay.yml"
    cfg.write_text("github_token: leaked\nslack_token: leaked\n")
    config = load_config(config_path=str(cfg), environ={})
    assert config.github_token is None
    assert config.slack_token is None


def test_cli_overrides_environment(tmp_path):
    config = load_config(
        config_path=str(tmp_path / "nonexistent.yml"),
        cli_overrides={"slack_channel": "C777"},
        environ=ACTIONS_ENV,
    )
    assert config.slack_channel == "C777"


def test_none_cli_overrides_ignored(tmp_path):
    config = load_config(
        config_path=str(tmp_path / "nonexistent.yml"),
        cli_overrides={"slack_channel": None},
        environ=ACTIONS_ENV,
    )
    assert config.slack_channel == "C123"


def test_non_mapping_config_file_raises(tmp_path):
    cfg = tmp_path / ".ghrelay.yml"
    cfg.write_text("- just\n- a list\n")
    with pytest.raises(ConfigurationError):
        load_config(config_path=str(cfg), environ={})


def test_invalid_timeout_raises(tmp_path):
    cfg = tmp_path / ".ghrelay.yml"
    cfg.write_text("timeout: soon\n")
    with pytest.raises(ConfigurationError, match="timeout"):
        load_config(config_path=str(cfg), environ={})


def test_env_vars_read_from_os_environ(monkeypatch, tmp_path):
    monkeypatch.setenv("GITHUB_REPOSITORY", "someone/else")
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config.repository == "someone/else"


class TestRequire:
    def test_passes_when_all_present(self):
        RelayConfig(slack_token="x", slack_channel="C1").require("slack_token", "slack_channel")

    def test_names_first_missing_field(self):
        config = RelayConfig(slack_token="x")
        with pytest.raises(ConfigurationError, match="SLACK_CHANNEL not found"):
            config.require("slack_token", "slack_channel")

    def test_empty_string_counts_as_missing(self):
        with pytest.raises(ConfigurationError, match="GITHUB_EVENT_PATH"):
            RelayConfig(event_path="").require("event_path")


def test_config_is_immutable():
    config = RelayConfig()
    with pytest.raises(FrozenInstanceError):
        config.slack_channel = "C1"
    updated = config.with_overrides({"slack_channel": "C1"})
    assert updated.slack_channel == "C1"
    assert config.slack_channel is None


def test_malformed_yaml_raises_configuration_error(tmp_path):
    cfg = tmp_path / ".ghrelay.yml"
    cfg.write_text("a: [unclosed\n")
    with pytest.raises(ConfigurationError, match="could not load config file"):
        load_config(config_path=str(cfg), environ={})


def test_unreadable_config_path_raises_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError, match="could not load config file"):
        load_config(config_path=str(tmp_path), environ={})
