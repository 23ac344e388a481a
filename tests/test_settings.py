"""Tests for configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from config import secrets as secrets_cfg
from config.settings import BotConfig
from printer.errors import ConfigError


def _write_secrets(path: Path, token: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"discord": {"botToken": token}}), encoding="utf-8")


def test_token_from_environment(tmp_path: Path) -> None:
    config = BotConfig.load({"DISCORD_TOKEN": " abc123 "}, project_root=tmp_path)
    assert config.token == "abc123"
    assert config.guild_id is None
    assert config.log_level == "INFO"


def test_missing_token_is_fatal(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="DISCORD_TOKEN"):
        BotConfig.load({"HOME": str(tmp_path)}, project_root=tmp_path)


def test_token_from_project_secrets(tmp_path: Path) -> None:
    _write_secrets(tmp_path / "secrets.json", "from-file")
    config = BotConfig.load({}, project_root=tmp_path)
    assert config.token == "from-file"


def test_environment_wins_over_secrets(tmp_path: Path) -> None:
    _write_secrets(tmp_path / "secrets.json", "from-file")
    config = BotConfig.load({"DISCORD_TOKEN": "from-env"}, project_root=tmp_path)
    assert config.token == "from-env"


def test_token_from_xdg_config(tmp_path: Path) -> None:
    xdg = tmp_path / "xdg"
    _write_secrets(xdg / secrets_cfg.APP_IDENTIFIER / secrets_cfg.SECRETS_FILE_NAME, "xdg-token")
    config = BotConfig.load({"XDG_CONFIG_HOME": str(xdg)}, project_root=tmp_path / "project")
    assert config.token == "xdg-token"


def test_malformed_secrets_are_ignored(tmp_path: Path) -> None:
    (tmp_path / "secrets.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        BotConfig.load({}, project_root=tmp_path)


def test_guild_and_log_level(tmp_path: Path) -> None:
    config = BotConfig.load(
        {"DISCORD_TOKEN": "t", "DISCORD_GUILD_ID": "1234", "PRINTER_BOT_LOG_LEVEL": "debug"},
        project_root=tmp_path,
    )
    assert config.guild_id == 1234
    assert config.log_level == "DEBUG"
    assert config.log_level_value == 10


def test_invalid_guild_id(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="DISCORD_GUILD_ID"):
        BotConfig.load({"DISCORD_TOKEN": "t", "DISCORD_GUILD_ID": "general"}, project_root=tmp_path)


def test_invalid_log_level(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        BotConfig.load({"DISCORD_TOKEN": "t", "PRINTER_BOT_LOG_LEVEL": "loud"}, project_root=tmp_path)


def test_load_reads_process_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DISCORD_TOKEN", "process-token")
    assert BotConfig.load(project_root=tmp_path).token == "process-token"
