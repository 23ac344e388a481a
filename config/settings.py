from __future__ import annotations

"""Runtime settings for the printer bot.

Settings are read once at process start and handed to the bot explicitly.
Values come from the environment (a ``.env`` file in the working directory
is loaded first) with ``secrets.json`` as a fallback for the bot token.
"""

from collections.abc import Mapping
from dataclasses import dataclass
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from printer.errors import ConfigError

from . import secrets as secrets_cfg

__all__ = ["BotConfig", "TOKEN_ENV", "GUILD_ENV", "LOG_LEVEL_ENV"]

TOKEN_ENV = "DISCORD_TOKEN"
GUILD_ENV = "DISCORD_GUILD_ID"
LOG_LEVEL_ENV = "PRINTER_BOT_LOG_LEVEL"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class BotConfig:
    token: str
    guild_id: int | None = None
    log_level: str = "INFO"

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def load(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        project_root: Path | None = None,
    ) -> "BotConfig":
        """Build the configuration or raise :class:`ConfigError`.

        When ``environ`` is omitted the process environment is used after
        loading ``.env``; an explicit mapping is used as-is.
        """

        if environ is None:
            load_dotenv()
            environ = os.environ

        token = (environ.get(TOKEN_ENV) or "").strip()
        if not token:
            secrets = secrets_cfg.load_secrets(project_root, environ)
            token = secrets_cfg.read_discord_token(secrets) or ""
        if not token:
            raise ConfigError(f"Please set a value for {TOKEN_ENV}")

        raw_guild = (environ.get(GUILD_ENV) or "").strip()
        guild_id: int | None = None
        if raw_guild:
            try:
                guild_id = int(raw_guild)
            except ValueError as exc:
                raise ConfigError(f"{GUILD_ENV} must be a numeric id, got {raw_guild!r}") from exc

        log_level = (environ.get(LOG_LEVEL_ENV) or "INFO").strip().upper()
        if log_level not in _LOG_LEVELS:
            raise ConfigError(f"{LOG_LEVEL_ENV} must be one of {sorted(_LOG_LEVELS)}")

        return cls(token=token, guild_id=guild_id, log_level=log_level)
