from __future__ import annotations

"""Locate and read the optional ``secrets.json`` store."""

from collections.abc import Iterable, Mapping
import json
import os
from pathlib import Path
from typing import Any

__all__ = [
    "SECRETS_FILE_NAME",
    "APP_IDENTIFIER",
    "PROJECT_ROOT",
    "iter_candidate_files",
    "load_secrets",
    "read_discord_token",
]

SECRETS_FILE_NAME = "secrets.json"
APP_IDENTIFIER = "printer-bot"

# Repository root used for the project-level secrets file.
PROJECT_ROOT = Path(__file__).resolve().parent.parent


def iter_candidate_files(
    project_root: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Iterable[Path]:
    """Yield candidate paths where ``secrets.json`` might live."""

    env = os.environ if environ is None else environ
    candidates = [(project_root or PROJECT_ROOT) / SECRETS_FILE_NAME]
    for var in ("XDG_CONFIG_HOME", "XDG_DATA_HOME"):
        base = env.get(var)
        if base:
            candidates.append(Path(base) / APP_IDENTIFIER / SECRETS_FILE_NAME)
    home = env.get("HOME")
    if home:
        candidates.append(Path(home) / ".config" / APP_IDENTIFIER / SECRETS_FILE_NAME)

    seen: set[Path] = set()
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)
        yield path


def load_secrets(
    project_root: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Return the first successfully parsed secrets mapping, if any."""

    for path in iter_candidate_files(project_root, environ):
        data = _read_json(path)
        if data is not None:
            return data
    return {}


def read_discord_token(secrets: Mapping[str, Any]) -> str | None:
    """Extract ``discord.botToken`` from a secrets mapping."""

    section = secrets.get("discord", {})
    if not isinstance(section, dict):
        return None
    token = section.get("botToken")
    if isinstance(token, str) and token.strip():
        return token.strip()
    return None


def _read_json(path: Path) -> dict[str, Any] | None:
    """Safely read ``path`` as JSON, returning ``None`` on failure."""

    if not path.exists():
        return None
    try:
        text = path.read_text(encoding="utf-8")
    except OSError:
        return None
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError, ValueError):
        return None
    if isinstance(data, dict):
        return data
    return None
