"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) away from the CLI.
- Lets adapters (HTTP, console client) and the dispatcher read config the same way.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Language

APP_DIR_NAME = "xstro"


def get_user_config_dir() -> Path:
    """Per-user directory holding the global `.env` (APPDATA, Application Support or XDG)."""

    home = Path.home()
    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA") or home) / APP_DIR_NAME
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / APP_DIR_NAME
    return Path(os.environ.get("XDG_CONFIG_HOME") or home / ".config") / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _split_env_line(line: str) -> tuple[str, str] | None:
    """`KEY=value` (optionally `export`-ed and quoted) -> `(KEY, value)`."""

    line = line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export "):].lstrip()
    key, sep, value = line.partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        value = value[1:-1]
    return key, value


def read_env_file(env_path: Path) -> dict[str, str]:
    if not env_path.exists():
        return {}
    pairs = (_split_env_line(line) for line in env_path.read_text(encoding="utf-8").splitlines())
    return dict(pair for pair in pairs if pair is not None)


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Set variables in the user's global .env.

    Existing assignments are rewritten in place; comments and unrelated keys
    are left alone and new keys are appended. `None` values are skipped.
    """

    env_path = env_path or get_user_env_file()
    pending = {k: v for k, v in values.items() if v is not None}

    lines = env_path.read_text(encoding="utf-8").splitlines() if env_path.exists() else []
    if not lines:
        lines = ["# xstro user config (.env)"]
    for index, line in enumerate(lines):
        pair = _split_env_line(line)
        if pair and pair[0] in pending:
            lines[index] = f"{pair[0]}={pending.pop(pair[0])}"
    lines.extend(f"{key}={value}" for key, value in pending.items())

    env_path.parent.mkdir(parents=True, exist_ok=True)
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class BotMode(str, Enum):
    """Who may run non-public commands."""

    PRIVATE = "private"
    PUBLIC = "public"


class AppSettings(BaseSettings):
    """Central application settings.

    Why pydantic-settings:
    - Typed, validated env vars at the edge.
    - A single config contract for the CLI, dispatcher and adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="XSTRO_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    prefix: str = Field(
        default=".",
        max_length=5,
        description="Prefix that incoming text must start with to be treated as a command.",
    )
    mode: BotMode = Field(
        default=BotMode.PRIVATE,
        description="private: only sudo users and the bot itself run non-public commands.",
    )
    sudo: str = Field(
        default="",
        description="Comma separated phone numbers (any format) treated as sudo users.",
    )
    owner_number: str = Field(
        default="0",
        min_length=1,
        description="Number used as the chat/sender JID by the console session.",
    )
    language: Language = Field(
        default=Language.ENGLISH,
        description="Language of the string table (en/es).",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="xstro/0.1 (+https://github.com/AstroX11/Xstro)",
        min_length=1,
        description="User-Agent for media downloads.",
    )

    download_dir: Path = Field(
        default=Path("."),
        description="Directory where downloaded media is saved.",
    )
    plugins_dir: Path | None = Field(
        default=None,
        description="Optional directory with extra plugin modules (*.py).",
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level.",
    )

    @property
    def sudo_numbers(self) -> list[str]:
        return [part.strip() for part in self.sudo.split(",") if part.strip()]

    @field_validator("language", mode="before")
    @classmethod
    def parse_language(cls, v: object) -> object:
        if isinstance(v, Language):
            return v
        return Language.from_code(str(v) if v is not None else None)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level
