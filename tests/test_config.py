"""
Unit tests for settings.
"""

import pytest
from pydantic import ValidationError

from core.config import AppSettings, BotMode, read_env_file, write_user_env_vars
from core.domain.language import Language


def test_defaults():
    settings = AppSettings(_env_file=None)

    assert settings.prefix == "."
    assert settings.mode is BotMode.PRIVATE
    assert settings.language is Language.ENGLISH
    assert settings.sudo_numbers == []


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("XSTRO_PREFIX", "!")
    monkeypatch.setenv("XSTRO_MODE", "public")
    monkeypatch.setenv("XSTRO_SUDO", "15550001111, +1 555 222 3333,")

    settings = AppSettings(_env_file=None)

    assert settings.prefix == "!"
    assert settings.mode is BotMode.PUBLIC
    assert settings.sudo_numbers == ["15550001111", "+1 555 222 3333"]


def test_log_level_validation():
    assert AppSettings(_env_file=None, log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None, log_level="LOUD")


def test_language_accepts_loose_codes(monkeypatch):
    monkeypatch.setenv("XSTRO_LANGUAGE", "ES-mx")
    assert AppSettings(_env_file=None).language is Language.SPANISH

    monkeypatch.setenv("XSTRO_LANGUAGE", "fr")
    assert AppSettings(_env_file=None).language is Language.ENGLISH


def test_write_user_env_vars_updates_in_place(tmp_path):
    env_path = tmp_path / "cfg" / ".env"
    env_path.parent.mkdir()
    env_path.write_text("# old\nXSTRO_PREFIX='!'\nexport XSTRO_MODE=public\n", encoding="utf-8")

    write_user_env_vars({"XSTRO_PREFIX": "#", "XSTRO_SUDO": "1", "XSTRO_LOG_LEVEL": None}, env_path=env_path)

    assert env_path.read_text(encoding="utf-8").splitlines() == [
        "# old",
        "XSTRO_PREFIX=#",
        "export XSTRO_MODE=public",
        "XSTRO_SUDO=1",
    ]
    assert read_env_file(env_path) == {
        "XSTRO_PREFIX": "#",
        "XSTRO_MODE": "public",
        "XSTRO_SUDO": "1",
    }


def test_write_user_env_vars_creates_file(tmp_path):
    env_path = tmp_path / "new" / ".env"

    assert write_user_env_vars({"XSTRO_MODE": "public"}, env_path=env_path) == env_path
    assert read_env_file(env_path) == {"XSTRO_MODE": "public"}
    assert read_env_file(tmp_path / "missing.env") == {}
