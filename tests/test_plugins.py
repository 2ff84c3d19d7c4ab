"""
Tests for the bundled plugins and the plugin loader.
"""

import sys

import pytest

from conftest import make_event
from core.commands import commands, find_command
from core.services.dispatcher import dispatch
from plugins import load_plugins
from plugins.menu import build_menu

OWN_KEY = {"id": "OWN1", "remoteJid": "15550001111@s.whatsapp.net", "fromMe": True}


def test_bundled_plugins_registered(bundled_plugins):
    assert "plugins.ping" in bundled_plugins
    for text in ("ping", "menu", "help", "jid"):
        assert find_command(text) is not None, text


def test_loading_twice_does_not_duplicate():
    before = len(commands)
    load_plugins()
    assert len(commands) == before


def test_external_plugin_directory(tmp_path, isolated_commands):
    (tmp_path / "extra_cmd.py").write_text(
        "from core.commands import Module\n"
        "\n"
        "@Module('zzextra', public=True)\n"
        "async def extra(message, match):\n"
        "    return None\n",
        encoding="utf-8",
    )
    (tmp_path / "_private.py").write_text("raise RuntimeError('should not load')\n", encoding="utf-8")
    try:
        loaded = load_plugins(tmp_path)

        assert "xstro_external_plugins.extra_cmd" in loaded
        assert find_command("zzextra") is not None
    finally:
        sys.modules.pop("xstro_external_plugins.extra_cmd", None)


def test_broken_external_plugin_is_skipped(tmp_path, isolated_commands):
    (tmp_path / "broken.py").write_text("raise RuntimeError('nope')\n", encoding="utf-8")

    loaded = load_plugins(tmp_path)

    assert "xstro_external_plugins.broken" not in loaded
    assert "xstro_external_plugins.broken" not in sys.modules


@pytest.mark.asyncio
async def test_ping_replies_then_edits(client, settings):
    await dispatch(client, make_event(".ping"), settings)

    first, second = client.contents
    assert first["text"] == "```Pong!```"
    assert second["text"].startswith("Pong! `")
    assert second["text"].endswith("ms`")
    assert second["edit"]["id"] == "3EB00001"


@pytest.mark.asyncio
async def test_menu_lists_visible_commands(client, settings):
    await dispatch(client, make_event(".menu"), settings)

    text = client.contents[0]["text"]
    assert ".jid" in text
    assert ".menu|help" in text
    assert ".ping" not in text


def test_build_menu_uptime():
    menu = build_menu("!", 3661)
    assert "!jid" in menu
    assert "1 h 1 m 1 s" in menu


@pytest.mark.asyncio
async def test_jid_for_number(client, settings):
    await dispatch(client, make_event(".jid +1 555 444 3333", key=OWN_KEY), settings)

    assert client.contents[0]["text"] == "15554443333@s.whatsapp.net"


@pytest.mark.asyncio
async def test_jid_is_private(client, settings):
    assert await dispatch(client, make_event(".jid"), settings) is None
    assert client.calls == []
