"""
Pytest configuration and fixtures for xstro tests.
"""

import os
from typing import Any, Dict, List, Optional

import pytest

# Tests assume the English string table and no local .env overrides.
os.environ["XSTRO_LANGUAGE"] = "en"

from core.commands import commands
from core.config import AppSettings
from plugins import load_plugins

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
WEBP_BYTES = b"RIFF\x24\x00\x00\x00WEBPVP8 " + b"\x00" * 32
MP3_BYTES = b"ID3\x03\x00\x00\x00\x00\x00\x00" + b"\x00" * 32
PDF_BYTES = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n" + b"\x00" * 32


class FakeClient:
    """Records every call the Message facade makes into the SDK."""

    def __init__(self, media: Any = PNG_BYTES):
        self.calls: List[tuple] = []
        self.downloads: List[Dict[str, Any]] = []
        self.media = media

    async def send_message(self, jid: str, content: Dict[str, Any], options: Optional[Dict[str, Any]] = None):
        self.calls.append((jid, content, options))
        return {
            "key": {"id": f"3EB0{len(self.calls):04d}", "remoteJid": jid, "fromMe": True},
            "message": content,
            "messageTimestamp": 1700000000,
        }

    async def download_media_message(self, message: Dict[str, Any]):
        self.downloads.append(message)
        return self.media

    @property
    def contents(self) -> List[Dict[str, Any]]:
        return [content for _, content, _ in self.calls]


def make_event(text: str = "", **overrides: Any) -> Dict[str, Any]:
    """Raw incoming event shaped like the client layer delivers it."""
    event: Dict[str, Any] = {
        "key": {"id": "ABCD1234", "remoteJid": "15550001111@s.whatsapp.net", "fromMe": False},
        "isAdmin": False,
        "isBotAdmin": False,
        "isGroup": False,
        "pushName": "Alice",
        "message": {"conversation": text},
        "prefix": ".",
        "sender": "15550001111@s.whatsapp.net",
        "type": "conversation",
        "sudo": False,
        "isban": False,
        "mode": "private",
        "messageTimestamp": 1700000000,
        "body": text,
    }
    event.update(overrides)
    return event


@pytest.fixture(scope="session", autouse=True)
def bundled_plugins() -> List[str]:
    """Register bundled commands once, before any test snapshots the registry."""
    return load_plugins()


@pytest.fixture
def isolated_commands():
    """Empty command registry for the duration of a test."""
    saved = commands[:]
    commands.clear()
    yield commands
    commands[:] = saved


@pytest.fixture
def settings(tmp_path) -> AppSettings:
    return AppSettings(_env_file=None, download_dir=tmp_path)


@pytest.fixture
def client() -> FakeClient:
    return FakeClient()
