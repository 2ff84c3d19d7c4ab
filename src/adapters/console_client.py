"""In-process chat client that renders outgoing messages with Rich.

Implements `core.interfaces.client.ChatClient` so the whole command stack
(dispatch -> handler -> Message -> client) runs locally without a WhatsApp
session. Useful for trying plugins from the CLI.
"""

from __future__ import annotations

import secrets
import time
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from adapters.http_client import get_buffer
from adapters.media import get_content_type
from adapters.tools import format_bytes, to_jid
from core.config import AppSettings
from core.exceptions import MediaError

# Outgoing ids look like WhatsApp Web ids so replies count as bot messages.
_ID_PREFIX = "3EB0"


def new_message_id(prefix: str = _ID_PREFIX) -> str:
    return prefix + secrets.token_hex(8).upper()


def describe_content(content: dict[str, Any]) -> str:
    """One-line summary of an outgoing payload."""

    if "text" in content:
        return str(content["text"])
    if "react" in content:
        return f"reacted {content['react'].get('text', '')}"
    if "delete" in content:
        return f"deleted {content['delete'].get('id', '')}"
    if "forward" in content:
        return "forwarded message"
    for key in ("image", "video", "audio", "sticker", "document"):
        if key in content:
            value = content[key]
            size = format_bytes(len(value)) if isinstance(value, (bytes, bytearray)) else str(value)
            name = content.get("fileName")
            label = f"{key} {name}" if name else key
            return f"[{label}: {size}]"
    return repr(content)


class ConsoleClient:
    """Prints what the bot would send and records it in `sent`."""

    def __init__(self, console: Console | None = None, settings: AppSettings | None = None) -> None:
        self._console = console or Console()
        self._settings = settings
        self.sent: list[dict[str, Any]] = []

    async def send_message(
        self,
        jid: str,
        content: dict[str, Any],
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        event = {
            "key": {"id": new_message_id(), "remoteJid": jid, "fromMe": True},
            "message": content,
            "messageTimestamp": int(time.time()),
        }
        self.sent.append(event)

        title = "edit" if "edit" in content else jid
        body = Text(describe_content(content))
        self._console.print(Panel(body, title=title, border_style="green", title_align="left"))
        return event

    async def download_media_message(self, message: dict[str, Any]) -> bytes:
        content = message.get("message") or {}
        content_type = get_content_type(content)
        media = content.get(content_type) if content_type else None
        url = media.get("url") if isinstance(media, dict) else None
        if not url:
            raise MediaError("Console messages carry no downloadable media")
        return await get_buffer(url, settings=self._settings)


def build_console_event(text: str, settings: AppSettings, *, is_group: bool = False) -> dict[str, Any]:
    """Incoming event for a line typed by the owner in the console."""

    sender = to_jid(settings.owner_number)
    chat = "120363000000000000@g.us" if is_group else sender
    return {
        "key": {"id": new_message_id("CONSOLE"), "remoteJid": chat, "fromMe": True},
        "isGroup": is_group,
        "isAdmin": True,
        "isBotAdmin": True,
        "pushName": "console",
        "message": {"conversation": text},
        "prefix": settings.prefix,
        "sender": sender,
        "type": "conversation",
        "sudo": True,
        "isban": False,
        "mode": settings.mode.value,
        "messageTimestamp": int(time.time()),
        "body": text,
    }
