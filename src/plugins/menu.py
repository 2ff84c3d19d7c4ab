"""Command menu with uptime."""

from __future__ import annotations

import time

from adapters.tools import runtime
from core.commands import Module, command_name, listed_commands
from core.lang import LANG
from core.services.message import Message

STARTED_AT = time.monotonic()


def build_menu(prefix: str, uptime_seconds: float) -> str:
    lines = [
        f"{LANG.BOT_NAME}",
        f"{LANG.MENU_PREFIX}: {prefix}",
        f"{LANG.MENU_UPTIME}: {runtime(uptime_seconds).strip() or '0 s'}",
        "",
        f"{LANG.MENU_COMMANDS}:",
    ]
    names = sorted(command_name(c) for c in listed_commands())
    lines.extend(f"{prefix}{name}" for name in names)
    return "\n".join(lines)


@Module("menu|help", public=True)
async def menu(message: Message, match: str | None) -> Message:
    prefix = message.prefix or message.settings.prefix
    return await message.reply(build_menu(prefix, time.monotonic() - STARTED_AT))
