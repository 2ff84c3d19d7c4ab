"""Latency check."""

from __future__ import annotations

import time

from core.commands import Module
from core.services.message import Message


@Module("ping", public=True, is_group=False, dont_add_command_list=True)
async def ping(message: Message, match: str | None) -> Message:
    start = time.monotonic()
    sent = await message.reply("Pong!")
    elapsed_ms = int((time.monotonic() - start) * 1000)
    return await sent.edit(f"Pong! `{elapsed_ms}ms`")
