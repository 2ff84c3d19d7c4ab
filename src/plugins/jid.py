"""Show the JID a command would target."""

from __future__ import annotations

from core.commands import Module
from core.lang import LANG
from core.services.message import Message


@Module("jid")
async def jid(message: Message, match: str | None) -> Message:
    target = await message.get_jid(match)
    return await message.send(target or LANG.NO_JID)
