"""Incoming message dispatch.

Turns a raw client event into a `Message`, finds the command its text names
and runs the handler once the visibility rules allow it. Entry points (the
console session, a real socket client) only need to call `dispatch`.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any

from adapters.tools import to_jid
from core.commands import Command, command_name, find_command
from core.config import AppSettings, BotMode
from core.domain.jid import is_group_jid, jid_normalized_user
from core.domain.models import MessageData
from core.interfaces.client import ChatClient
from core.lang import LANG
from core.services.message import Message

logger = logging.getLogger(__name__)


def is_sudo(message: Message, settings: AppSettings) -> bool:
    """Sudo per the event, the bot's own account, or the configured numbers."""

    if message.sudo or message.from_me:
        return True
    sender = jid_normalized_user(message.sender)
    if not sender:
        return False
    return any(to_jid(number) == sender for number in settings.sudo_numbers)


def strip_prefix(text: str, prefix: str) -> str | None:
    """Text after the prefix, or None when the text is not a command."""

    stripped = text.lstrip()
    if not prefix:
        return stripped
    if not stripped.startswith(prefix):
        return None
    return stripped[len(prefix):]


def can_run(command: Command, message: Message, settings: AppSettings) -> bool:
    if message.isban:
        return False
    mode = message.mode or settings.mode.value
    if not command.public and mode == BotMode.PRIVATE.value:
        return is_sudo(message, settings)
    return True


async def dispatch(
    client: ChatClient,
    data: MessageData | dict[str, Any],
    settings: AppSettings | None = None,
) -> Message | None:
    """Run the command named by `data`, if any.

    Returns the wrapped message when a handler ran (even if it failed),
    otherwise None.
    """

    settings = settings or AppSettings()
    message = Message(client, data, settings)

    body = strip_prefix(message.text, message.prefix or settings.prefix)
    if body is None:
        return None

    found = find_command(body)
    if found is None:
        return None
    command, match = found
    name = command_name(command)

    if not can_run(command, message, settings):
        logger.debug("Ignoring %s from %s (not allowed)", name, message.sender or message.jid)
        return None

    if command.is_group and not (message.is_group or is_group_jid(message.jid)):
        await message.send(LANG.GROUP_ONLY)
        return message

    logger.info("Running %s for %s", name, message.sender or message.jid)
    try:
        result = command.function(message, match.group(2))
        if inspect.isawaitable(result):
            await result
    except Exception as exc:
        logger.exception("Command %s failed", name)
        await message.reply(f"{LANG.COMMAND_ERROR}\n{exc}")
    return message
