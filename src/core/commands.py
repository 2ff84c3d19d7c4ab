"""Command registry.

A flat list of `Command` records filled at import time by plugin modules and
scanned linearly (registration order) against incoming text.

    @Module("ping", public=True)
    async def ping(message, match): ...
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Union

Handler = Callable[..., Union[Awaitable[Any], Any]]

# Group 1: the command word. Group 2: everything after the first whitespace run.
_PATTERN_TEMPLATE = r"^\s*({})(?:\s+([\s\S]+))?$"


@dataclass
class Command:
    """A registered command and who may see/run it."""

    pattern: re.Pattern[str]
    function: Handler
    public: bool = False
    is_group: bool = False
    dont_add_command_list: bool = False
    source: str = ""


commands: list[Command] = []


def compile_pattern(pattern: str) -> re.Pattern[str]:
    return re.compile(_PATTERN_TEMPLATE.format(pattern), re.IGNORECASE)


def Module(  # noqa: N802
    pattern: str,
    func: Handler | None = None,
    *,
    public: bool = False,
    is_group: bool = False,
    dont_add_command_list: bool = False,
) -> Any:
    """Register a command.

    Called with a handler it registers immediately and returns the `Command`.
    Called without one it returns a decorator that registers the decorated
    function and hands it back unchanged.
    """

    def register(handler: Handler) -> Command:
        command = Command(
            pattern=compile_pattern(pattern),
            function=handler,
            public=public,
            is_group=is_group,
            dont_add_command_list=dont_add_command_list,
            source=pattern,
        )
        commands.append(command)
        return command

    if func is not None:
        return register(func)

    def decorator(handler: Handler) -> Handler:
        register(handler)
        return handler

    return decorator


def find_command(text: str) -> tuple[Command, re.Match[str]] | None:
    """First command (in registration order) whose pattern matches `text`."""

    for command in commands:
        match = command.pattern.match(text)
        if match:
            return command, match
    return None


def listed_commands() -> list[Command]:
    """Commands a menu should show."""

    return [c for c in commands if not c.dont_add_command_list]


def command_name(command: Command) -> str:
    """Bare pattern text, e.g. `ping` or `ping|p` for alternations."""

    return command.source or command.pattern.pattern
