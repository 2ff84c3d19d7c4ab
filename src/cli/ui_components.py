"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from presentation.
- Lets several commands reuse the same tables and panels.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.commands import Command, command_name
from core.lang import LANG


def print_banner(console: Console, subtitle: str = "WhatsApp command bot • console session") -> None:
    """Print the welcome banner."""

    title = Text(LANG.BOT_NAME or "xstro", style="bold cyan")
    body = Align.center(Text.assemble(title, "\n", Text(subtitle, style="dim")), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_commands_table(commands: list[Command], prefix: str) -> Table:
    """One row per registered command with its visibility flags."""

    table = Table(title="Commands")
    table.add_column("Command", style="cyan", no_wrap=True)
    table.add_column("Public", style="green")
    table.add_column("Groups only", style="yellow")
    table.add_column("In menu", style="magenta")
    table.add_column("Handler", style="dim")
    for command in commands:
        handler = getattr(command.function, "__qualname__", repr(command.function))
        module = getattr(command.function, "__module__", "")
        table.add_row(
            f"{prefix}{command_name(command)}",
            "yes" if command.public else "no",
            "yes" if command.is_group else "no",
            "no" if command.dont_add_command_list else "yes",
            f"{module}.{handler}" if module else handler,
        )
    return table
