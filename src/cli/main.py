"""Main Typer application for xstro."""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console

from adapters.console_client import ConsoleClient, build_console_event
from cli import doctor
from cli.ui_components import build_commands_table, print_banner
from core.commands import commands
from core.config import AppSettings
from core.logging_config import configure_logging
from core.services.dispatcher import dispatch
from plugins import load_plugins

app = typer.Typer(
    name="xstro",
    no_args_is_help=True,
    help="WhatsApp command bot: plugin registry, message facade and a local console session.",
    add_completion=False,
)
app.add_typer(doctor.app, name="doctor")

_console = Console()

logger = logging.getLogger(__name__)

EXIT_WORDS = {"exit", "quit", ":q"}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    """Configure logging before any subcommand runs."""

    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)


async def _session(settings: AppSettings, *, is_group: bool) -> None:
    client = ConsoleClient(_console, settings)
    while True:
        try:
            line = await asyncio.to_thread(_console.input, "[bold cyan]you[/bold cyan] > ")
        except (EOFError, KeyboardInterrupt):
            break
        text = line.strip()
        if not text:
            continue
        if text.lower() in EXIT_WORDS:
            break
        handled = await dispatch(client, build_console_event(text, settings, is_group=is_group), settings)
        if handled is None:
            _console.print(f"[dim]No command matched (prefix is {settings.prefix!r}).[/dim]")


@app.command(name="run")
def run_session(
    group: bool = typer.Option(False, "--group", help="Pretend the session is a group chat."),
) -> None:
    """Interactive console session: type commands as the bot owner would."""

    settings = AppSettings()
    loaded = load_plugins(settings.plugins_dir)
    logger.info("Loaded %d plugin modules, %d commands", len(loaded), len(commands))

    print_banner(_console)
    _console.print(f"[dim]Prefix {settings.prefix!r}, mode {settings.mode.value}. Type 'exit' to leave.[/dim]")
    asyncio.run(_session(settings, is_group=group))


@app.command(name="commands")
def list_commands() -> None:
    """Show every registered command and its visibility flags."""

    settings = AppSettings()
    load_plugins(settings.plugins_dir)
    _console.print(build_commands_table(commands, settings.prefix))


def run() -> None:
    app()
