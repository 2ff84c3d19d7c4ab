"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.commands import commands
from core.config import AppSettings, BotMode, write_user_env_vars
from core.domain.language import Language
from core.lang import load_language_data
from plugins import load_plugins

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

# Keys the bundled plugins and the Message facade look up.
REQUIRED_LANG_KEYS = (
    "BOT_NAME",
    "THUMBNAIL",
    "REPO_URL",
    "ISADMIN",
    "ISBOTADMIN",
    "GROUP_ONLY",
    "COMMAND_ERROR",
    "NO_JID",
)


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc)


def _check_lang(language: Language) -> tuple[bool, str]:
    data = load_language_data(language)
    missing = [key for key in REQUIRED_LANG_KEYS if not data.get(key)]
    if missing:
        return False, "missing: " + ", ".join(missing)
    return True, f"{len(data)} strings ({language.label()})"


def _check_plugins(settings: AppSettings) -> tuple[bool, str]:
    try:
        loaded = load_plugins(settings.plugins_dir)
    except Exception as exc:
        return False, str(exc)
    return True, f"{len(loaded)} modules, {len(commands)} commands"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="xstro Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Prefix", "OK", repr(settings.prefix))
    table.add_row("Mode", "OK", settings.mode.value)
    if settings.sudo_numbers:
        table.add_row("Sudo", "OK", ", ".join(settings.sudo_numbers))
    else:
        table.add_row("Sudo", "OPTIONAL", "No sudo numbers -> only the bot's own messages run private commands")

    ok_lang, detail_lang = _check_lang(settings.language)
    table.add_row("String table", "OK" if ok_lang else "FAIL", detail_lang)

    ok_plugins, detail_plugins = _check_plugins(settings)
    table.add_row("Plugins", "OK" if ok_plugins else "FAIL", detail_plugins)

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http("https://web.whatsapp.com", settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_lang:
        _console.print("\n[yellow]Note:[/yellow] Missing strings are sent as empty messages and will fail.")


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    settings = AppSettings()

    prefix = typer.prompt("Command prefix", default=settings.prefix, show_default=True).strip()
    mode = typer.prompt(
        "Mode (private/public)",
        default=settings.mode.value,
        show_default=True,
    ).strip().lower()
    sudo = typer.prompt("Sudo numbers (comma separated)", default=settings.sudo, show_default=True).strip()

    if mode not in {m.value for m in BotMode}:
        raise typer.BadParameter("mode must be 'private' or 'public'")

    env_path = write_user_env_vars(
        {
            "XSTRO_PREFIX": prefix,
            "XSTRO_MODE": mode,
            "XSTRO_SUDO": sudo,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
