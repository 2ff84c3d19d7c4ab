"""`python -m cli` entry point."""

from __future__ import annotations

import sys

# The bot name and menu use non-ASCII characters; cp1252 consoles choke on them.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run  # noqa: E402

run()
