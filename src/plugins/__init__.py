"""Bundled command plugins.

Each module registers its commands with `core.commands.Module` when it is
imported; `load_plugins` imports them all (plus an optional external folder).
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
import pkgutil
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def load_plugins(extra_dir: Path | None = None) -> list[str]:
    """Import bundled plugins and `*.py` files from `extra_dir`.

    Modules already imported are not executed again, so commands are never
    registered twice. Files starting with `_` are skipped.

    Returns the names of the modules that were loaded.
    """

    loaded: list[str] = []
    for info in pkgutil.iter_modules(__path__):
        if info.name.startswith("_"):
            continue
        name = f"{__name__}.{info.name}"
        importlib.import_module(name)
        loaded.append(name)

    if extra_dir is not None:
        loaded.extend(_load_directory(Path(extra_dir)))

    logger.debug("Loaded plugins: %s", ", ".join(loaded))
    return loaded


def _load_directory(directory: Path) -> list[str]:
    if not directory.is_dir():
        logger.warning("Plugin directory %s does not exist", directory)
        return []

    loaded: list[str] = []
    for path in sorted(directory.glob("*.py")):
        if path.name.startswith("_"):
            continue
        name = f"xstro_external_plugins.{path.stem}"
        if name in sys.modules:
            loaded.append(name)
            continue
        spec = importlib.util.spec_from_file_location(name, path)
        if spec is None or spec.loader is None:
            logger.warning("Cannot load plugin %s", path)
            continue
        module = importlib.util.module_from_spec(spec)
        sys.modules[name] = module
        try:
            spec.loader.exec_module(module)
        except Exception:
            del sys.modules[name]
            logger.exception("Plugin %s failed to load", path)
            continue
        loaded.append(name)
    return loaded
