"""Static string table (bundled JSON).

Why here:
- Every user-facing text the bot sends (admin checks, menu labels, reply
  branding) is looked up by key, so it can be translated without touching
  handlers.
- The tables ship inside the package under `resources/lang/<code>.json`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path

from core.config import AppSettings
from core.domain.language import Language

logger = logging.getLogger(__name__)


def _lang_dir() -> Path:
    # core/lang.py -> core -> resources/lang
    return Path(__file__).resolve().parent / "resources" / "lang"


def _read_table(path: Path) -> dict[str, str]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.error("Error reading language file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.error("Language file %s is not a JSON object", path)
        return {}
    return {str(k): v for k, v in data.items() if isinstance(v, str)}


def load_language_data(language: Language = Language.ENGLISH, lang_dir: Path | None = None) -> dict[str, str]:
    """Load the table for `language`, layered over the English one.

    Unreadable files are logged and contribute nothing.
    """

    base_dir = lang_dir or _lang_dir()
    data = _read_table(base_dir / f"{Language.default().value}.json")
    if language is not Language.default():
        data.update(_read_table(base_dir / f"{language.value}.json"))
    return data


class Lang(Mapping[str, str]):
    """Read-only lookup where a missing or empty entry is `None`.

    Supports both `LANG.BOT_NAME` and `LANG["BOT_NAME"]`. Upper-case names
    always resolve to table entries; a lower-case key that shadows a
    `Mapping` method (`keys`, `get`, ...) is only reachable as `LANG["keys"]`.
    """

    def __init__(self, data: Mapping[str, str] | None = None) -> None:
        self._data = dict(data or {})

    @classmethod
    def load(cls, language: Language = Language.ENGLISH) -> "Lang":
        return cls(load_language_data(language))

    def __getitem__(self, key: str) -> str | None:  # type: ignore[override]
        return self._data.get(key) or None

    def __getattribute__(self, name: str) -> object:
        if name.isupper():
            return object.__getattribute__(self, "_data").get(name) or None
        return object.__getattribute__(self, name)

    def __getattr__(self, name: str) -> str | None:
        if name.startswith("_"):
            raise AttributeError(name)
        return self._data.get(name) or None

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return bool(self._data.get(key)) if isinstance(key, str) else False

    def reload(self, language: Language) -> None:
        """Swap the table in place so modules holding `LANG` see the change."""
        self._data = load_language_data(language)


def _configured_language() -> Language:
    try:
        return AppSettings().language
    except ValueError as exc:
        logger.warning("Invalid settings, using default language: %s", exc)
        return Language.default()


LANG = Lang.load(_configured_language())
