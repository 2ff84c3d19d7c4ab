"""Languages of the bot's string table.

Lives in the domain layer so config, the string table and the CLI share one
source of truth without importing each other.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported languages for user-facing bot text."""

    ENGLISH = "en"
    SPANISH = "es"

    @classmethod
    def default(cls) -> "Language":
        """Return the language every other table is layered over."""

        return cls.ENGLISH

    @classmethod
    def from_code(cls, code: str | None) -> "Language":
        """Map a loose code (`EN`, `es-MX`) to a language, falling back to the default."""

        if not code:
            return cls.default()
        short = code.strip().lower().split("-", 1)[0].split("_", 1)[0]
        for lang in cls:
            if lang.value == short:
                return lang
        return cls.default()

    def label(self) -> str:
        """Human readable label for the CLI."""

        return "Spanish" if self is Language.SPANISH else "English"
