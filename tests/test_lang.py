"""
Unit tests for the string table.
"""

import json
import logging

import pytest

from cli.doctor import REQUIRED_LANG_KEYS
from core.domain.language import Language
from core.lang import Lang, load_language_data


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")


class TestLoadLanguageData:
    """Tests for loading JSON tables."""

    def test_layers_over_english(self, tmp_path):
        _write(tmp_path / "en.json", {"A": "a", "B": "b"})
        _write(tmp_path / "es.json", {"B": "be"})

        data = load_language_data(Language.SPANISH, lang_dir=tmp_path)

        assert data == {"A": "a", "B": "be"}

    def test_unreadable_file_is_empty(self, tmp_path, caplog):
        (tmp_path / "en.json").write_text("{not json", encoding="utf-8")

        with caplog.at_level(logging.ERROR, logger="core.lang"):
            assert load_language_data(Language.ENGLISH, lang_dir=tmp_path) == {}
        assert "Error reading language file" in caplog.text

    def test_missing_file_is_empty(self, tmp_path):
        assert load_language_data(Language.ENGLISH, lang_dir=tmp_path) == {}

    def test_bundled_tables_have_required_keys(self):
        for language in Language:
            data = load_language_data(language)
            assert all(data.get(key) for key in REQUIRED_LANG_KEYS), language


class TestLang:
    """Tests for the lookup object."""

    def test_missing_and_empty_are_none(self):
        lang = Lang({"HELLO": "hi", "EMPTY": ""})

        assert lang.HELLO == "hi"
        assert lang["HELLO"] == "hi"
        assert lang.MISSING is None
        assert lang["EMPTY"] is None
        assert "HELLO" in lang
        assert "EMPTY" not in lang

    def test_upper_case_keys_win_over_mapping_methods(self):
        lang = Lang({"KEYS": "k", "GET": "g", "keys": "lower"})

        assert lang.KEYS == "k"
        assert lang.GET == "g"
        assert lang["keys"] == "lower"
        assert callable(lang.keys)
        assert lang.get("GET") == "g"

    def test_private_attributes_raise(self):
        lang = Lang({})

        with pytest.raises(AttributeError):
            lang._nope

    def test_reload_swaps_in_place(self):
        lang = Lang.load(Language.ENGLISH)
        english = lang.ISADMIN

        lang.reload(Language.SPANISH)

        assert lang.ISADMIN != english
        assert lang.BOT_NAME is not None


def test_language_from_code():
    assert Language.from_code("ES-mx") is Language.SPANISH
    assert Language.from_code("fr") is Language.ENGLISH
    assert Language.from_code(None) is Language.default()
