"""Tests for translation tables and placeholder substitution."""

from __future__ import annotations

from multilang.domain import TextEntry
from multilang.translator import TranslationTable, choose_form, substitute


def test_substitute_named_placeholders():
    assert substitute("Hi :name", {"name": "Bob"}) == "Hi Bob"
    assert substitute(":a and :b", {"a": 1, "b": 2}) == "1 and 2"


def test_substitute_leaves_unknown_tokens():
    assert substitute("Hi :name at :time", {"name": "Bob"}) == "Hi Bob at :time"
    assert substitute("Hi :name") == "Hi :name"


def test_substitute_does_not_split_longer_names():
    assert substitute(":names", {"name": "x"}) == ":names"


def test_choose_form_two_way_plural():
    text = "one apple|:count apples"
    assert choose_form(text, {"count": 1}) == "one apple"
    assert choose_form(text, {"count": 3}) == ":count apples"
    assert choose_form(text) == text


def test_table_translate_with_plural_and_placeholders():
    table = TranslationTable("en", "global", {"apples": "one apple|:count apples"})
    assert table.translate("apples", {"count": 5}) == "5 apples"
    assert table.translate("apples", {"count": 1}) == "one apple"


def test_table_from_entries_and_lookup():
    table = TranslationTable.from_entries(
        "en",
        "global",
        [TextEntry(key="welcome", value="Hi :name"), TextEntry(key="bye", value="Bye")],
    )
    assert table.locale == "en"
    assert table.scope == "global"
    assert len(table) == 2
    assert "welcome" in table
    assert table.translate("welcome", {"name": "Bob"}) == "Hi Bob"


def test_table_missing_key_falls_back_to_key():
    table = TranslationTable("en", "global", {})
    assert table.translate("menu.home") == "menu.home"


def test_table_is_read_only():
    source = {"a": "A"}
    table = TranslationTable("en", "global", source)
    source["b"] = "B"
    assert "b" not in table
    assert dict(table.texts) == {"a": "A"}
