from __future__ import annotations

import logging

import pytest

from tabdent.indental.parser import parse, parse_strict
from tabdent.utils.errors import ParserError

GLOSSARY = """\
; glossary of colours
NAME
  KEY : VALUE
  Full Name : Erica  Opal

LIST
  ITEMS
    first
    second
  OTHER ITEMS
    third
"""


def test_parse_key_value_and_list_categories() -> None:
    result = parse(GLOSSARY)

    assert result.valid
    assert result.errors == []
    assert result.data == {
        "name": {"key": "VALUE", "full_name": "Erica Opal"},
        "list": {"items": ["first", "second"], "other_items": ["third"]},
    }
    assert result.categories == ["name", "list"]
    assert result.to_dict() is result.data


def test_parse_preserves_keys_when_requested() -> None:
    result = parse(GLOSSARY, preserve_keys=True)

    assert result.data == {
        "NAME": {"KEY": "VALUE", "Full Name": "Erica Opal"},
        "LIST": {"ITEMS": ["first", "second"], "OTHER ITEMS": ["third"]},
    }


def test_parse_strict_accepts_valid_input() -> None:
    assert parse_strict(GLOSSARY).data == parse(GLOSSARY).data


def test_parse_is_deterministic() -> None:
    assert parse(GLOSSARY) == parse(GLOSSARY)


@pytest.mark.parametrize("text", [None, "", "   \n\t\n", "; only a comment\n"])
def test_parse_empty_input(text: str | None) -> None:
    result = parse(text)

    assert result.valid
    assert result.data == {}


def test_category_without_content_is_empty() -> None:
    assert parse("EMPTY\nOTHER\n  A : B").data == {"empty": {}, "other": {"a": "B"}}


def test_value_is_text_after_first_separator() -> None:
    result = parse("CAT\n  TIME : 10 : 30")

    assert result.data == {"cat": {"time": "10 : 30"}}


def test_wrapped_document_is_unwrapped() -> None:
    text = "const DB = `\nCAT\n  KEY : VALUE\n`"

    assert parse(text).data == {"cat": {"key": "VALUE"}}


def test_unexpected_indent_is_reported_and_ignored() -> None:
    result = parse("CAT\n   KEY : VALUE\n  OTHER : THING")

    assert result.errors == ["Unexpected indent on line 2"]
    assert result.data == {"cat": {"other": "THING"}}


def test_key_value_outside_category() -> None:
    result = parse("  KEY : VALUE\nCAT\n  A : B")

    assert result.errors == ["Key/value pair outside category on line 1"]
    assert result.data == {"cat": {"a": "B"}}


def test_list_name_outside_category() -> None:
    result = parse("  ITEMS\n    one")

    assert result.errors == ["List outside category on line 1", "List item outside list on line 2"]
    assert result.data == {}


def test_list_item_before_list_name_is_dropped() -> None:
    result = parse("CAT\n    orphan\n  ITEMS\n    kept")

    assert result.errors == ["List item outside list on line 2"]
    assert result.data == {"cat": {"items": ["kept"]}}


def test_list_item_after_category_change_needs_new_list() -> None:
    result = parse("ONE\n  ITEMS\n    a\nTWO\n    b")

    assert result.errors == ["List item outside list on line 5"]
    assert result.data == {"one": {"items": ["a"]}, "two": {}}


def test_duplicate_key_keeps_first_value() -> None:
    result = parse("CAT\n  KEY : first\n  key : second\n  OTHER : value")

    assert result.errors == ["Duplicate key 'key' on line 3"]
    assert result.data == {"cat": {"key": "first", "other": "value"}}


def test_duplicate_key_with_preserved_keys_compares_exact_names() -> None:
    result = parse("CAT\n  KEY : first\n  key : second", preserve_keys=True)

    assert result.valid
    assert result.data == {"CAT": {"KEY": "first", "key": "second"}}


def test_duplicate_category_continues_original() -> None:
    result = parse("CAT\n  A : 1\nOTHER\n  B : 2\ncat\n  C : 3\n  A : 4")

    assert result.errors == [
        "Duplicate category 'cat' on line 5",
        "Duplicate key 'A' on line 7",
    ]
    assert result.data == {"cat": {"a": "1", "c": "3"}, "other": {"b": "2"}}


def test_duplicate_list_name_appends_to_existing_list() -> None:
    result = parse("CAT\n  ITEMS\n    a\n  MORE\n    b\n  Items\n    c")

    assert result.errors == ["Duplicate list 'Items' on line 6"]
    assert result.data == {"cat": {"items": ["a", "c"], "more": ["b"]}}


def test_mixed_category_kinds_are_rejected() -> None:
    result = parse("PAIRS\n  A : 1\n  LIST\n    x\nLISTS\n  ITEMS\n    y\n  B : 2")

    assert result.errors == [
        "Expected key/value pair on line 3",
        "List item outside list on line 4",
        "Expected list item on line 8",
    ]
    assert result.data == {"pairs": {"a": "1"}, "lists": {"items": ["y"]}}


def test_parse_strict_raises_on_first_error() -> None:
    text = "CAT\n  KEY : first\n  KEY : second\n     bad indent"

    with pytest.raises(ParserError) as excinfo:
        parse_strict(text)

    assert excinfo.value.message == "Duplicate key 'KEY'"
    assert excinfo.value.line == 3
    assert str(excinfo.value) == "Duplicate key 'KEY' on line 3"
    assert len(parse(text).errors) == 2


def test_parse_never_raises_on_messy_input() -> None:
    text = "\t\tx\n  : \n    \x00\n :\nCAT\n  a : b\n  a : c\n      deep"

    result = parse(text)

    assert not result.valid
    with pytest.raises(ParserError):
        parse_strict(text)


def test_diagnostics_are_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="tabdent.indental")

    parse("CAT\n   bad")

    messages = [record.message for record in caplog.records if record.name == "tabdent.indental"]
    assert "Unexpected indent on line 2" in messages


def test_inline_backticks_are_plain_content() -> None:
    result = parse("CAT\n  CMD : run `make` then `test`\n  OTHER : x")

    assert result.valid
    assert result.data == {"cat": {"cmd": "run `make` then `test`", "other": "x"}}


@pytest.mark.parametrize("separator", ["\u2028", "\u2029", "\x0c", "\x0b", "\x1c", "\x85"])
def test_unicode_line_separators_stay_inside_values(separator: str) -> None:
    result = parse(f"CAT\n  KEY : one{separator}two\n  NEXT : c\n   bad")

    assert result.data == {"cat": {"key": "one two", "next": "c"}}
    assert result.errors == ["Unexpected indent on line 4"]


def test_crlf_line_endings() -> None:
    result = parse("CAT\r\n  KEY : VALUE\r\n   bad\r\n")

    assert result.data == {"cat": {"key": "VALUE"}}
    assert result.errors == ["Unexpected indent on line 3"]
