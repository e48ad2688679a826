"""Line classification for the Indental format.

Indentation depth alone decides what a line is:

- 0 spaces: category
- 2 spaces: ``key : value`` pair, or a list name when there is no separator
- 4 spaces: list item
- anything else, including tab indentation: error
"""

from __future__ import annotations

from tabdent.indental.models import (
    CategoryToken,
    ErrorToken,
    KeyValueToken,
    ListItemToken,
    ListNameToken,
    Token,
)
from tabdent.text.normalizer import collapse_spaces, content_lines

KEY_VALUE_SEPARATOR = " : "
UNEXPECTED_INDENT = "Unexpected indent"


def tokenize(source: str | None) -> list[Token]:
    """Classify every non-blank, non-comment line of source."""

    return [token_for_line(line, number) for line, number in content_lines(source)]


def token_for_line(line: str, number: int) -> Token:
    indent = _leading_whitespace(line)
    if "\t" in indent:
        return ErrorToken(message=UNEXPECTED_INDENT, line=number)

    depth = len(indent)
    if depth == 0:
        return CategoryToken(name=collapse_spaces(line), line=number)
    if depth == 2:
        return _key_or_list_token(line[depth:], number)
    if depth == 4:
        return ListItemToken(value=collapse_spaces(line), line=number)
    return ErrorToken(message=UNEXPECTED_INDENT, line=number)


def _key_or_list_token(remainder: str, number: int) -> Token:
    key, separator, value = remainder.partition(KEY_VALUE_SEPARATOR)
    if not separator:
        return ListNameToken(name=collapse_spaces(remainder), line=number)
    return KeyValueToken(key=collapse_spaces(key), value=collapse_spaces(value), line=number)


def _leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]
