"""Line and key normalization shared by the Indental and Tablatal parsers."""

from __future__ import annotations

import re

# Markers must sit on their own first and last lines.
_TEMPLATE_LITERAL_RE = re.compile(
    r"\A\s*[^\n`]*=[ \t]*`([ \t]*\n(?:.*\n)?)[ \t]*`[ \t]*;?\s*\Z", re.DOTALL
)
_BLOCK_COMMENT_RE = re.compile(r"\A\s*/\*[ \t]*(\n(?:.*\n)?)[ \t]*\*/\s*\Z", re.DOTALL)
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_SKIPPED_LINE_RE = re.compile(r"^\s*(;.*)?$")
_WHITESPACE_RE = re.compile(r"\s+")
_KEY_SEPARATOR_RE = re.compile(r"[\s_-]+")


def strip_wrapper(source: str | None) -> str:
    """Remove an embedding wrapper around the document, if there is one.

    Two wrappers are recognized, each with its markers on lines of their own:
    - a JavaScript template literal: a first line such as
      ``const GLOSSARY = `` ending in a backtick, and a last line holding
      only the closing backtick (optionally followed by ``;``)
    - a first line ``/*`` and a last line ``*/``

    Any other input, including text with inline backticks, is returned
    unchanged (``None`` becomes ``""``).
    """

    if not source:
        return ""

    match = _TEMPLATE_LITERAL_RE.match(source) or _BLOCK_COMMENT_RE.match(source)
    if match is None:
        return source
    return match.group(1)


def numbered_lines(source: str) -> list[tuple[str, int]]:
    """Split source on newlines only, pairing lines with 1-based numbers.

    ``\\r\\n`` and ``\\r`` count as newlines; other separators such as form
    feeds or ``\\u2028`` stay inside their line.
    """

    lines = _LINE_BREAK_RE.split(source)
    if lines[-1] == "":
        lines.pop()
    return [(line, number) for number, line in enumerate(lines, start=1)]


def is_skipped_line(line: str) -> bool:
    """Return True for blank, whitespace-only and ``;`` comment lines."""

    return _SKIPPED_LINE_RE.match(line) is not None


def content_lines(source: str | None) -> list[tuple[str, int]]:
    """Unwrap and number source, dropping blank and comment lines.

    Surviving lines keep their original numbers.
    """

    return [
        (line, number)
        for line, number in numbered_lines(strip_wrapper(source))
        if not is_skipped_line(line)
    ]


def collapse_spaces(value: str) -> str:
    return _WHITESPACE_RE.sub(" ", value).strip()


def to_symbolic_key(value: str) -> str:
    """Lower-case value and join its words with underscores.

    Runs of whitespace, underscores and hyphens count as one separator:
    ``"Full Name"`` and ``"full--name"`` both become ``"full_name"``.
    """

    return "_".join(_KEY_SEPARATOR_RE.sub(" ", value.lower()).split())


def project_key(name: str, preserve_keys: bool) -> str:
    """Return the output key for a normalized name."""

    return name if preserve_keys else to_symbolic_key(name)
