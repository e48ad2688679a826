"""Parse Tablatal, a column-aligned table under a header line.

Each header word starts a column. A row's value for that column is the
text between the column's start and the next column's start, with
whitespace trimmed and collapsed. The first column always starts at
offset 0, and the last one runs to the end of the line.

Rows are sliced by position only, so text shifted left past a column
boundary ends up in the neighbouring field::

    NAME    AGE   COLOR
    Erica   12   Opal       ->  AGE "12 O", COLOR "pal"
"""

from __future__ import annotations

import logging
import re

from tabdent.tablatal.models import Column, TableResult
from tabdent.text.normalizer import collapse_spaces, content_lines, project_key
from tabdent.utils.diagnostics import Diagnostics

logger = logging.getLogger("tabdent.tablatal")

_HEADER_WORD_RE = re.compile(r"\S+")


class TablatalParser:
    def __init__(self, *, strict: bool = False, preserve_keys: bool = False) -> None:
        self.preserve_keys = preserve_keys
        self._diagnostics = Diagnostics(logger, strict=strict)

    def parse(self, source: str | None) -> TableResult:
        lines = content_lines(source)
        if not lines:
            return TableResult()

        (header, header_number), *rows = lines
        columns = self.infer_columns(header, header_number)
        data = [slice_row(row, columns) for row, _ in rows]

        errors = self._diagnostics.errors
        logger.debug("parsed %d rows, %d columns, %d errors", len(data), len(columns), len(errors))
        return TableResult(data=data, keys=[column.key for column in columns], errors=errors)

    def infer_columns(self, header: str, line: int) -> list[Column]:
        """Derive columns from header word positions.

        A repeated key is reported and its column dropped; the range it
        covered is not merged into the preceding column.
        """

        matches = list(_HEADER_WORD_RE.finditer(header))
        starts = [0] + [match.start() for match in matches[1:]]
        ends: list[int | None] = [*starts[1:], None]

        columns: list[Column] = []
        seen: set[str] = set()
        for match, start, end in zip(matches, starts, ends):
            name = collapse_spaces(match.group(0))
            key = project_key(name, self.preserve_keys)
            if key in seen:
                self._diagnostics.record(f"Duplicate column '{name}'", line)
                continue
            seen.add(key)
            columns.append(Column(name=name, key=key, start=start, end=end))
        return columns


def slice_row(row: str, columns: list[Column]) -> dict[str, str]:
    """Cut row into fields; columns past the end of the row are empty."""

    return {column.key: collapse_spaces(row[column.start : column.end]) for column in columns}


def parse(source: str | None, *, preserve_keys: bool = False) -> TableResult:
    """Parse Tablatal text, recording problems in ``errors`` instead of raising."""

    return TablatalParser(preserve_keys=preserve_keys).parse(source)


def parse_strict(source: str | None, *, preserve_keys: bool = False) -> TableResult:
    """Parse Tablatal text, raising ParserError at the first problem."""

    return TablatalParser(strict=True, preserve_keys=preserve_keys).parse(source)
