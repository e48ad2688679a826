"""Parse comma-separated tables into rows of string-keyed fields.

Results have the same shape as Tablatal results, so callers can treat
both tabular formats alike. Rows with more fields than the header are
reported and their extra fields dropped; missing fields are empty.
"""

from __future__ import annotations

import csv
import logging

from tabdent.tablatal.models import TableResult
from tabdent.text.normalizer import collapse_spaces, numbered_lines, project_key, strip_wrapper
from tabdent.utils.diagnostics import Diagnostics

logger = logging.getLogger("tabdent.csvtable")


class CsvParser:
    def __init__(self, *, strict: bool = False, preserve_keys: bool = False) -> None:
        self.preserve_keys = preserve_keys
        self._diagnostics = Diagnostics(logger, strict=strict)

    def parse(self, source: str | None) -> TableResult:
        reader = csv.reader(line for line, _ in numbered_lines(strip_wrapper(source)))
        header: list[str] | None = None
        fields: list[tuple[int, str]] = []
        data: list[dict[str, str]] = []

        for row in reader:
            if not any(cell.strip() for cell in row):
                continue
            if header is None:
                header = row
                fields = self._header_fields(row, reader.line_num)
                continue

            if len(row) > len(header):
                self._diagnostics.record(
                    f"Expected {len(header)} fields, found {len(row)}", reader.line_num
                )
            data.append(
                {key: collapse_spaces(row[index]) if index < len(row) else "" for index, key in fields}
            )

        keys = [key for _, key in fields]
        errors = self._diagnostics.errors
        logger.debug("parsed %d rows, %d columns, %d errors", len(data), len(keys), len(errors))
        return TableResult(data=data, keys=keys, errors=errors)

    def _header_fields(self, row: list[str], line: int) -> list[tuple[int, str]]:
        fields: list[tuple[int, str]] = []
        seen: set[str] = set()
        for index, cell in enumerate(row):
            name = collapse_spaces(cell)
            key = project_key(name, self.preserve_keys)
            if key in seen:
                self._diagnostics.record(f"Duplicate column '{name}'", line)
                continue
            seen.add(key)
            fields.append((index, key))
        return fields


def parse(source: str | None, *, preserve_keys: bool = False) -> TableResult:
    """Parse CSV text, recording problems in ``errors`` instead of raising."""

    return CsvParser(preserve_keys=preserve_keys).parse(source)


def parse_strict(source: str | None, *, preserve_keys: bool = False) -> TableResult:
    """Parse CSV text, raising ParserError at the first problem."""

    return CsvParser(strict=True, preserve_keys=preserve_keys).parse(source)
