"""Build Indental categories from the lexer's token stream.

A category holds either ``key : value`` pairs or named lists of items,
never both. The first pair or list name inside a category fixes its kind.

Tolerant parsing records a diagnostic for each problem and keeps going:
offending lines are ignored and on collisions the first occurrence wins.
Strict parsing raises ParserError at the first diagnostic.
"""

from __future__ import annotations

import logging
from typing import Literal

from tabdent.indental.lexer import tokenize
from tabdent.indental.models import (
    CategoryToken,
    ErrorToken,
    IndentalResult,
    KeyValueToken,
    ListItemToken,
    ListNameToken,
    Token,
)
from tabdent.text.normalizer import project_key
from tabdent.utils.diagnostics import Diagnostics

logger = logging.getLogger("tabdent.indental")

CategoryKind = Literal["pairs", "lists"]


class IndentalParser:
    """Single-use state machine over Indental tokens."""

    def __init__(self, *, strict: bool = False, preserve_keys: bool = False) -> None:
        self.preserve_keys = preserve_keys
        self._diagnostics = Diagnostics(logger, strict=strict)
        self._data: dict[str, dict] = {}
        self._kinds: dict[str, CategoryKind] = {}
        self._category: str | None = None
        self._list: str | None = None

    def parse(self, source: str | None) -> IndentalResult:
        for token in tokenize(source):
            self._handle(token)

        errors = self._diagnostics.errors
        logger.debug("parsed %d categories with %d errors", len(self._data), len(errors))
        return IndentalResult(data=self._data, errors=errors)

    def _handle(self, token: Token) -> None:
        if isinstance(token, CategoryToken):
            self._open_category(token)
        elif isinstance(token, KeyValueToken):
            self._add_pair(token)
        elif isinstance(token, ListNameToken):
            self._select_list(token)
        elif isinstance(token, ListItemToken):
            self._add_item(token)
        elif isinstance(token, ErrorToken):
            self._error(token.message, token.line)

    def _open_category(self, token: CategoryToken) -> None:
        key = project_key(token.name, self.preserve_keys)
        self._list = None
        self._category = key
        if key in self._data:
            self._error(f"Duplicate category '{token.name}'", token.line)
            return
        self._data[key] = {}

    def _add_pair(self, token: KeyValueToken) -> None:
        if self._category is None:
            self._error("Key/value pair outside category", token.line)
            return
        if not self._claim_kind(self._category, "pairs"):
            self._error("Expected list item", token.line)
            return

        body = self._data[self._category]
        key = project_key(token.key, self.preserve_keys)
        if key in body:
            self._error(f"Duplicate key '{token.key}'", token.line)
            return
        body[key] = token.value

    def _select_list(self, token: ListNameToken) -> None:
        if self._category is None:
            self._error("List outside category", token.line)
            return
        if not self._claim_kind(self._category, "lists"):
            self._error("Expected key/value pair", token.line)
            return

        body = self._data[self._category]
        key = project_key(token.name, self.preserve_keys)
        self._list = key
        if key in body:
            self._error(f"Duplicate list '{token.name}'", token.line)
            return
        body[key] = []

    def _add_item(self, token: ListItemToken) -> None:
        if self._category is None or self._list is None:
            self._error("List item outside list", token.line)
            return
        self._data[self._category][self._list].append(token.value)

    def _claim_kind(self, category: str, kind: CategoryKind) -> bool:
        current = self._kinds.setdefault(category, kind)
        return current == kind

    def _error(self, message: str, line: int) -> None:
        self._diagnostics.record(message, line)


def parse(source: str | None, *, preserve_keys: bool = False) -> IndentalResult:
    """Parse Indental text, recording problems in ``errors`` instead of raising."""

    return IndentalParser(preserve_keys=preserve_keys).parse(source)


def parse_strict(source: str | None, *, preserve_keys: bool = False) -> IndentalResult:
    """Parse Indental text, raising ParserError at the first problem."""

    return IndentalParser(strict=True, preserve_keys=preserve_keys).parse(source)
