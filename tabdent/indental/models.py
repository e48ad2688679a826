"""Token and result models for the Indental format."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

CategoryBody = Union[dict[str, str], dict[str, list[str]]]


@dataclass(frozen=True)
class CategoryToken:
    """Unindented line opening a category."""

    name: str
    line: int


@dataclass(frozen=True)
class KeyValueToken:
    """Two-space indented ``key : value`` line."""

    key: str
    value: str
    line: int


@dataclass(frozen=True)
class ListNameToken:
    """Two-space indented line without a separator, naming a list."""

    name: str
    line: int


@dataclass(frozen=True)
class ListItemToken:
    """Four-space indented line appended to the current list."""

    value: str
    line: int


@dataclass(frozen=True)
class ErrorToken:
    """Line the lexer could not classify."""

    message: str
    line: int


Token = Union[CategoryToken, KeyValueToken, ListNameToken, ListItemToken, ErrorToken]


@dataclass(frozen=True)
class IndentalResult:
    """Indental parsing output."""

    data: dict[str, CategoryBody] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def categories(self) -> list[str]:
        return list(self.data)

    def to_dict(self) -> dict[str, CategoryBody]:
        return self.data
