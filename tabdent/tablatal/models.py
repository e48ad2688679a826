"""Column and result models for the tabular formats."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Column:
    """Header word and the character range its values occupy."""

    name: str
    key: str
    start: int
    end: int | None


@dataclass(frozen=True)
class TableResult:
    """Tabular parsing output shared by Tablatal and the CSV variant."""

    data: list[dict[str, str]] = field(default_factory=list)
    keys: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_list(self) -> list[dict[str, str]]:
        return self.data
