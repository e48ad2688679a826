"""Custom exceptions for parsing and configuration."""

from __future__ import annotations


def format_diagnostic(message: str, line: int | None) -> str:
    if line is None:
        return message
    return f"{message} on line {line}"


class ParserError(Exception):
    """Raised by strict parsing at the first structural problem."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        super().__init__(format_diagnostic(message, line))
        self.message = message
        self.line = line


class ConfigError(ValueError):
    """Raised when a parse options file cannot be loaded or validated."""
