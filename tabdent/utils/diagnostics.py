"""Diagnostic collection shared by the format parsers."""

from __future__ import annotations

import logging

from tabdent.utils.errors import ParserError, format_diagnostic


class Diagnostics:
    """Ordered list of ``"<message> on line <n>"`` strings.

    In strict mode the first recorded diagnostic raises ParserError.
    """

    def __init__(self, logger: logging.Logger, *, strict: bool = False) -> None:
        self.logger = logger
        self.strict = strict
        self.errors: list[str] = []

    def record(self, message: str, line: int | None) -> None:
        diagnostic = format_diagnostic(message, line)
        self.errors.append(diagnostic)
        self.logger.debug(diagnostic)
        if self.strict:
            raise ParserError(message, line=line)
