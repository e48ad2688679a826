"""Parse options and their YAML loader."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Literal

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ConfigDict, ValidationError

from tabdent.csvtable import parser as csv_parser
from tabdent.indental import parser as indental_parser
from tabdent.indental.models import IndentalResult
from tabdent.tablatal import parser as tablatal_parser
from tabdent.tablatal.models import TableResult
from tabdent.utils.errors import ConfigError

FormatName = Literal["indental", "tablatal", "csv"]
ParseResult = IndentalResult | TableResult

_PARSERS: dict[str, tuple[Callable[..., ParseResult], Callable[..., ParseResult]]] = {
    "indental": (indental_parser.parse, indental_parser.parse_strict),
    "tablatal": (tablatal_parser.parse, tablatal_parser.parse_strict),
    "csv": (csv_parser.parse, csv_parser.parse_strict),
}


class ParseOptions(BaseModel):
    """Options accepted by every format parser."""

    model_config = ConfigDict(extra="forbid")

    preserve_keys: bool = False
    strict: bool = False


def load_options(path: Path | None = None) -> ParseOptions:
    """Load and validate parse options from YAML; defaults when path is None."""

    if path is None:
        return ParseOptions()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(f"Options file not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in options file: {path}") from exc

    if raw is None:
        return ParseOptions()
    if not isinstance(raw, dict):
        raise ConfigError(f"Options file must contain a mapping: {path}")

    try:
        return ParseOptions.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid options schema: {path}") from exc


def supported_formats() -> list[str]:
    return list(_PARSERS)


def parse_with_options(fmt: FormatName, source: str | None, options: ParseOptions) -> ParseResult:
    """Run the named format's tolerant or strict parser according to options."""

    try:
        tolerant, strict = _PARSERS[fmt]
    except KeyError as exc:
        raise ValueError(f"Unsupported format: {fmt}") from exc

    parse = strict if options.strict else tolerant
    return parse(source, preserve_keys=options.preserve_keys)
