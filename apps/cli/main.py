"""Typer CLI entrypoint for tabdent."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any, Literal, cast

import typer

from apps.cli.format_human import render_summary
from apps.cli.io import build_payload, dump_json, read_source, write_json_atomic
from tabdent.config import FormatName, load_options, parse_with_options
from tabdent.utils.errors import ConfigError, ParserError
from tabdent.version import package_version

app = typer.Typer(help="Plain-text Indental / Tablatal / CSV parser", rich_markup_mode=None)
logger = logging.getLogger("tabdent.cli")
ReportMode = Literal["json", "human"]

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

SourceArg = Annotated[Path, typer.Argument(exists=True, dir_okay=False, file_okay=True)]
PreserveKeysOpt = Annotated[
    bool | None,
    typer.Option(
        "--preserve-keys/--symbolize-keys",
        help="Keep names as written instead of lower_snake_case keys.",
    ),
]
StrictOpt = Annotated[
    bool | None,
    typer.Option("--strict/--tolerant", help="Fail at the first structural error."),
]
ConfigOpt = Annotated[
    Path | None,
    typer.Option("--config", help="YAML file with preserve_keys / strict options."),
]
ReportOpt = Annotated[str, typer.Option("--report", help="Output style: json or human.")]
OutOpt = Annotated[
    Path | None,
    typer.Option("--out", help="Write the JSON payload to this file instead of stdout."),
]
VerboseOpt = Annotated[bool, typer.Option("--verbose", help="Log parser diagnostics.")]


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"tabdent {package_version()}")
        raise typer.Exit()


@app.callback()
def cli_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Print the installed tabdent version and exit.",
        ),
    ] = False,
) -> None:
    """CLI root callback to keep one explicit command per format."""


@app.command("indental")
def indental_command(
    source: SourceArg,
    preserve_keys: PreserveKeysOpt = None,
    strict: StrictOpt = None,
    config: ConfigOpt = None,
    report: ReportOpt = "json",
    out: OutOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Parse an Indental document."""

    _run("indental", source, preserve_keys, strict, config, report, out, verbose)


@app.command("tablatal")
def tablatal_command(
    source: SourceArg,
    preserve_keys: PreserveKeysOpt = None,
    strict: StrictOpt = None,
    config: ConfigOpt = None,
    report: ReportOpt = "json",
    out: OutOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Parse a Tablatal document."""

    _run("tablatal", source, preserve_keys, strict, config, report, out, verbose)


@app.command("csv")
def csv_command(
    source: SourceArg,
    preserve_keys: PreserveKeysOpt = None,
    strict: StrictOpt = None,
    config: ConfigOpt = None,
    report: ReportOpt = "json",
    out: OutOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Parse a CSV document with a header row."""

    _run("csv", source, preserve_keys, strict, config, report, out, verbose)


def _run(
    fmt: FormatName,
    source: Path,
    preserve_keys: bool | None,
    strict: bool | None,
    config: Path | None,
    report: str,
    out: Path | None,
    verbose: bool,
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=_LOG_FORMAT)

    normalized_report = report.lower().strip()
    if normalized_report not in {"json", "human"}:
        typer.echo("ERROR: --report must be one of: json, human.", err=True)
        raise typer.Exit(code=2)
    report_mode = cast(ReportMode, normalized_report)

    try:
        options = load_options(config)
    except ConfigError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    overrides: dict[str, bool] = {}
    if preserve_keys is not None:
        overrides["preserve_keys"] = preserve_keys
    if strict is not None:
        overrides["strict"] = strict
    options = options.model_copy(update=overrides)

    try:
        text = read_source(source)
    except (OSError, UnicodeDecodeError) as exc:
        typer.echo(f"ERROR: cannot read {source}: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    _log_event(logging.INFO, "start", format=fmt, source=str(source), strict=options.strict)

    try:
        result = parse_with_options(fmt, text, options)
    except ParserError as exc:
        _log_event(logging.WARNING, "failed", format=fmt, source=str(source), error=str(exc))
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    payload = build_payload(fmt, result)
    if out is not None:
        write_json_atomic(out, payload)
        typer.echo(f"Wrote {out}")
    elif report_mode == "human":
        typer.echo(render_summary(fmt, result))
    else:
        typer.echo(dump_json(payload))

    if not result.valid:
        _log_event(
            logging.WARNING,
            "invalid",
            format=fmt,
            source=str(source),
            error_count=len(result.errors),
        )
        raise typer.Exit(code=1)

    _log_event(logging.INFO, "done", format=fmt, source=str(source))


def _log_event(level: int, event: str, **fields: Any) -> None:
    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":")))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
