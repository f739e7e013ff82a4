"""CLI app definition: positional arguments in, report out, exit code last."""

from typing import Annotated

import typer

from loopgate.config import (
    DEFAULT_LANGUAGE,
    LANGUAGE_CONFIGS,
    ScanConfig,
    parse_ignore_dirs,
    parse_threshold,
    resolve_language,
)
from loopgate.errors import ConfigError, LoopGateError
from loopgate.report import format_json, print_parameters, print_report
from loopgate.scanner import DirectoryScanner
from loopgate.utils import console, log
from loopgate.version import get_version

OUTPUT_FORMATS = ("text", "json")


def _version_callback(value: bool):
    if value:
        console.print(get_version())
        raise typer.Exit()


def _language_callback(value: str) -> str:
    try:
        resolve_language(value)
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc
    return value.strip().lower()


def _format_callback(value: str) -> str:
    if value not in OUTPUT_FORMATS:
        raise typer.BadParameter(f"must be one of: {', '.join(OUTPUT_FORMATS)}")
    return value


def build_config(
    threshold: str, root: str, ignore: str, language: str, log_file: str = ""
) -> ScanConfig:
    """Turn raw command-line values into a ScanConfig.

    Malformed threshold and ignore-list values degrade to defaults with a
    warning instead of aborting.
    """
    log_path = log_file or None
    return ScanConfig(
        threshold=parse_threshold(threshold, log_file=log_path),
        root=root or ".",
        ignore_dirs=parse_ignore_dirs(ignore, log_file=log_path),
        language=language,
        log_file=log_path,
    )


app = typer.Typer(
    help="Fail the build when functions nest loops deeper than a threshold.",
    add_completion=False,
)


@app.command()
def check(
    threshold: Annotated[
        str,
        typer.Argument(help="Maximum allowed loop nesting depth (empty means 3).", show_default=False),
    ] = "",
    root: Annotated[
        str,
        typer.Argument(help="Directory to scan (empty means the current directory).", show_default=False),
    ] = "",
    ignore: Annotated[
        str,
        typer.Argument(help='JSON array of directory names to skip, e.g. \'["vendor", "testdata"]\'.'),
    ] = "[]",
    language: Annotated[
        str,
        typer.Option(
            "--language",
            "-l",
            envvar="LOOPGATE_LANGUAGE",
            callback=_language_callback,
            help=f"Source language: {', '.join(LANGUAGE_CONFIGS)}.",
        ),
    ] = DEFAULT_LANGUAGE,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", callback=_format_callback, help="Report format: text or json."),
    ] = "text",
    log_file: Annotated[
        str,
        typer.Option(envvar="LOOPGATE_LOG_FILE", help="Also append diagnostics to this file."),
    ] = "",
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit.", callback=_version_callback, is_eager=True),
    ] = False,
) -> None:
    """Scan ROOT and report every function's maximum loop nesting depth.

    Exits with status 1 if any function is nested deeper than THRESHOLD or
    any file fails to parse.
    """
    config = build_config(threshold, root, ignore, language, log_file)
    if output_format == "text":
        print_parameters(config, console)

    try:
        result = DirectoryScanner(config).scan()
    except LoopGateError as exc:
        log(f"FATAL: {exc}", style="bold red", log_file=config.log_file)
        raise typer.Exit(code=1)

    if output_format == "json":
        typer.echo(format_json(config, result))
    else:
        print_report(result, console)

    if not result.success:
        raise typer.Exit(code=1)


def main() -> None:
    app()
