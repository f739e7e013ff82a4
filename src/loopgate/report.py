"""Rendering of scan results for the terminal and for machines."""

import json

from rich.console import Console

from loopgate.config import ScanConfig
from loopgate.scanner import ScanResult


def print_parameters(config: ScanConfig, console: Console) -> None:
    """Print the effective scan parameters."""
    ignored = ", ".join(sorted(config.ignore_dirs)) or "-"
    console.print("action params:", style="yellow")
    console.print(
        f"\tthreshold: {config.threshold}, root: {config.root}, language: {config.language}",
        style="yellow",
        markup=False,
    )
    console.print(f"\tignore dirs: {ignored}", style="yellow", markup=False)


def print_report(result: ScanResult, console: Console) -> None:
    """Print passed entries then failed entries.

    Passed entries are green when the gate passes and blue when it does not,
    so the red failures stand out.
    """
    passed_style = "green" if result.success else "blue"
    console.print("passed:", style=f"bold {passed_style}")
    for item in result.passed:
        console.print(f"\t{item}", style=passed_style, markup=False, highlight=False)

    if result.success:
        console.print("success...", style="bold green")
        return

    console.print("failed:", style="bold red")
    for item in result.failed:
        console.print(f"\t{item}", style="red", markup=False, highlight=False)


def format_json(config: ScanConfig, result: ScanResult) -> str:
    """Serialize the scan parameters and result as a JSON document."""
    document = {
        "threshold": config.threshold,
        "root": config.root,
        "language": config.language,
        "ignore_dirs": sorted(config.ignore_dirs),
    }
    document.update(result.to_dict())
    return json.dumps(document, indent=2)
