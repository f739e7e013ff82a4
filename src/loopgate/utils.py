"""Console output and diagnostics logging."""

import os

from rich.console import Console

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def log(message: str, style: str = "", log_file: str | None = None) -> None:
    """Write a diagnostic line to stderr (with optional style) and the log file.

    Diagnostics go to stderr so the report on stdout stays machine-readable.
    """
    if style:
        err_console.print(message, style=style, markup=False, highlight=False)
    else:
        err_console.print(message, markup=False, highlight=False)

    if not log_file:
        return
    try:
        log_dir = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(log_dir, exist_ok=True)
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(message + "\n")
    except OSError:
        pass  # Never break a scan over logging
