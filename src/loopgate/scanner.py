"""Directory scanner: walk a tree, analyze each source file, partition results.

The scanner is built from an explicit ScanConfig. Parse failures are recorded
and the walk continues; a file-system error during the walk aborts the scan
with ScanError.
"""

import os
from dataclasses import dataclass, field

from loopgate.config import ScanConfig
from loopgate.errors import ScanError, SourceParseError
from loopgate.file_analyzer import check_file
from loopgate.frontend import require_parser
from loopgate.utils import log


@dataclass
class FunctionReport:
    """Loop depth of one function, classified against the threshold."""

    path: str
    name: str
    depth: int
    failed: bool

    def describe(self) -> str:
        return f"Function {self.name} in file {self.path}, loop depth: {self.depth}"


@dataclass
class ParseFailure:
    path: str
    message: str

    def describe(self) -> str:
        return f"Error in file {self.path}: {self.message}"


@dataclass
class ScanResult:
    """Pass/fail report lines in visiting order, plus the records behind them."""

    passed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    reports: list[FunctionReport] = field(default_factory=list)
    errors: list[ParseFailure] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failed

    def add_report(self, report: FunctionReport) -> None:
        self.reports.append(report)
        if report.failed:
            self.failed.append(report.describe())
        else:
            self.passed.append(report.describe())

    def add_error(self, error: ParseFailure) -> None:
        self.errors.append(error)
        self.failed.append(error.describe())

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "passed": list(self.passed),
            "failed": list(self.failed),
            "reports": [
                {"path": r.path, "function": r.name, "depth": r.depth, "failed": r.failed}
                for r in self.reports
            ],
            "errors": [{"path": e.path, "message": e.message} for e in self.errors],
        }


def exceeds_threshold(depth: int, threshold: int) -> bool:
    """A function fails only when its depth is strictly above the threshold."""
    return depth > threshold


class DirectoryScanner:
    """Scan one directory tree with a fixed configuration."""

    def __init__(self, config: ScanConfig):
        self.config = config
        self.language_config = config.language_config

    def _log(self, message: str, style: str = "") -> None:
        log(message, style=style, log_file=self.config.log_file)

    def is_ignored(self, dirname: str) -> bool:
        return dirname in self.config.ignore_dirs

    def is_source_file(self, filename: str) -> bool:
        return filename.endswith(tuple(self.language_config["file_extensions"]))

    def iter_source_files(self):
        """Yield source file paths under the root in a reproducible order.

        Raises ScanError on the first file-system error.
        """
        root = self.config.root
        if self.is_ignored(os.path.basename(os.path.normpath(root))):
            self._log(f"ignore dir: {os.path.basename(os.path.normpath(root))}, path: {root}", style="yellow")
            return

        def _on_error(exc: OSError) -> None:
            raise ScanError(exc.filename or root, exc)

        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
            kept = []
            for d in sorted(dirnames):
                if self.is_ignored(d):
                    self._log(f"ignore dir: {d}, path: {os.path.join(dirpath, d)}", style="yellow")
                else:
                    kept.append(d)
            dirnames[:] = kept
            for filename in sorted(filenames):
                if self.is_source_file(filename):
                    yield os.path.join(dirpath, filename)

    def scan_file(self, path: str, result: ScanResult) -> None:
        try:
            stats = check_file(path, self.language_config)
        except SourceParseError as exc:
            result.add_error(ParseFailure(path=path, message=exc.message))
            return
        for name, depth in stats.items():
            result.add_report(
                FunctionReport(
                    path=path,
                    name=name,
                    depth=depth,
                    failed=exceeds_threshold(depth, self.config.threshold),
                )
            )

    def scan(self) -> ScanResult:
        """Run the scan and return the aggregated result.

        Raises GrammarNotAvailableError before walking if the language's
        grammar is missing, and ScanError if the walk fails.
        """
        require_parser(self.language_config)
        result = ScanResult()
        for path in self.iter_source_files():
            self.scan_file(path, result)
        return result


def scan_directory(config: ScanConfig) -> ScanResult:
    """Convenience wrapper: build a scanner for config and run it."""
    return DirectoryScanner(config).scan()
