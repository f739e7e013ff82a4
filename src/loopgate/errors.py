"""Exception hierarchy for the loop-depth gate."""


class LoopGateError(Exception):
    """Base class for every error raised by loopgate."""


class ConfigError(LoopGateError):
    """Invalid configuration that cannot be degraded to a default."""


class GrammarNotAvailableError(LoopGateError):
    """The tree-sitter grammar for the selected language is not installed."""

    def __init__(self, grammar_module: str):
        self.grammar_module = grammar_module
        super().__init__(
            f"tree-sitter grammar '{grammar_module}' is not installed; "
            f"install the '{grammar_module.replace('_', '-')}' package"
        )


class SourceParseError(LoopGateError):
    """A source file could not be read or contains syntax errors.

    Recovered per file by the scanner: recorded as a failure entry.
    """

    def __init__(self, path: str, message: str, line: int | None = None, column: int | None = None):
        self.path = path
        self.line = line
        self.column = column
        self.message = message
        super().__init__(message)


class ScanError(LoopGateError):
    """The directory walk itself failed. Aborts the whole scan."""

    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Error walking directory {path}: {cause}")
