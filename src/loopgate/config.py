"""Configuration for the loop-depth gate.

Language configurations for tree-sitter-based parsing. Each entry maps a
language name to its grammar module, file extensions, and the node types the
tree provider in frontend.py turns into typed statements. ScanConfig is the
explicit configuration handed to the directory scanner.
"""

import json
from dataclasses import dataclass, field

from loopgate.errors import ConfigError
from loopgate.utils import log

DEFAULT_THRESHOLD = 3
DEFAULT_LANGUAGE = "go"


# ---------------------------------------------------------------------------
# Node type mappings per language
# ---------------------------------------------------------------------------

GO_CONFIG = {
    "grammar_module": "tree_sitter_go",
    "language_func": "language",
    "file_extensions": {".go"},
    # func literals are not declarations; their loops count toward the
    # enclosing declaration instead
    "function_types": {"function_declaration", "method_declaration"},
    "loop_types": {"for_statement"},
    "if_types": {"if_statement"},
    "block_types": {"block"},
    "list_types": {"statement_list"},
}

PYTHON_CONFIG = {
    "grammar_module": "tree_sitter_python",
    "language_func": "language",
    "file_extensions": {".py"},
    "function_types": {"function_definition"},
    "loop_types": {"for_statement", "while_statement"},
    "if_types": {"if_statement"},
    "block_types": {"block"},
    "list_types": set(),
}

JAVASCRIPT_CONFIG = {
    "grammar_module": "tree_sitter_javascript",
    "language_func": "language",
    "file_extensions": {".js", ".jsx", ".mjs"},
    "function_types": {
        "function_declaration",
        "generator_function_declaration",
        "arrow_function",
        "method_definition",
        "function_expression",
    },
    "loop_types": {
        "for_statement",
        "for_in_statement",
        "while_statement",
        "do_statement",
    },
    "if_types": {"if_statement"},
    "block_types": {"statement_block"},
    "list_types": set(),
}

TYPESCRIPT_CONFIG = {
    **JAVASCRIPT_CONFIG,
    "grammar_module": "tree_sitter_typescript",
    "language_func": "language_typescript",
    "file_extensions": {".ts"},
}

TSX_CONFIG = {
    **JAVASCRIPT_CONFIG,
    "grammar_module": "tree_sitter_typescript",
    "language_func": "language_tsx",
    "file_extensions": {".tsx"},
}

CSHARP_CONFIG = {
    "grammar_module": "tree_sitter_c_sharp",
    "language_func": "language",
    "file_extensions": {".cs"},
    "function_types": {
        "method_declaration",
        "constructor_declaration",
        "local_function_statement",
    },
    "loop_types": {
        "for_statement",
        "foreach_statement",
        "while_statement",
        "do_statement",
    },
    "if_types": {"if_statement"},
    "block_types": {"block"},
    "list_types": set(),
}


# ---------------------------------------------------------------------------
# Combined lookup: language name -> config dict
# ---------------------------------------------------------------------------

LANGUAGE_CONFIGS = {
    "go": GO_CONFIG,
    "python": PYTHON_CONFIG,
    "javascript": JAVASCRIPT_CONFIG,
    "typescript": TYPESCRIPT_CONFIG,
    "tsx": TSX_CONFIG,
    "csharp": CSHARP_CONFIG,
}


def resolve_language(name: str) -> dict:
    """Return the language config registered under *name*.

    Raises ConfigError listing the known languages when the name is unknown.
    """
    key = name.strip().lower()
    if key in LANGUAGE_CONFIGS:
        return LANGUAGE_CONFIGS[key]
    known = ", ".join(sorted(LANGUAGE_CONFIGS))
    raise ConfigError(f"Unknown language '{name}'. Known languages: {known}")


# ---------------------------------------------------------------------------
# Scan configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScanConfig:
    """Everything the directory scanner needs for one run."""

    threshold: int = DEFAULT_THRESHOLD
    root: str = "."
    ignore_dirs: frozenset[str] = field(default_factory=frozenset)
    language: str = DEFAULT_LANGUAGE
    log_file: str | None = None

    @property
    def language_config(self) -> dict:
        return resolve_language(self.language)


def parse_threshold(raw: str | None, log_file: str | None = None) -> int:
    """Parse the threshold argument.

    Empty input means the default. Anything that is not a non-negative
    integer is reported as a warning and also falls back to the default.
    """
    if raw is None or raw.strip() == "":
        return DEFAULT_THRESHOLD
    try:
        value = int(raw.strip())
    except ValueError:
        log(
            f"WARNING: threshold '{raw}' is not an integer, using {DEFAULT_THRESHOLD}",
            style="yellow",
            log_file=log_file,
        )
        return DEFAULT_THRESHOLD
    if value < 0:
        log(
            f"WARNING: threshold {value} is negative, using {DEFAULT_THRESHOLD}",
            style="yellow",
            log_file=log_file,
        )
        return DEFAULT_THRESHOLD
    return value


def parse_ignore_dirs(raw: str | None, log_file: str | None = None) -> frozenset[str]:
    """Decode the JSON ignore-list argument into a set of directory names.

    A malformed document yields an empty set; non-string entries are dropped.
    Both cases are logged as warnings rather than aborting the scan.
    """
    if raw is None or raw.strip() == "":
        return frozenset()
    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError as exc:
        log(
            f"WARNING: could not decode ignore list {raw!r}: {exc}",
            style="yellow",
            log_file=log_file,
        )
        return frozenset()
    if not isinstance(decoded, list):
        log(
            f"WARNING: ignore list must be a JSON array, got {type(decoded).__name__}",
            style="yellow",
            log_file=log_file,
        )
        return frozenset()

    names = set()
    for item in decoded:
        if isinstance(item, str) and item:
            names.add(item)
        else:
            log(
                f"WARNING: skipping ignore list entry {item!r}",
                style="yellow",
                log_file=log_file,
            )
    return frozenset(names)
