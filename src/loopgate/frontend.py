"""Tree-sitter tree provider.

Parses source bytes with the grammar named in a language config and lowers
the result into the typed model from syntax.py: one FunctionDeclaration per
function node, with its body made of If/Block/Loop/Other statements.
"""

import importlib

from tree_sitter import Language, Parser

from loopgate.errors import GrammarNotAvailableError, SourceParseError
from loopgate.syntax import (
    BlockStatement,
    FunctionDeclaration,
    IfStatement,
    LoopStatement,
    OtherStatement,
    SourceTree,
    Statement,
)

_SKIPPED_TYPES = {"comment"}


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------

_parser_cache: dict = {}


def _get_parser(config: dict) -> Parser | None:
    """Get or create a tree-sitter parser for a language config.

    Returns None if the grammar package is not installed.
    """
    cache_key = (config["grammar_module"], config["language_func"])
    if cache_key in _parser_cache:
        return _parser_cache[cache_key]
    try:
        mod = importlib.import_module(config["grammar_module"])
        lang_func = getattr(mod, config["language_func"])
        language = Language(lang_func())
        parser = Parser(language)
        _parser_cache[cache_key] = parser
        return parser
    except (ImportError, AttributeError, TypeError, OSError):
        _parser_cache[cache_key] = None
        return None


def require_parser(config: dict) -> Parser:
    """Like _get_parser, but raise GrammarNotAvailableError instead of None."""
    parser = _get_parser(config)
    if parser is None:
        raise GrammarNotAvailableError(config["grammar_module"])
    return parser


# ---------------------------------------------------------------------------
# Node helpers
# ---------------------------------------------------------------------------


def get_function_name(node) -> str:
    """Extract the function name from a function node."""
    name_node = node.child_by_field_name("name")
    if name_node:
        return name_node.text.decode("utf8", errors="replace")
    # Arrow functions and function expressions take the name they are bound to
    if node.parent and node.parent.type in (
        "variable_declarator",
        "assignment_expression",
        "pair",
    ):
        name_child = node.parent.child_by_field_name("name")
        if name_child is None:
            name_child = node.parent.child_by_field_name("left")
        if name_child is None:
            name_child = node.parent.child_by_field_name("key")
        if name_child:
            return name_child.text.decode("utf8", errors="replace")
    return "<anonymous>"


def find_functions(root_node, function_types: set[str]) -> list:
    """Collect all function/method nodes from a syntax tree, in source order."""
    results = []

    def _walk(node):
        if node.type in function_types:
            results.append(node)
        for child in node.children:
            _walk(child)

    _walk(root_node)
    return results


def find_syntax_error(root_node):
    """Return the first ERROR or MISSING node in the tree, or None."""
    if not root_node.has_error:
        return None
    stack = [root_node]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        # Reverse so the leftmost child is examined first
        stack.extend(child for child in reversed(node.children) if child.has_error or child.is_missing)
    return root_node


# ---------------------------------------------------------------------------
# Lowering into the typed model
# ---------------------------------------------------------------------------


def _lower_children(node, config: dict) -> tuple[Statement, ...]:
    """Lower the named children of a node, splicing statement-list wrappers."""
    lowered = []
    for child in node.named_children:
        if child.type in _SKIPPED_TYPES:
            continue
        if child.type in config["list_types"]:
            lowered.extend(_lower_children(child, config))
        else:
            lowered.append(lower_node(child, config))
    return tuple(lowered)


def _lower_body(body_node, config: dict) -> tuple[Statement, ...]:
    if body_node.type in config["block_types"]:
        return _lower_children(body_node, config)
    # Brace-less bodies such as `for (...) x++;` or an arrow's expression
    return (lower_node(body_node, config),)


def lower_node(node, config: dict) -> Statement:
    """Convert one tree-sitter node (and its subtree) to a Statement."""
    if node.type in config["loop_types"]:
        body_node = node.child_by_field_name("body")
        if body_node is None:
            return LoopStatement(kind=node.type, header=_lower_children(node, config))
        header = tuple(
            lower_node(child, config)
            for child in node.named_children
            if child != body_node and child.type not in _SKIPPED_TYPES
        )
        return LoopStatement(kind=node.type, header=header, body=_lower_body(body_node, config))
    if node.type in config["if_types"]:
        return IfStatement(body=_lower_children(node, config))
    if node.type in config["block_types"]:
        return BlockStatement(body=_lower_children(node, config))
    return OtherStatement(kind=node.type, children=_lower_children(node, config))


def lower_function(node, config: dict) -> FunctionDeclaration:
    body_node = node.child_by_field_name("body")
    body = None if body_node is None else _lower_body(body_node, config)
    return FunctionDeclaration(
        name=get_function_name(node),
        line=node.start_point[0] + 1,
        body=body,
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def parse_source(source: bytes, config: dict, path: str = "<unknown>") -> SourceTree:
    """Parse source bytes and return the lowered SourceTree.

    Raises SourceParseError when the parse contains syntax errors and
    GrammarNotAvailableError when the grammar is not installed.
    """
    parser = require_parser(config)
    try:
        tree = parser.parse(source)
    except (ValueError, TypeError) as exc:
        raise SourceParseError(path, f"parser failed: {exc}") from exc

    root = tree.root_node
    error_node = find_syntax_error(root)
    if error_node is not None:
        line, column = error_node.start_point[0] + 1, error_node.start_point[1] + 1
        if error_node.is_missing:
            message = f"{line}:{column}: syntax error: missing {error_node.type}"
        else:
            message = f"{line}:{column}: syntax error: unexpected input"
        raise SourceParseError(path, message, line=line, column=column)

    try:
        functions = tuple(
            lower_function(node, config)
            for node in find_functions(root, config["function_types"])
        )
    except RecursionError as exc:
        raise SourceParseError(path, "syntax tree is nested too deeply to analyze") from exc
    return SourceTree(path=path, functions=functions)
