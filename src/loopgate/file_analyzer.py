"""Per-file analysis: function name -> maximum loop depth."""

from loopgate.errors import SourceParseError
from loopgate.frontend import parse_source
from loopgate.loop_depth import count_loop_depth
from loopgate.syntax import SourceTree

FunctionStats = dict[str, int]


def analyze_tree(tree: SourceTree) -> FunctionStats:
    """Compute the loop depth of every function declaration in a parsed file.

    Declarations that share a name overwrite each other (last wins) and keep
    the position of the first occurrence.
    """
    stats: FunctionStats = {}
    for function in tree.functions:
        stats[function.name] = count_loop_depth(function.body)
    return stats


def check_file(path: str, config: dict) -> FunctionStats:
    """Read, parse and analyze one source file.

    Unreadable files and syntax errors both raise SourceParseError.
    """
    try:
        with open(path, "rb") as f:
            source = f.read()
    except OSError as exc:
        raise SourceParseError(path, f"cannot read file: {exc.strerror or exc}") from exc

    tree = parse_source(source, config, path)
    try:
        return analyze_tree(tree)
    except RecursionError as exc:
        raise SourceParseError(path, "syntax tree is nested too deeply to analyze") from exc
