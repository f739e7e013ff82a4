"""Maximum loop nesting depth of a function body.

Conditionals, blocks and every other statement are transparent: loops found
inside them count at the depth of the enclosing loop chain. Only a
LoopStatement adds a level, and only for the statements in its body.
Sibling loops resolve to the deepest one, never the sum.
"""

from collections.abc import Iterable

from loopgate.syntax import (
    BlockStatement,
    IfStatement,
    LoopStatement,
    OtherStatement,
    Statement,
)


def count_loop_depth(body: Iterable[Statement] | None) -> int:
    """Return the deepest loop-within-loop chain found anywhere in body.

    An absent or empty body has depth 0.
    """
    if body is None:
        return 0
    max_depth = 0
    for stmt in body:
        max_depth = max(max_depth, statement_loop_depth(stmt))
    return max_depth


def statement_loop_depth(stmt: Statement) -> int:
    """Loop depth contributed by a single statement and its subtree."""
    if isinstance(stmt, LoopStatement):
        # Header parts (range expression, for/else branch) sit beside the loop
        return max(1 + count_loop_depth(stmt.body), count_loop_depth(stmt.header))
    if isinstance(stmt, (IfStatement, BlockStatement)):
        return count_loop_depth(stmt.body)
    if isinstance(stmt, OtherStatement):
        return count_loop_depth(stmt.children)
    raise TypeError(f"Unsupported statement type: {type(stmt).__name__}")
