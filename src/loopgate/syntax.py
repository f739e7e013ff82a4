"""Typed syntax model consumed by the loop-depth analyzer.

The tree provider (frontend.py) lowers a tree-sitter parse into these
frozen dataclasses. Only conditionals, blocks and loops get their own types;
every other node becomes an OtherStatement that still exposes its children.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class IfStatement:
    body: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class BlockStatement:
    body: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class LoopStatement:
    """A counted, conditional or iteration loop.

    header holds the parts outside the loop body (range clause, condition,
    Python's for/else branch); body holds the statements that run per
    iteration.
    """

    kind: str
    header: tuple[Statement, ...] = ()
    body: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class OtherStatement:
    kind: str
    children: tuple[Statement, ...] = ()


Statement = Union[IfStatement, BlockStatement, LoopStatement, OtherStatement]


@dataclass(frozen=True)
class FunctionDeclaration:
    """A function or method. body is None for declarations without one."""

    name: str
    line: int
    body: tuple[Statement, ...] | None = None


@dataclass(frozen=True)
class SourceTree:
    path: str
    functions: tuple[FunctionDeclaration, ...] = ()
