"""Syntax-tree node classes consumed by the evaluator.

Every statement and expression category is a frozen dataclass carrying the
source position of the token that introduced it. Categories the evaluator
does not implement yet (infix operators, match, if, while) still have nodes
so they can be reported precisely instead of failing to parse.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, is_dataclass
from typing import Any, List, Optional, Tuple, Union
from typing_extensions import TypeAlias, TypeGuard


@dataclass(frozen=True)
class Pos:
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


NO_POS = Pos()

# ---------- Expressions ----------

@dataclass(frozen=True)
class Identifier:
    segments: Tuple[str, ...]
    pos: Pos = NO_POS

@dataclass(frozen=True)
class StringLiteral:
    value: str
    pos: Pos = NO_POS

@dataclass(frozen=True)
class BooleanLiteral:
    value: bool
    pos: Pos = NO_POS

@dataclass(frozen=True)
class IntegerLiteral:
    value: int
    pos: Pos = NO_POS

@dataclass(frozen=True)
class FloatLiteral:
    value: float
    pos: Pos = NO_POS

@dataclass(frozen=True)
class UnderscoreLiteral:
    pos: Pos = NO_POS

@dataclass(frozen=True)
class ArrayLiteral:
    elements: Tuple['Expr', ...]
    pos: Pos = NO_POS

@dataclass(frozen=True)
class FunctionLiteral:
    parameters: Tuple[str, ...]
    body: 'Block'
    pos: Pos = NO_POS

@dataclass(frozen=True)
class Call:
    callee: 'Expr'
    arguments: Tuple['Expr', ...]
    pos: Pos = NO_POS

@dataclass(frozen=True)
class Prefix:
    operator: str  # one of & * ! -
    operand: 'Expr'
    pos: Pos = NO_POS

@dataclass(frozen=True)
class Infix:
    operator: str
    left: 'Expr'
    right: 'Expr'
    pos: Pos = NO_POS

@dataclass(frozen=True)
class MatchArm:
    pattern: 'Expr'
    value: 'Expr'
    pos: Pos = NO_POS

@dataclass(frozen=True)
class Match:
    subject: 'Expr'
    arms: Tuple[MatchArm, ...]
    pos: Pos = NO_POS

Expr: TypeAlias = Union[
    Identifier,
    StringLiteral,
    BooleanLiteral,
    IntegerLiteral,
    FloatLiteral,
    UnderscoreLiteral,
    ArrayLiteral,
    FunctionLiteral,
    Call,
    Prefix,
    Infix,
    Match,
]

# ---------- Statements ----------

@dataclass(frozen=True)
class Assignment:
    targets: Tuple[str, ...]  # more than one name means destructuring
    value: Expr
    pos: Pos = NO_POS

@dataclass(frozen=True)
class Block:
    statements: Tuple['Stmt', ...]
    pos: Pos = NO_POS

@dataclass(frozen=True)
class ExpressionStatement:
    expr: Expr
    pos: Pos = NO_POS

@dataclass(frozen=True)
class Update:
    target: Expr
    value: Expr
    pos: Pos = NO_POS

@dataclass(frozen=True)
class Return:
    value: Expr
    pos: Pos = NO_POS

@dataclass(frozen=True)
class If:
    condition: Expr
    then: Block
    otherwise: Optional[Block] = None
    pos: Pos = NO_POS

@dataclass(frozen=True)
class While:
    condition: Expr
    body: Block
    pos: Pos = NO_POS

Stmt: TypeAlias = Union[Assignment, Block, ExpressionStatement, Update, Return, If, While]

@dataclass(frozen=True)
class Program:
    statements: Tuple[Stmt, ...]
    pos: Pos = NO_POS

Node: TypeAlias = Union[Expr, Stmt, Program, MatchArm]

_NODE_TYPES = (
    Identifier, StringLiteral, BooleanLiteral, IntegerLiteral, FloatLiteral,
    UnderscoreLiteral, ArrayLiteral, FunctionLiteral, Call, Prefix, Infix,
    Match, MatchArm, Assignment, Block, ExpressionStatement, Update, Return,
    If, While, Program,
)


def is_node(value: Any) -> TypeGuard[Node]:
    return isinstance(value, _NODE_TYPES)

def node_pos(node: Any) -> Optional[Pos]:
    pos = getattr(node, "pos", None)
    if pos is None or pos == NO_POS:
        return None
    return pos

def node_label(node: Any) -> str:
    return type(node).__name__

def pretty(node: Any, indent: str = '  ') -> str:
    """Return an indented dump of a node and its children."""
    lines: List[str] = []

    def _pretty(n: Any, level: int) -> None:
        pad = indent * level
        if not is_dataclass(n) or n.__class__ is Pos:
            lines.append(f"{pad}{n!r}")
            return

        scalars = []
        nested = []
        for f in fields(n):
            if f.name == "pos":
                continue
            val = getattr(n, f.name)
            if is_node(val) or (isinstance(val, tuple) and any(is_node(v) for v in val)):
                nested.append(val)
            elif val is not None:
                scalars.append(f"{f.name}={val!r}")

        head = f"{pad}{node_label(n)}"
        if scalars:
            head += " " + " ".join(scalars)
        pos = node_pos(n)
        if pos is not None:
            head += f"  @{pos}"
        lines.append(head)

        for val in nested:
            for child in (val if isinstance(val, tuple) else (val,)):
                _pretty(child, level + 1)

    _pretty(node, 0)
    return "\n".join(lines)
