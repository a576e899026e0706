from __future__ import annotations

from typing import Any, Callable, Optional

from ..types import ClayRuntimeError, ClyValue, Frame
from ..tree import (
    ArrayLiteral,
    BooleanLiteral,
    Call,
    FloatLiteral,
    FunctionLiteral,
    Identifier,
    Infix,
    IntegerLiteral,
    Prefix,
    StringLiteral,
    UnderscoreLiteral,
)

EvalFunc = Callable[[Any, Frame], ClyValue]

# segments concatenate with no separator: `a.b` reads the binding `ab`
SEGMENT_SEP = ""

def identifier_key(node: Identifier) -> str:
    """Flatten a (possibly dotted) identifier into its single lookup key."""
    if not node.segments:
        raise ClayRuntimeError("Empty identifier")

    return SEGMENT_SEP.join(node.segments)

def plain_identifier(node: Any) -> Optional[str]:
    if isinstance(node, Identifier):
        return identifier_key(node)

    return None

def render_expr(node: Any) -> str:
    match node:
        case Identifier(segments=segments):
            return ".".join(segments)
        case StringLiteral(value=value):
            return f'"{value}"'
        case BooleanLiteral(value=value):
            return "true" if value else "false"
        case IntegerLiteral(value=value) | FloatLiteral(value=value):
            return str(value)
        case UnderscoreLiteral():
            return "_"
        case ArrayLiteral(elements=elements):
            return "[" + ", ".join(render_expr(e) for e in elements) + "]"
        case FunctionLiteral(parameters=params):
            return f"fn({', '.join(params)}) {{ ... }}"
        case Call(callee=callee, arguments=args):
            return f"{render_expr(callee)}({', '.join(render_expr(a) for a in args)})"
        case Prefix(operator=op, operand=operand):
            return f"{op}{render_expr(operand)}"
        case Infix(operator=op, left=left, right=right):
            return f"{render_expr(left)} {op} {render_expr(right)}"

    return type(node).__name__
