from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from .types import (
    ClayRecursionError,
    ClayRuntimeError,
    ClayUnsupportedConstruct,
    ClyValue,
    Frame,
)
from .tree import (
    ArrayLiteral,
    Assignment,
    Block,
    BooleanLiteral,
    Call,
    ExpressionStatement,
    FloatLiteral,
    FunctionLiteral,
    Identifier,
    If,
    Infix,
    IntegerLiteral,
    Match,
    Node,
    Prefix,
    Program,
    Return,
    StringLiteral,
    UnderscoreLiteral,
    Update,
    While,
    node_label,
    node_pos,
)
from .eval.bind import eval_assignment, eval_update
from .eval.blocks import eval_block, eval_program as _eval_statements, eval_return
from .eval.common import identifier_key
from .eval.expr import eval_infix, eval_match, eval_prefix
from .eval.fn import eval_call, eval_function_literal
from .eval.literals import (
    eval_array,
    eval_boolean,
    eval_float,
    eval_integer,
    eval_string,
    eval_underscore,
)

EvalFunc = Callable[[Any, Frame], ClyValue]


def _maybe_attach_location(exc: ClayRuntimeError, node: Node) -> None:
    # innermost node wins; outer frames see the error already tagged
    if getattr(exc, "_augmented", False):
        return

    pos = node_pos(node)
    if pos is None:
        return

    exc.clay_meta = pos
    exc._augmented = True  # type: ignore[attr-defined]

# ---------------- Public API ----------------

def eval_program(program: Program, frame: Optional[Frame]=None) -> ClyValue:
    """Evaluate a whole program against `frame` (a fresh root frame by default)."""
    if frame is None:
        frame = Frame()

    try:
        return _eval_statements(program.statements, frame, eval_node)
    except RecursionError:
        raise ClayRecursionError("Evaluation nested too deeply") from None

# ---------------- Core evaluator ----------------

def eval_node(n: Node, frame: Frame) -> ClyValue:
    try:
        return _eval_node_inner(n, frame)
    except ClayRuntimeError as e:
        _maybe_attach_location(e, n)
        raise


def _eval_node_inner(n: Node, frame: Frame) -> ClyValue:
    handler = _NODE_DISPATCH.get(type(n))
    if handler is not None:
        return handler(n, frame)

    raise ClayUnsupportedConstruct(node_label(n))

# ---------------- Statements ----------------

def _eval_expression_stmt(n: ExpressionStatement, frame: Frame) -> ClyValue:
    return eval_node(n.expr, frame)

def _eval_unsupported_stmt(n: Node, _frame: Frame) -> ClyValue:
    label = {If: "if statement", While: "while loop"}.get(type(n), node_label(n))
    raise ClayUnsupportedConstruct(label)

# ---------------- Expressions ----------------

def _eval_identifier(n: Identifier, frame: Frame) -> ClyValue:
    return frame.get(identifier_key(n))

_NODE_DISPATCH: Dict[type, Callable[[Any, Frame], ClyValue]] = {
    Program: lambda n, frame: _eval_statements(n.statements, frame, eval_node),
    # statements
    Assignment: lambda n, frame: eval_assignment(n, frame, eval_node),
    Block: lambda n, frame: eval_block(n, frame, eval_node),
    ExpressionStatement: _eval_expression_stmt,
    Update: lambda n, frame: eval_update(n, frame, eval_node),
    Return: lambda n, frame: eval_return(n, frame, eval_node),
    If: _eval_unsupported_stmt,
    While: _eval_unsupported_stmt,
    # expressions
    Identifier: _eval_identifier,
    StringLiteral: eval_string,
    BooleanLiteral: eval_boolean,
    IntegerLiteral: eval_integer,
    FloatLiteral: eval_float,
    UnderscoreLiteral: eval_underscore,
    ArrayLiteral: lambda n, frame: eval_array(n, frame, eval_node),
    FunctionLiteral: eval_function_literal,
    Call: lambda n, frame: eval_call(n, frame, eval_node),
    Prefix: lambda n, frame: eval_prefix(n, frame, eval_node),
    Infix: eval_infix,
    Match: eval_match,
}
