from __future__ import annotations

from typing import Iterable

from ..types import ClyNull, ClyReturn, ClyValue, Frame
from ..tree import Block, Return, Stmt
from .common import EvalFunc

def eval_block(block: Block, frame: Frame, eval_func: EvalFunc) -> ClyValue:
    """Run a block in `frame` itself; a return signal stops it and is passed up."""
    for stmt in block.statements:
        result = eval_func(stmt, frame)

        if isinstance(result, ClyReturn):
            return result

    return ClyNull()

def eval_program(statements: Iterable[Stmt], frame: Frame, eval_func: EvalFunc) -> ClyValue:
    """Run top-level statements in order, returning the last value."""
    result: ClyValue = ClyNull()

    for stmt in statements:
        result = eval_func(stmt, frame)

        if isinstance(result, ClyReturn):
            return result.value

    return result

def eval_return(node: Return, frame: Frame, eval_func: EvalFunc) -> ClyReturn:
    return ClyReturn(eval_func(node.value, frame))

def unwrap_return(result: ClyValue) -> ClyValue:
    if isinstance(result, ClyReturn):
        return result.value

    return ClyNull()
