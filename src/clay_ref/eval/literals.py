from __future__ import annotations

from ..types import (
    ClyArray,
    ClyBool,
    ClyFloat,
    ClyInteger,
    ClyString,
    ClyUnderscore,
    ClyValue,
    Frame,
)
from ..tree import (
    ArrayLiteral,
    BooleanLiteral,
    FloatLiteral,
    IntegerLiteral,
    StringLiteral,
    UnderscoreLiteral,
)
from .common import EvalFunc

def eval_string(node: StringLiteral, _frame: Frame) -> ClyString:
    return ClyString(node.value)

def eval_boolean(node: BooleanLiteral, _frame: Frame) -> ClyBool:
    return ClyBool(node.value)

def eval_integer(node: IntegerLiteral, _frame: Frame) -> ClyInteger:
    return ClyInteger(node.value)

def eval_float(node: FloatLiteral, _frame: Frame) -> ClyFloat:
    return ClyFloat(node.value)

def eval_underscore(_node: UnderscoreLiteral, _frame: Frame) -> ClyUnderscore:
    return ClyUnderscore()

def eval_array(node: ArrayLiteral, frame: Frame, eval_func: EvalFunc) -> ClyArray:
    items: list[ClyValue] = []

    # left-to-right; elements keep the produced values, no copies
    for element in node.elements:
        items.append(eval_func(element, frame))

    return ClyArray(items)
