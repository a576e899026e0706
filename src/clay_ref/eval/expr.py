from __future__ import annotations

from ..types import (
    ClayNotAReference,
    ClayTypeError,
    ClayUnsupportedConstruct,
    ClyBool,
    ClyInteger,
    ClyReference,
    ClyValue,
    Frame,
)
from ..tree import Infix, Match, Prefix
from .common import EvalFunc, plain_identifier

def eval_prefix(node: Prefix, frame: Frame, eval_func: EvalFunc) -> ClyValue:
    match node.operator:
        case '&':
            return eval_address_of(node, frame, eval_func)
        case '*':
            return eval_deref(node, frame, eval_func)
        case '!':
            return eval_not(eval_func(node.operand, frame))
        case '-':
            return eval_negate(eval_func(node.operand, frame))

    raise ClayUnsupportedConstruct(f"Prefix operator '{node.operator}'")

def eval_address_of(node: Prefix, frame: Frame, eval_func: EvalFunc) -> ClyReference:
    value = eval_func(node.operand, frame)
    return ClyReference(target=node.operand, value=value)

def eval_deref(node: Prefix, frame: Frame, eval_func: EvalFunc) -> ClyValue:
    # operand runs first, so `*f()` still calls `f` before failing
    value = eval_func(node.operand, frame)

    name = plain_identifier(node.operand)
    if name is None:
        raise ClayTypeError("Can only dereference an identifier")

    ref = require_reference(value, name)

    # the snapshot taken at `&`, not a re-read of the referent
    return ref.value

def eval_not(value: ClyValue) -> ClyBool:
    if isinstance(value, ClyBool):
        return ClyBool(not value.value)

    # any non-boolean operand is false
    return ClyBool(False)

def eval_negate(value: ClyValue) -> ClyInteger:
    if isinstance(value, ClyInteger):
        return ClyInteger(-value.value)

    raise ClayTypeError(f"Expected an integer after '-', got {type(value).__name__}")

def eval_infix(node: Infix, _frame: Frame) -> ClyValue:
    raise ClayUnsupportedConstruct(f"Infix operator '{node.operator}'")

def eval_match(_node: Match, _frame: Frame) -> ClyValue:
    raise ClayUnsupportedConstruct("match expression")

def require_reference(value: ClyValue, name: str) -> ClyReference:
    if isinstance(value, ClyReference):
        return value

    raise ClayNotAReference(f"'{name}' is not a reference")

def reference_target_name(ref: ClyReference) -> str:
    name = plain_identifier(ref.target)
    if name is None:
        raise ClayUnsupportedConstruct("Writing through a reference to a non-identifier")

    return name
