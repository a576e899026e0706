from __future__ import annotations

from ..types import ClayUnsupportedConstruct, ClyNull, ClyValue, Frame
from ..tree import Assignment, Prefix, Update
from .common import EvalFunc, plain_identifier
from .destructure import bind_names
from .expr import reference_target_name, require_reference

def eval_assignment(node: Assignment, frame: Frame, eval_func: EvalFunc) -> ClyNull:
    """`a = v` / `a, b = v`: always binds in the current frame."""
    value = eval_func(node.value, frame)
    bind_names(node.targets, value, frame)

    return ClyNull()

def eval_update(node: Update, frame: Frame, eval_func: EvalFunc) -> ClyValue:
    """Rebind an existing name, either directly or through a reference."""
    value = eval_func(node.value, frame)
    target = node.target

    name = plain_identifier(target)
    if name is not None:
        return frame.mutate(name, value)

    if isinstance(target, Prefix) and target.operator == '*':
        ref_name = plain_identifier(target.operand)
        if ref_name is None:
            raise ClayUnsupportedConstruct("Update through a dereference of a non-identifier")

        ref = require_reference(frame.get(ref_name), ref_name)
        # the write lands on the referent's binding, never on `ref_name` itself
        return frame.mutate(reference_target_name(ref), value)

    raise ClayUnsupportedConstruct(f"Update target {type(target).__name__}")
