from __future__ import annotations

import logging
from typing import List

from ..types import ClayNotCallable, ClyFn, ClyValue, Frame
from ..tree import Call, FunctionLiteral
from .common import EvalFunc, plain_identifier

logger = logging.getLogger(__name__)

def eval_function_literal(node: FunctionLiteral, frame: Frame) -> ClyFn:
    # capture the live frame; later defines/mutates in it stay visible
    fn_value = ClyFn(params=list(node.parameters), body=node.body, frame=frame)
    logger.debug("closure created: params=(%s) frame_id=%d", ", ".join(fn_value.params), id(frame))

    return fn_value

def eval_args(node: Call, frame: Frame, eval_func: EvalFunc) -> List[ClyValue]:
    return [eval_func(arg, frame) for arg in node.arguments]

def eval_call(node: Call, frame: Frame, eval_func: EvalFunc) -> ClyValue:
    from ..runtime import call_clyfn  # local import to avoid cycle

    name = plain_identifier(node.callee)
    if name is None:
        raise ClayNotCallable(f"Call target {type(node.callee).__name__} is not a function name")

    fn_value = frame.get(name)
    if not isinstance(fn_value, ClyFn):
        raise ClayNotCallable(f"'{name}' is not a function (got {fn_value!r})")

    args = eval_args(node, frame, eval_func)

    return call_clyfn(fn_value, args, frame)
