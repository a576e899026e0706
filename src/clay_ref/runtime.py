from __future__ import annotations

import logging
from typing import List

from .types import ClayArityError, ClayRecursionError, ClyFn, ClyValue, Frame
from .utils import max_call_depth

logger = logging.getLogger(__name__)

def call_clyfn(fn: ClyFn, positional: List[ClyValue], caller_frame: Frame) -> ClyValue:
    """
    Apply a closure:
    - the activation frame's parent is fn.frame (definition site), never caller_frame
    - arity must match len(fn.params); params bind in declaration order
    - the body's return signal is unwrapped; falling off the end yields null
    """
    from .evaluator import eval_node  # local import to avoid cycle
    from .eval.blocks import eval_block, unwrap_return

    if len(positional) != len(fn.params):
        raise ClayArityError(f"Function expects {len(fn.params)} args; got {len(positional)}")

    depth = caller_frame.call_depth + 1
    limit = max_call_depth()
    if depth > limit:
        raise ClayRecursionError(f"Maximum call depth of {limit} exceeded")

    callee_frame = Frame(parent=fn.frame, call_depth=depth)

    for name, val in zip(fn.params, positional):
        callee_frame.define(name, val)

    logger.debug("activation depth=%d params=(%s)", depth, ", ".join(fn.params))

    return unwrap_return(eval_block(fn.body, callee_frame, eval_node))
