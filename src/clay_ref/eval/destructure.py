"""Positional, single-level destructuring for `a, b = expr` assignments."""

from __future__ import annotations

from typing import List, Sequence

from ..types import ClayArityError, ClayTypeError, ClyArray, ClyValue, Frame

def destructure_values(names: Sequence[str], value: ClyValue) -> List[ClyValue]:
    """Pick the array element for each target name, by position."""
    if not isinstance(value, ClyArray):
        raise ClayTypeError(
            "Destructuring assignment is only valid for expressions that return an array"
        )

    items = value.items
    if len(names) > len(items):
        raise ClayArityError(
            f"Destructure arity mismatch: {len(names)} names but only {len(items)} element(s)"
        )

    # surplus elements are ignored
    return [items[idx] for idx in range(len(names))]

def bind_names(names: Sequence[str], value: ClyValue, frame: Frame) -> None:
    if len(names) == 1:
        frame.define(names[0], value)
        return

    values = destructure_values(names, value)

    for name, item in zip(names, values):
        frame.define(name, item)
