from __future__ import annotations

import os as _os

from .types import ClyString, ClyValue

DEFAULT_MAX_CALL_DEPTH = 64


def debug_py_trace_enabled() -> bool:
    """Return True when CLAY_DEBUG_PY_TRACE asks for Python tracebacks."""
    raw = _os.environ.get("CLAY_DEBUG_PY_TRACE", "")
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def max_call_depth() -> int:
    raw = _os.environ.get("CLAY_MAX_CALL_DEPTH")
    if raw is None:
        return DEFAULT_MAX_CALL_DEPTH

    try:
        value = int(raw.strip())
    except ValueError:
        return DEFAULT_MAX_CALL_DEPTH

    return value if value > 0 else DEFAULT_MAX_CALL_DEPTH


def stringify(value: ClyValue) -> str:
    """Render a value for display; strings print without quotes."""
    if isinstance(value, ClyString):
        return value.value

    return repr(value)
