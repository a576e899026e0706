from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from typing_extensions import TypeAlias, TypeGuard
from .tree import Block, Node

# ---------- Value Model ----------

@dataclass
class ClyNull:
    def __repr__(self) -> str:
        return "null"

@dataclass
class ClyUnderscore:
    def __repr__(self) -> str:
        return "_"

@dataclass
class ClyInteger:
    value: int
    def __repr__(self) -> str:
        return str(self.value)

@dataclass
class ClyFloat:
    value: float
    def __repr__(self) -> str:
        return repr(self.value)

@dataclass
class ClyString:
    value: str
    def __repr__(self) -> str:
        return f'"{self.value}"'

@dataclass
class ClyBool:
    value: bool
    def __repr__(self) -> str:
        return "true" if self.value else "false"

@dataclass
class ClyArray:
    # elements are shared with whatever produced them, never copied
    items: List['ClyValue']
    def __repr__(self) -> str:
        return "[" + ", ".join(repr(x) for x in self.items) + "]"

@dataclass(eq=False)
class ClyFn:
    params: List[str]
    body: Block
    frame: 'Frame'                   # Closure frame, shared not copied
    def __repr__(self) -> str:
        return f"<fn({', '.join(self.params)})>"

@dataclass
class ClyReference:
    """Result of `&expr`: the source expression plus its value at creation."""
    target: Node
    value: 'ClyValue'
    def __repr__(self) -> str:
        from .eval.common import render_expr
        return f"&{render_expr(self.target)}"

@dataclass
class ClyReturn:
    """Control-flow signal produced by `return`; unwrapped at call boundaries."""
    value: 'ClyValue'
    def __repr__(self) -> str:
        return f"<return {self.value!r}>"

ClyValue: TypeAlias = (
    ClyNull
    | ClyUnderscore
    | ClyInteger
    | ClyFloat
    | ClyString
    | ClyBool
    | ClyArray
    | ClyFn
    | ClyReference
    | ClyReturn
)

@dataclass
class Module:
    name: str
    members: Dict[str, ClyValue] = field(default_factory=dict)

class Frame:
    """One lexical scope: own bindings plus a link to the enclosing frame."""

    def __init__(self, parent: Optional['Frame']=None, call_depth: int=0):
        self.parent = parent
        self.vars: Dict[str, ClyValue] = {}
        self.modules: Dict[str, Module] = {}
        self.call_depth = call_depth

    def define(self, name: str, val: ClyValue) -> ClyValue:
        self.vars[name] = val
        return val

    def lookup(self, name: str) -> Optional[ClyValue]:
        frame: Optional[Frame] = self

        while frame is not None:
            if name in frame.vars:
                return frame.vars[name]
            frame = frame.parent

        return None

    def get(self, name: str) -> ClyValue:
        val = self.lookup(name)
        if val is None:
            raise ClayUndefinedIdentifier(name)

        return val

    def mutate(self, name: str, val: ClyValue) -> ClyValue:
        """Overwrite `name` in the nearest frame that binds it; never creates."""
        frame: Optional[Frame] = self

        while frame is not None:
            if name in frame.vars:
                frame.vars[name] = val
                return val
            frame = frame.parent

        raise ClayUndefinedBinding(name)

    def has(self, name: str) -> bool:
        return self.lookup(name) is not None

    def define_module(self, module: Module) -> Module:
        self.modules[module.name] = module
        return module

    def module(self, name: str) -> Optional[Module]:
        frame: Optional[Frame] = self

        while frame is not None:
            if name in frame.modules:
                return frame.modules[name]
            frame = frame.parent

        return None

    def root(self) -> 'Frame':
        frame = self
        while frame.parent is not None:
            frame = frame.parent
        return frame

# ---------- Exceptions ----------

class ClayRuntimeError(Exception):
    clay_meta: Optional[object]

    def __init__(self, message: str):
        super().__init__(message)
        self.clay_meta = None

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        msg = super().__str__()

        meta = getattr(self, "clay_meta", None)
        if meta is None:
            return msg

        line = getattr(meta, "line", None)
        col = getattr(meta, "column", None)

        if line is None:
            return msg

        if col is None:
            return f"{msg} (line {line})"

        return f"{msg} (line {line}, col {col})"

class ClayUndefinedIdentifier(ClayRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Could not find identifier '{name}' in current lexical context")
        self.name = name

class ClayUndefinedBinding(ClayRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Could not find identifier with name '{name}' to update")
        self.name = name

class ClayNotCallable(ClayRuntimeError):
    pass

class ClayNotAReference(ClayRuntimeError):
    pass

class ClayTypeError(ClayRuntimeError):
    pass

class ClayArityError(ClayTypeError):
    pass

class ClayUnsupportedConstruct(ClayRuntimeError):
    def __init__(self, construct: str):
        super().__init__(f"{construct} is not supported")
        self.construct = construct

class ClayRecursionError(ClayRuntimeError):
    pass

_CLY_VALUE_TYPES: Tuple[type, ...] = (
    ClyNull,
    ClyUnderscore,
    ClyInteger,
    ClyFloat,
    ClyString,
    ClyBool,
    ClyArray,
    ClyFn,
    ClyReference,
    ClyReturn,
)

def is_cly_value(value: object) -> TypeGuard[ClyValue]:
    return isinstance(value, _CLY_VALUE_TYPES)
