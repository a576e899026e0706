from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from lark import Lark, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from .lower import lower
from .tree import Program

GRAMMAR_PATH = Path(__file__).resolve().parent / "grammar.lark"

class ParseError(Exception):
    """Parse error with position info"""
    def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(
            f"{message} at line {line}, col {column}" if line is not None else message
        )

def _read_grammar(grammar_path: Optional[str]=None) -> str:
    path = Path(grammar_path) if grammar_path else GRAMMAR_PATH
    if not path.exists():
        raise FileNotFoundError(f"grammar not found: {path}")

    return path.read_text(encoding="utf-8")

@lru_cache(maxsize=4)
def make_parser(grammar_path: Optional[str]=None) -> Lark:
    return Lark(
        _read_grammar(grammar_path),
        parser="lalr",
        propagate_positions=True,
        maybe_placeholders=False,
    )

def _describe(exc: UnexpectedInput) -> str:
    if isinstance(exc, UnexpectedToken):
        tok = exc.token
        if tok.type == "$END":
            return "Unexpected end of input"
        expected = sorted(exc.expected)[:6]
        return f"Unexpected token {tok.value!r}; expected one of {', '.join(expected)}"

    if isinstance(exc, UnexpectedCharacters):
        return f"Unexpected character {exc.char!r}"

    if isinstance(exc, UnexpectedEOF):
        return "Unexpected end of input"

    return str(exc)

def parse_tree(src: str, grammar_path: Optional[str]=None) -> Tree:
    parser = make_parser(grammar_path)

    try:
        return parser.parse(src)
    except UnexpectedInput as exc:
        line = getattr(exc, "line", None)
        column = getattr(exc, "column", None)
        if line is not None and line < 0:
            line, column = None, None
        raise ParseError(_describe(exc), line, column) from exc

def parse_source(src: str, grammar_path: Optional[str]=None) -> Program:
    """Parse Clay source into a lowered `Program` node."""
    tree = parse_tree(src, grammar_path)

    # lowering recurses once per nesting level
    try:
        return lower(tree)
    except RecursionError:
        raise ParseError("Input nested too deeply") from None
