"""prompt_toolkit lexer for live Clay syntax highlighting in the REPL."""

from __future__ import annotations

from typing import Callable

from lark.exceptions import LexError
from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .parser import make_parser

# Map highlight groups → prompt_toolkit style strings.
GROUP_STYLE = {
    "keyword": "bold ansicyan",
    "boolean": "ansicyan",
    "number": "ansimagenta",
    "string": "ansigreen",
    "operator": "ansiyellow",
    "comment": "italic ansigray",
}

# Grammar terminal name → highlight group.
_TERMINAL_GROUP = {
    "FN": "keyword",
    "RETURN": "keyword",
    "IF": "keyword",
    "ELSE": "keyword",
    "WHILE": "keyword",
    "MATCH": "keyword",
    "TRUE": "boolean",
    "FALSE": "boolean",
    "UNDERSCORE": "boolean",
    "INT": "number",
    "FLOAT": "number",
    "STRING": "string",
    "AMP": "operator",
    "STAR": "operator",
    "BANG": "operator",
    "COMMENT": "comment",
}


def highlight_line(text: str) -> StyleAndTextTuples:
    """Split one line into styled fragments; unlexable input stays plain."""
    try:
        tokens = list(make_parser().lex(text, dont_ignore=True))
    except LexError:
        return [("", text)]

    result: StyleAndTextTuples = []
    pos = 0

    for tok in tokens:
        start = tok.start_pos
        end = tok.end_pos
        if start is None or end is None or start < pos:
            continue

        # Unstyled gap before token.
        if start > pos:
            result.append(("", text[pos:start]))

        style = GROUP_STYLE.get(_TERMINAL_GROUP.get(tok.type, ""), "")
        result.append((style, text[start:end]))
        pos = end

    # Trailing unstyled text.
    if pos < len(text):
        result.append(("", text[pos:]))

    return result if result else [("", text)]


class ClayLexer(Lexer):
    """prompt_toolkit Lexer that highlights Clay source using the grammar's terminals."""

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        cache: dict[int, StyleAndTextTuples] = {}

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno not in cache:
                if lineno < len(lines):
                    cache[lineno] = highlight_line(lines[lineno])
                else:
                    cache[lineno] = [("", "")]

            return cache[lineno]

        return get_line
