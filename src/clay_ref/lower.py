from __future__ import annotations

from typing import Any, List, Optional

from lark import Token, Transformer, v_args

from .tree import (
    NO_POS,
    ArrayLiteral,
    Assignment,
    Block,
    BooleanLiteral,
    Call,
    ExpressionStatement,
    FloatLiteral,
    FunctionLiteral,
    Identifier,
    If,
    Infix,
    IntegerLiteral,
    Match,
    MatchArm,
    Node,
    Pos,
    Prefix,
    Program,
    Return,
    StringLiteral,
    UnderscoreLiteral,
    Update,
    While,
    is_node,
)

_ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    '0': '\0',
    '"': '"',
    '\\': '\\',
}


def token_pos(tok: Token) -> Pos:
    return Pos(getattr(tok, 'line', 0) or 0, getattr(tok, 'column', 0) or 0)

def _pos(meta: Any, children: List[Any]) -> Pos:
    line = getattr(meta, 'line', None)
    if line is not None and not getattr(meta, 'empty', False):
        return Pos(line, getattr(meta, 'column', 0))

    for child in children:
        if isinstance(child, Token):
            return token_pos(child)
        if is_node(child):
            return child.pos

    return NO_POS

def unescape(raw: str) -> str:
    body = raw[1:-1] if len(raw) >= 2 and raw[0] == raw[-1] == '"' else raw
    out: List[str] = []
    chars = iter(body)

    for ch in chars:
        if ch != '\\':
            out.append(ch)
            continue

        nxt = next(chars, '')
        out.append(_ESCAPES.get(nxt, '\\' + nxt))

    return "".join(out)

def _statements(children: List[Any]) -> tuple:
    return tuple(ch for ch in children if is_node(ch))


@v_args(meta=True)
class Lower(Transformer):
    """Turn the Lark parse tree into `clay_ref.tree` nodes."""

    # ---------- statements ----------

    def start(self, meta, children) -> Program:
        return Program(_statements(children), _pos(meta, children))

    def empty(self, meta, children) -> None:
        return None

    def block(self, meta, children) -> Block:
        lbrace = children[0]
        return Block(_statements(children[1:]), token_pos(lbrace))

    def assign(self, meta, children) -> Assignment:
        names, value = children
        return Assignment(names, value, _pos(meta, children))

    def name_list(self, meta, children) -> tuple:
        return tuple(str(tok) for tok in children)

    def update(self, meta, children) -> Update:
        target, value = children
        return Update(target, value, _pos(meta, children))

    def deref_update(self, meta, children) -> Update:
        star, name, value = children
        ident = Identifier((str(name),), token_pos(name))
        target = Prefix(str(star), ident, token_pos(star))
        return Update(target, value, token_pos(star))

    def return_stmt(self, meta, children) -> Return:
        kw, value = children
        return Return(value, token_pos(kw))

    def expr_stmt(self, meta, children) -> ExpressionStatement:
        (expr,) = children
        return ExpressionStatement(expr, expr.pos)

    def if_stmt(self, meta, children) -> If:
        kw, condition, then, *rest = children
        otherwise: Optional[Block] = rest[-1] if rest else None
        return If(condition, then, otherwise, token_pos(kw))

    def while_stmt(self, meta, children) -> While:
        kw, condition, body = children
        return While(condition, body, token_pos(kw))

    # ---------- expressions ----------

    def identifier(self, meta, children) -> Identifier:
        return Identifier(tuple(str(tok) for tok in children), token_pos(children[0]))

    def string(self, meta, children) -> StringLiteral:
        (tok,) = children
        return StringLiteral(unescape(str(tok)), token_pos(tok))

    def integer(self, meta, children) -> IntegerLiteral:
        (tok,) = children
        return IntegerLiteral(int(tok), token_pos(tok))

    def float(self, meta, children) -> FloatLiteral:
        (tok,) = children
        return FloatLiteral(float(tok), token_pos(tok))

    def true(self, meta, children) -> BooleanLiteral:
        return BooleanLiteral(True, token_pos(children[0]))

    def false(self, meta, children) -> BooleanLiteral:
        return BooleanLiteral(False, token_pos(children[0]))

    def underscore(self, meta, children) -> UnderscoreLiteral:
        return UnderscoreLiteral(token_pos(children[0]))

    def array(self, meta, children) -> ArrayLiteral:
        lsqb, *elements = children
        return ArrayLiteral(tuple(elements), token_pos(lsqb))

    def fn_lit(self, meta, children) -> FunctionLiteral:
        kw, *rest = children
        params: tuple = ()
        if len(rest) == 2:
            params, body = rest
        else:
            (body,) = rest
        return FunctionLiteral(params, body, token_pos(kw))

    def params(self, meta, children) -> tuple:
        return tuple(str(tok) for tok in children)

    def call(self, meta, children) -> Call:
        callee, lpar, *rest = children
        args = rest[0] if rest else ()
        return Call(callee, args, token_pos(lpar))

    def arguments(self, meta, children) -> tuple:
        return tuple(children)

    def prefix(self, meta, children) -> Prefix:
        op, operand = children
        return Prefix(str(op), operand, token_pos(op))

    def infix(self, meta, children) -> Infix:
        left, op, right = children
        return Infix(str(op), left, right, token_pos(op))

    def match_expr(self, meta, children) -> Match:
        kw, subject, *arms = children
        return Match(subject, tuple(arms), token_pos(kw))

    def match_arm(self, meta, children) -> MatchArm:
        pattern, value = children
        return MatchArm(pattern, value, pattern.pos)


def lower(tree: Any) -> Node:
    """Lower a raw parse tree into evaluator nodes."""
    return Lower().transform(tree)
