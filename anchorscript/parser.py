from typing import List

from .ast import BinOp, Expr, Literal, Ref, SelfRef
from .lexer import SELF_PREFIX, ExprSyntaxError, Token, tokenize


class Cursor:
    def __init__(self, tokens: List[Token]):
        self.toks = tokens
        self.i = 0

    def peek(self) -> Token:
        return self.toks[self.i]

    def advance(self) -> Token:
        t = self.toks[self.i]
        if t[0] != 'EOF':
            self.i += 1
        return t

    def match(self, *types: str):
        if self.peek()[0] in types:
            return self.advance()
        return None

    def expect(self, *types: str) -> Token:
        t = self.peek()
        if t[0] in types:
            return self.advance()
        want = '|'.join(types)
        raise ExprSyntaxError(f'expected {want}, got {t[0]} ({t[1]!r})', t[2])


def parse_factor(cur: Cursor) -> Expr:
    t = cur.peek()
    kind = t[0]
    if kind == 'NUMBER':
        cur.advance()
        return Literal(float(t[1]))
    if kind == 'REF':
        cur.advance()
        shape_id, anchor = t[1][1:].split('.', 1)
        return Ref(shape_id, anchor)
    if kind == 'SELF_REF':
        cur.advance()
        return SelfRef(t[1][len(SELF_PREFIX) + 1:])
    if kind == 'LPAREN':
        cur.advance()
        inner = parse_sum(cur)
        cur.expect('RPAREN')
        return inner
    if kind == 'EOF':
        raise ExprSyntaxError('unexpected end of expression', t[2])
    raise ExprSyntaxError(f'unexpected token {kind} ({t[1]!r})', t[2])


def parse_term(cur: Cursor) -> Expr:
    left = parse_factor(cur)
    while True:
        op = cur.match('STAR', 'SLASH')
        if not op:
            return left
        left = BinOp(op[1], left, parse_factor(cur))


def parse_sum(cur: Cursor) -> Expr:
    left = parse_term(cur)
    while True:
        op = cur.match('PLUS', 'MINUS')
        if not op:
            return left
        left = BinOp(op[1], left, parse_term(cur))


def parse_expr(text: str) -> Expr:
    cur = Cursor(tokenize(text))
    if cur.peek()[0] == 'EOF':
        raise ExprSyntaxError('empty expression', 0)
    expr = parse_sum(cur)
    trailing = cur.peek()
    if trailing[0] != 'EOF':
        raise ExprSyntaxError(
            f'unexpected token {trailing[0]} ({trailing[1]!r}), expected end of expression',
            trailing[2],
        )
    return expr
