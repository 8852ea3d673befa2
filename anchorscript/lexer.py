import re
from typing import List, Tuple

Token = Tuple[str, str, int]  # (type, value, pos)

SYMBOLS = {
    '+': 'PLUS',
    '-': 'MINUS',
    '*': 'STAR',
    '/': 'SLASH',
    '(': 'LPAREN',
    ')': 'RPAREN',
}

# a '-' directly after one of these starts a negative number literal
_UNARY_AFTER = {'PLUS', 'MINUS', 'STAR', 'SLASH', 'LPAREN'}

WS = ' \t\r\n'

_num_re = re.compile(r'[0-9]+(?:\.[0-9]*)?|\.[0-9]+')
_id_re = re.compile(r'[A-Za-z0-9_-]+')
_anchor_re = re.compile(r'[A-Za-z0-9_-][A-Za-z0-9_.-]*')

SELF_PREFIX = '$self'


class ExprSyntaxError(SyntaxError):
    """Lexical or syntax error in a reference expression."""

    def __init__(self, message: str, pos: int):
        super().__init__(f'[pos {pos}] {message}')
        self.pos = pos


def _scan_anchor(s: str, i: int, after: str) -> int:
    if i >= len(s) or s[i] != '.':
        raise ExprSyntaxError(f'expected "." after {after}', i)
    m = _anchor_re.match(s, i + 1)
    if not m:
        raise ExprSyntaxError(f'expected anchor name after "{after}."', i + 1)
    return m.end()


def tokenize(s: str) -> List[Token]:
    tokens: List[Token] = []
    i = 0
    n = len(s)
    while i < n:
        ch = s[i]
        if ch in WS:
            i += 1
            continue
        if ch == '-':
            prev = tokens[-1][0] if tokens else None
            if prev is None or prev in _UNARY_AFTER:
                m = _num_re.match(s, i + 1)
                if m:
                    tokens.append(('NUMBER', s[i:m.end()], i))
                    i = m.end()
                    continue
        if ch in SYMBOLS:
            tokens.append((SYMBOLS[ch], ch, i))
            i += 1
            continue
        m = _num_re.match(s, i)
        if m:
            tokens.append(('NUMBER', m.group(0), i))
            i = m.end()
            continue
        if ch == '#':
            m = _id_re.match(s, i + 1)
            if not m:
                raise ExprSyntaxError('expected shape id after "#"', i + 1)
            end = _scan_anchor(s, m.end(), 'shape id')
            tokens.append(('REF', s[i:end], i))
            i = end
            continue
        if ch == '$':
            if not s.startswith(SELF_PREFIX, i):
                raise ExprSyntaxError(f'expected "{SELF_PREFIX}"', i)
            end = _scan_anchor(s, i + len(SELF_PREFIX), SELF_PREFIX)
            tokens.append(('SELF_REF', s[i:end], i))
            i = end
            continue
        raise ExprSyntaxError(f'unexpected character: {ch!r}', i)
    tokens.append(('EOF', '', n))
    return tokens
