import numpy as np

from .ast import BinOp, Expr, Literal, Ref, SelfRef
from .lexer import SELF_PREFIX

_PRECEDENCE = {'+': 1, '-': 1, '*': 2, '/': 2}
_ATOM = 3


def number_str(value: float) -> str:
    # positional notation only; the tokenizer has no exponent syntax
    if float(value).is_integer():
        return str(int(value))
    return np.format_float_positional(float(value), trim='-')


def _precedence(expr: Expr) -> int:
    if isinstance(expr, BinOp):
        return _PRECEDENCE[expr.op]
    return _ATOM


def format_expr(expr: Expr) -> str:
    if isinstance(expr, Literal):
        return number_str(expr.value)
    if isinstance(expr, Ref):
        return f"#{expr.id}.{expr.anchor}"
    if isinstance(expr, SelfRef):
        return f"{SELF_PREFIX}.{expr.anchor}"
    if isinstance(expr, BinOp):
        prec = _PRECEDENCE[expr.op]
        left = format_expr(expr.left)
        if _precedence(expr.left) < prec:
            left = f"({left})"
        right = format_expr(expr.right)
        # equal precedence on the right needs parens to keep left associativity
        if _precedence(expr.right) <= prec:
            right = f"({right})"
        return f"{left} {expr.op} {right}"
    raise ValueError(f"unsupported expression node {expr!r}")
