import math
from typing import Callable, List

from .ast import BinOp, Expr, Literal, Ref, SelfRef
from .parser import parse_expr

SELF_ID = '$self'

RefLookup = Callable[[str, str], float]


def _divide(left: float, right: float) -> float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def evaluate(expr: Expr, lookup: RefLookup) -> float:
    if isinstance(expr, Literal):
        return expr.value
    if isinstance(expr, Ref):
        return lookup(expr.id, expr.anchor)
    if isinstance(expr, SelfRef):
        return lookup(SELF_ID, expr.anchor)
    if isinstance(expr, BinOp):
        left = evaluate(expr.left, lookup)
        right = evaluate(expr.right, lookup)
        if expr.op == '+':
            return left + right
        if expr.op == '-':
            return left - right
        if expr.op == '*':
            return left * right
        if expr.op == '/':
            return _divide(left, right)
        raise ValueError(f'unknown operator {expr.op!r}')
    raise TypeError(f'not an expression node: {expr!r}')


def parse_and_evaluate(text: str, lookup: RefLookup) -> float:
    return evaluate(parse_expr(text), lookup)


def collect_anchors(expr: Expr) -> List[str]:
    """Anchor names of every reference in ``expr``, left to right."""
    if isinstance(expr, (Ref, SelfRef)):
        return [expr.anchor]
    if isinstance(expr, BinOp):
        return collect_anchors(expr.left) + collect_anchors(expr.right)
    return []
