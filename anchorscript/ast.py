from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Literal:
    value: float


@dataclass(frozen=True)
class Ref:
    id: str
    anchor: str


@dataclass(frozen=True)
class SelfRef:
    anchor: str


@dataclass(frozen=True)
class BinOp:
    op: str  # '+', '-', '*' or '/'
    left: 'Expr'
    right: 'Expr'


Expr = Union[Literal, Ref, SelfRef, BinOp]
