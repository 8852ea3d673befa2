from .lexer import tokenize, ExprSyntaxError, Token
from .ast import Expr, Literal, Ref, SelfRef, BinOp
from .parser import parse_expr
from .evaluate import evaluate, parse_and_evaluate, collect_anchors, RefLookup
from .printer import format_expr
from .config import RegistryConfig, get_registry_config, set_registry_config
from .registry import (
    AnchorRegistry,
    Diagnostic,
    Point,
    ResolutionError,
    ShapeRecord,
    ViewBox,
    parse_ref,
)
from .builder import ShapeBuilder
from .shapes import REALIZERS
from .scene import ShapeSpec, run_pass, load_scene, parse_view_box

__all__ = [
    'tokenize',
    'ExprSyntaxError',
    'Token',
    'Expr',
    'Literal',
    'Ref',
    'SelfRef',
    'BinOp',
    'parse_expr',
    'evaluate',
    'parse_and_evaluate',
    'collect_anchors',
    'RefLookup',
    'format_expr',
    'RegistryConfig',
    'get_registry_config',
    'set_registry_config',
    'AnchorRegistry',
    'Diagnostic',
    'Point',
    'ResolutionError',
    'ShapeRecord',
    'ViewBox',
    'parse_ref',
    'ShapeBuilder',
    'REALIZERS',
    'ShapeSpec',
    'run_pass',
    'load_scene',
    'parse_view_box',
]
