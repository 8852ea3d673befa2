"""Per-pass anchor registry.

Shapes are realized in declared order. Each one resolves its reference
expressions against the anchors published so far, then publishes its own
anchors with :meth:`AnchorRegistry.register`. The registry also collects
non-fatal diagnostics (axis mismatches, view-box violations) that are read
back once the pass has finished.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple, Union

from .ast import Expr
from .config import RegistryConfig, get_registry_config
from .evaluate import SELF_ID, collect_anchors, evaluate
from .geometry import bounding_box, rotate_about
from .logging_utils import debug_log_call
from .parser import parse_expr
from .printer import number_str

logger = logging.getLogger(__name__)

DIAGNOSTIC_LEVELS = ('warning', 'error')

_REF_RE = re.compile(r'^#([^.]+)\.(.+)$')


class ResolutionError(LookupError):
    """A reference could not be resolved against the registry."""


class Point(NamedTuple):
    x: float
    y: float


AnchorValue = Union[float, Point]


@dataclass(frozen=True)
class Diagnostic:
    level: str
    shape_id: str
    message: str

    def __str__(self) -> str:
        return f"[{self.level}] {self.shape_id}: {self.message}"


@dataclass(frozen=True)
class ViewBox:
    min_x: float
    min_y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.min_x + self.width

    @property
    def max_y(self) -> float:
        return self.min_y + self.height


@dataclass
class ShapeRecord:
    kind: str
    id: str
    auto_id: bool = False
    props: Dict[str, Any] = field(default_factory=dict)


def parse_ref(ref: str) -> Tuple[str, str]:
    """Split a bare ``#id.anchor`` reference into ``(id, anchor)``."""
    m = _REF_RE.match(ref)
    if not m:
        raise ResolutionError(
            f'Invalid anchor reference: "{ref}". Expected format "#id.anchor".'
        )
    return m.group(1), m.group(2)


def _coerce_value(shape_id: str, name: str, value: Any) -> AnchorValue:
    if isinstance(value, Point):
        return value
    if isinstance(value, Mapping) and set(value) == {'x', 'y'}:
        return Point(float(value['x']), float(value['y']))
    if isinstance(value, (tuple, list)) and len(value) == 2:
        return Point(float(value[0]), float(value[1]))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    raise TypeError(
        f'anchor "{name}" on shape "{shape_id}" must be a number or a point, got {value!r}'
    )


class AnchorRegistry:
    def __init__(self, config: Optional[RegistryConfig] = None):
        self.config = config if config is not None else get_registry_config()
        self._anchors: Dict[str, Dict[str, AnchorValue]] = {}
        self._shapes: Dict[str, ShapeRecord] = {}
        self._diagnostics: List[Diagnostic] = []
        self._view_box: Optional[ViewBox] = None

    # -- state -----------------------------------------------------------

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """Copy of the diagnostics collected so far in this pass."""
        return list(self._diagnostics)

    @property
    def realized_shapes(self) -> List[ShapeRecord]:
        return list(self._shapes.values())

    @property
    def view_box(self) -> Optional[ViewBox]:
        return self._view_box

    def set_view_box(self, view_box: ViewBox) -> None:
        self._view_box = view_box

    def register(self, shape_id: str, anchors: Mapping[str, Any]) -> None:
        # whole replacement: a later call supersedes an earlier partial set
        self._anchors[shape_id] = {
            name: _coerce_value(shape_id, name, value) for name, value in anchors.items()
        }
        logger.debug("Registered %d anchor(s) for %s", len(anchors), shape_id)

    def register_shape(self, shape_id: str, record: ShapeRecord) -> None:
        self._shapes[shape_id] = record

    def anchors_for(self, shape_id: str) -> Dict[str, AnchorValue]:
        if shape_id not in self._anchors:
            raise ResolutionError(f'shape "{shape_id}" not found')
        return dict(self._anchors[shape_id])

    def add_diagnostic(self, level: str, shape_id: str, message: str) -> None:
        if level not in DIAGNOSTIC_LEVELS:
            raise ValueError(f"diagnostic level must be one of {DIAGNOSTIC_LEVELS}, got {level!r}")
        diagnostic = Diagnostic(level, shape_id, message)
        self._diagnostics.append(diagnostic)
        logger.debug("Diagnostic %s", diagnostic)

    def reset(self) -> None:
        # the view-box survives a reset; callers set it again when it changes
        self._anchors.clear()
        self._shapes.clear()
        self._diagnostics = []

    # -- resolution ------------------------------------------------------

    def _lookup_value(self, shape_id: str, anchor: str) -> AnchorValue:
        ref = f"#{shape_id}.{anchor}"
        shape_anchors = self._anchors.get(shape_id)
        if shape_anchors is None:
            raise ResolutionError(
                f'Anchor reference "{ref}": shape "{shape_id}" not found. '
                'Is it defined before this shape?'
            )
        if anchor not in shape_anchors:
            raise ResolutionError(
                f'Anchor reference "{ref}": anchor "{anchor}" not found on shape "{shape_id}".'
            )
        return shape_anchors[anchor]

    def _scalar_lookup(self, self_id: Optional[str]):
        def lookup(shape_id: str, anchor: str) -> float:
            if shape_id == SELF_ID:
                if self_id is None:
                    raise ResolutionError(
                        f'"{SELF_ID}.{anchor}" has no shape-id context to resolve against'
                    )
                shape_id = self_id
            value = self._lookup_value(shape_id, anchor)
            if isinstance(value, Point):
                raise ResolutionError(
                    f'Anchor reference "#{shape_id}.{anchor}" resolved to a point, not a number. '
                    'Use resolve_point() for point anchors.'
                )
            return value

        return lookup

    def _evaluate(self, expr: Expr, self_id: Optional[str]) -> float:
        return evaluate(expr, self._scalar_lookup(self_id))

    @debug_log_call(logger, name="AnchorRegistry.resolve", skip_self=True)
    def resolve(self, expression: str, self_id: Optional[str] = None) -> float:
        return self._evaluate(parse_expr(expression), self_id)

    @debug_log_call(logger, name="AnchorRegistry.resolve_point", skip_self=True)
    def resolve_point(self, reference: str) -> Point:
        shape_id, anchor = parse_ref(reference)
        value = self._lookup_value(shape_id, anchor)
        if not isinstance(value, Point):
            raise ResolutionError(
                f'Anchor reference "#{shape_id}.{anchor}" resolved to a number, not a point. '
                'Use resolve() for scalar anchors.'
            )
        return value

    @debug_log_call(logger, name="AnchorRegistry.resolve_with_axis_check", skip_self=True)
    def resolve_with_axis_check(
        self,
        expression: str,
        expected_axis: str,
        for_property: str,
        shape_id: str,
        self_id: Optional[str] = None,
    ) -> float:
        if expected_axis not in ('x', 'y'):
            raise ValueError(f"expected_axis must be 'x' or 'y', got {expected_axis!r}")
        expr = parse_expr(expression)
        article = 'an' if expected_axis == 'x' else 'a'
        for anchor in collect_anchors(expr):
            axis = self.config.axis_of(anchor)
            if axis is not None and axis != expected_axis:
                self.add_diagnostic(
                    'warning',
                    shape_id,
                    f'Property "{for_property}" expects {article} {expected_axis}-axis value '
                    f'but "{expression}" uses {axis}-axis anchor "{anchor}"',
                )
        return self._evaluate(expr, self_id)

    # -- bounds ----------------------------------------------------------

    def check_bounds(self, shape_id: str, bounds: Mapping[str, float]) -> None:
        vb = self._view_box
        if vb is None:
            return
        left, right = bounds['left'], bounds['right']
        top, bottom = bounds['top'], bounds['bottom']
        if left < vb.min_x:
            self.add_diagnostic(
                'warning', shape_id,
                f'Left edge ({number_str(left)}) is outside viewBox (minX={number_str(vb.min_x)})',
            )
        if top < vb.min_y:
            self.add_diagnostic(
                'warning', shape_id,
                f'Top edge ({number_str(top)}) is outside viewBox (minY={number_str(vb.min_y)})',
            )
        if right > vb.max_x:
            self.add_diagnostic(
                'warning', shape_id,
                f'Right edge ({number_str(right)}) extends beyond viewBox (maxX={number_str(vb.max_x)})',
            )
        if bottom > vb.max_y:
            self.add_diagnostic(
                'warning', shape_id,
                f'Bottom edge ({number_str(bottom)}) extends beyond viewBox (maxY={number_str(vb.max_y)})',
            )

    def check_rotated_bounds(
        self,
        shape_id: str,
        corners: Sequence[Any],
        rotation_degrees: float,
        pivot_x: float,
        pivot_y: float,
    ) -> None:
        points = [_coerce_value(shape_id, 'corner', corner) for corner in corners]
        rotated = rotate_about(points, rotation_degrees, (pivot_x, pivot_y))
        self.check_bounds(shape_id, bounding_box(rotated))
