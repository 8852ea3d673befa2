"""Reference shape realizers.

Each realizer resolves its inputs through a :class:`ShapeBuilder`, publishes
the shape's anchors and returns the output properties of the realized shape.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .builder import ShapeBuilder
from .geometry import rect_corners
from .printer import number_str

Realizer = Callable[[ShapeBuilder, Mapping[str, Any]], Dict[str, Any]]

_RECT_GEOMETRY = {'x', 'left', 'right', 'width', 'y', 'top', 'bottom', 'height', 'rotation'}
_CIRCLE_GEOMETRY = {'centerX', 'centerY', 'r', 'rotation'}
_POINT_GEOMETRY = {'x', 'y'}
_LINE_GEOMETRY = {'x1', 'y1', 'x2', 'y2', 'from', 'to'}


def _passthrough(props: Mapping[str, Any], geometry: set) -> Dict[str, Any]:
    return {key: value for key, value in props.items() if key not in geometry}


def _span(
    b: ShapeBuilder,
    start: Optional[float],
    end: Optional[float],
    size: Optional[float],
    names: Tuple[str, str, str],
) -> Tuple[float, float]:
    """Return (start, size) for one axis from any subset of start/end/size."""
    if start is not None and end is not None and size is not None:
        b.warn(
            f'Conflicting positioning: "{names[0]}", "{names[1]}" and "{names[2]}" '
            f'are all set; "{names[1]}" is ignored'
        )
        return start, size
    if start is not None:
        if size is None:
            size = end - start if end is not None else 0.0
        return start, size
    if end is not None:
        size = size if size is not None else 0.0
        return end - size, size
    return 0.0, size if size is not None else 0.0


def _aliased(b: ShapeBuilder, props: Mapping[str, Any], name: str, alias: str,
             axis: str) -> Optional[float]:
    if props.get(name) is not None and props.get(alias) is not None:
        b.warn(
            f'Conflicting positioning: "{name}" and "{alias}" are both set; '
            f'"{alias}" is ignored'
        )
    return b.optional(props, name, alias, axis=axis)


def _check_box(b: ShapeBuilder, left: float, top: float, width: float, height: float,
               rotation: float, pivot: Tuple[float, float]) -> None:
    if rotation:
        b.check_rotated_bounds(rect_corners(left, top, width, height), rotation, pivot)
    else:
        b.check_bounds(left, left + width, top, top + height)


def realize_rect(b: ShapeBuilder, props: Mapping[str, Any]) -> Dict[str, Any]:
    width = b.optional(props, 'width', axis='x')
    if width is not None:
        b.publish_partial({'width': width})
    height = b.optional(props, 'height', axis='y')
    if height is not None:
        b.publish_partial({**b.published, 'height': height})

    left = _aliased(b, props, 'x', 'left', axis='x')
    right = b.optional(props, 'right', axis='x')
    top = _aliased(b, props, 'y', 'top', axis='y')
    bottom = b.optional(props, 'bottom', axis='y')
    rotation = b.optional(props, 'rotation') or 0.0

    left, width = _span(b, left, right, width, ('x', 'right', 'width'))
    top, height = _span(b, top, bottom, height, ('y', 'bottom', 'height'))
    right = left + width
    bottom = top + height
    cx = left + width / 2
    cy = top + height / 2

    b.publish({
        'left': left,
        'right': right,
        'top': top,
        'bottom': bottom,
        'width': width,
        'height': height,
        'centerX': cx,
        'centerY': cy,
        'center': (cx, cy),
        'topLeft': (left, top),
        'topRight': (right, top),
        'bottomLeft': (left, bottom),
        'bottomRight': (right, bottom),
        'rotation': rotation,
    })
    _check_box(b, left, top, width, height, rotation, (cx, cy))

    out = {'x': left, 'y': top, 'width': width, 'height': height}
    if rotation:
        out['transform'] = f'rotate({number_str(rotation)}, {number_str(cx)}, {number_str(cy)})'
    out.update(_passthrough(props, _RECT_GEOMETRY))
    return out


def realize_circle(b: ShapeBuilder, props: Mapping[str, Any]) -> Dict[str, Any]:
    r = b.optional(props, 'r') or 0.0
    b.publish_partial({'r': r})
    cx = b.optional(props, 'centerX', axis='x') or 0.0
    cy = b.optional(props, 'centerY', axis='y') or 0.0

    b.publish({
        'centerX': cx,
        'centerY': cy,
        'r': r,
        'left': cx - r,
        'right': cx + r,
        'top': cy - r,
        'bottom': cy + r,
        'width': 2 * r,
        'height': 2 * r,
        'center': (cx, cy),
    })
    b.check_bounds(cx - r, cx + r, cy - r, cy + r)

    out = {'cx': cx, 'cy': cy, 'r': r}
    out.update(_passthrough(props, _CIRCLE_GEOMETRY))
    return out


def realize_point(b: ShapeBuilder, props: Mapping[str, Any]) -> Dict[str, Any]:
    x = b.optional(props, 'x', axis='x') or 0.0
    y = b.optional(props, 'y', axis='y') or 0.0
    b.publish({'x': x, 'y': y, 'centerX': x, 'centerY': y, 'center': (x, y)})
    b.check_bounds(x, x, y, y)
    out = {'cx': x, 'cy': y}
    out.update(_passthrough(props, _POINT_GEOMETRY))
    return out


def _line_end(b: ShapeBuilder, props: Mapping[str, Any], ref_key: str,
              x_key: str, y_key: str) -> Tuple[float, float]:
    if props.get(ref_key) is not None:
        if props.get(x_key) is not None or props.get(y_key) is not None:
            b.warn(f'Conflicting positioning: "{ref_key}" overrides "{x_key}"/"{y_key}"')
        return tuple(b.point(props[ref_key], prop=ref_key))
    x = b.optional(props, x_key, axis='x') or 0.0
    y = b.optional(props, y_key, axis='y') or 0.0
    return x, y


def realize_line(b: ShapeBuilder, props: Mapping[str, Any]) -> Dict[str, Any]:
    x1, y1 = _line_end(b, props, 'from', 'x1', 'y1')
    x2, y2 = _line_end(b, props, 'to', 'x2', 'y2')
    mx = (x1 + x2) / 2
    my = (y1 + y2) / 2

    b.publish({
        'startX': x1,
        'startY': y1,
        'endX': x2,
        'endY': y2,
        'start': (x1, y1),
        'end': (x2, y2),
        'length': math.hypot(x2 - x1, y2 - y1),
        'angle': math.degrees(math.atan2(y2 - y1, x2 - x1)),
        'midpoint': (mx, my),
        'centerX': mx,
        'centerY': my,
    })
    b.check_bounds(min(x1, x2), max(x1, x2), min(y1, y2), max(y1, y2))

    out = {'x1': x1, 'y1': y1, 'x2': x2, 'y2': y2}
    out.update(_passthrough(props, _LINE_GEOMETRY))
    return out


REALIZERS: Dict[str, Realizer] = {
    'rect': realize_rect,
    'circle': realize_circle,
    'point': realize_point,
    'line': realize_line,
}
