from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from .registry import AnchorRegistry, Point, ResolutionError


class ShapeBuilder:
    """Per-shape view of the registry used while one shape is realized.

    A shape may call :meth:`publish_partial` with the anchors it already
    knows (for example ``width``) so that its remaining inputs can refer to
    them through ``$self``, then :meth:`publish` with its final anchor set.
    Both calls replace the shape's anchors wholesale.
    """

    def __init__(self, registry: AnchorRegistry, shape_id: str):
        self.registry = registry
        self.shape_id = shape_id
        self.published: Dict[str, Any] = {}
        self.final = False

    def value(self, raw: Any, *, axis: Optional[str] = None, prop: Optional[str] = None) -> float:
        if isinstance(raw, bool):
            raise TypeError(f'{self.shape_id}: property "{prop}" must be a number or expression')
        if isinstance(raw, (int, float)):
            return float(raw)
        if isinstance(raw, str):
            if axis is not None:
                return self.registry.resolve_with_axis_check(
                    raw, axis, prop or '?', self.shape_id, self_id=self.shape_id
                )
            return self.registry.resolve(raw, self_id=self.shape_id)
        raise TypeError(
            f'{self.shape_id}: property "{prop}" must be a number or expression, got {raw!r}'
        )

    def optional(self, props: Mapping[str, Any], *names: str, axis: Optional[str] = None):
        """Resolve the first of ``names`` present in ``props``, else None."""
        for name in names:
            if props.get(name) is not None:
                return self.value(props[name], axis=axis, prop=name)
        return None

    def point(self, raw: Any, *, prop: Optional[str] = None) -> Point:
        if isinstance(raw, str):
            return self.registry.resolve_point(raw)
        if isinstance(raw, Mapping) and 'x' in raw and 'y' in raw:
            return Point(
                self.value(raw['x'], axis='x', prop=f'{prop}.x'),
                self.value(raw['y'], axis='y', prop=f'{prop}.y'),
            )
        if isinstance(raw, (tuple, list)) and len(raw) == 2:
            return Point(
                self.value(raw[0], axis='x', prop=f'{prop}.x'),
                self.value(raw[1], axis='y', prop=f'{prop}.y'),
            )
        raise ResolutionError(f'{self.shape_id}: property "{prop}" is not a point: {raw!r}')

    def publish_partial(self, anchors: Mapping[str, Any]) -> None:
        self.registry.register(self.shape_id, anchors)
        self.published = dict(anchors)

    def publish(self, anchors: Mapping[str, Any]) -> None:
        self.publish_partial(anchors)
        self.final = True

    def warn(self, message: str) -> None:
        self.registry.add_diagnostic('warning', self.shape_id, message)

    def check_bounds(self, left: float, right: float, top: float, bottom: float) -> None:
        self.registry.check_bounds(
            self.shape_id, {'left': left, 'right': right, 'top': top, 'bottom': bottom}
        )

    def check_rotated_bounds(
        self, corners: Sequence[Any], rotation: float, pivot: Sequence[float]
    ) -> None:
        self.registry.check_rotated_bounds(self.shape_id, corners, rotation, pivot[0], pivot[1])
