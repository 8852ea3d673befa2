from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .builder import ShapeBuilder
from .logging_utils import debug_log_call
from .registry import AnchorRegistry, ResolutionError, ShapeRecord, ViewBox
from .shapes import REALIZERS, Realizer

logger = logging.getLogger(__name__)


@dataclass
class ShapeSpec:
    kind: str
    id: Optional[str] = None
    props: Dict[str, Any] = field(default_factory=dict)


@debug_log_call(logger, log_result=False)
def run_pass(
    registry: AnchorRegistry,
    shapes: Iterable[ShapeSpec],
    view_box: Optional[ViewBox] = None,
    realizers: Optional[Mapping[str, Realizer]] = None,
) -> List[ShapeRecord]:
    """Realize ``shapes`` in order against a freshly reset ``registry``.

    A shape can only refer to shapes declared before it. The first error
    aborts the pass; anchors published up to that point stay in the
    registry.
    """
    table = realizers if realizers is not None else REALIZERS
    registry.reset()
    if view_box is not None:
        registry.set_view_box(view_box)

    auto_counts: Counter = Counter()
    seen = set()
    for spec in shapes:
        realizer = table.get(spec.kind)
        if realizer is None:
            raise ValueError(f"unknown shape kind {spec.kind!r}")
        if spec.id:
            shape_id, auto_id = spec.id, False
        else:
            auto_counts[spec.kind] += 1
            shape_id, auto_id = f"{spec.kind}-{auto_counts[spec.kind]}", True
        if shape_id in seen:
            raise ResolutionError(f'duplicate shape id "{shape_id}"')
        seen.add(shape_id)

        builder = ShapeBuilder(registry, shape_id)
        output = realizer(builder, spec.props)
        if not builder.final:
            raise ValueError(f"realizer for {spec.kind!r} did not publish anchors for {shape_id!r}")
        registry.register_shape(shape_id, ShapeRecord(spec.kind, shape_id, auto_id, output))
        logger.debug("Realized %s %s", spec.kind, shape_id)

    logger.info(
        "Pass complete: %d shape(s), %d diagnostic(s)",
        len(seen),
        len(registry.diagnostics),
    )
    return registry.realized_shapes


def parse_view_box(value: Any) -> ViewBox:
    if isinstance(value, str):
        parts = value.replace(",", " ").split()
        if len(parts) != 4:
            raise ValueError(f"viewBox needs four numbers, got {value!r}")
        return ViewBox(*(float(part) for part in parts))
    if isinstance(value, Mapping):
        try:
            return ViewBox(
                float(value["minX"]),
                float(value["minY"]),
                float(value["width"]),
                float(value["height"]),
            )
        except KeyError as exc:
            raise ValueError(f"viewBox is missing {exc.args[0]!r}") from exc
    if isinstance(value, (list, tuple)) and len(value) == 4:
        return ViewBox(*(float(part) for part in value))
    raise ValueError(f"invalid viewBox {value!r}")


def load_scene(data: Mapping[str, Any]) -> Tuple[List[ShapeSpec], Optional[ViewBox]]:
    """Build shape specs and the view-box from a JSON-like scene mapping."""
    raw_vb = data.get("viewBox")
    view_box = parse_view_box(raw_vb) if raw_vb is not None else None

    shapes: List[ShapeSpec] = []
    for idx, entry in enumerate(data.get("shapes", [])):
        if not isinstance(entry, Mapping):
            raise ValueError(f"shape #{idx} must be an object, got {entry!r}")
        props = dict(entry)
        kind = props.pop("type", None)
        if not isinstance(kind, str):
            raise ValueError(f"shape #{idx} has no \"type\"")
        shape_id = props.pop("id", None)
        shapes.append(ShapeSpec(kind, shape_id, props))
    return shapes, view_box
