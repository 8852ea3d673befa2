import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from anchorscript import (
    AnchorRegistry,
    ExprSyntaxError,
    Point,
    ResolutionError,
    format_expr,
    load_scene,
    parse_expr,
    run_pass,
)
from anchorscript.printer import number_str

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _format_value(value) -> str:
    if isinstance(value, Point):
        return f"({number_str(value.x)}, {number_str(value.y)})"
    return number_str(value)


def _print_report(registry: AnchorRegistry) -> None:
    print("Shapes:")
    for record in registry.realized_shapes:
        marker = " (auto id)" if record.auto_id else ""
        print(f"  {record.kind} {record.id}{marker}")
        for name, value in registry.anchors_for(record.id).items():
            print(f"    {name}: {_format_value(value)}")
    print("Diagnostics:")
    diagnostics = registry.diagnostics
    if diagnostics:
        for diagnostic in diagnostics:
            print(f"  - {diagnostic}")
    else:
        print("  (none)")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Resolve anchor references in a JSON scene")
    parser.add_argument("path", help="Path to the JSON scene file")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--expr",
        help="Evaluate a reference expression against the scene after the pass",
    )
    parser.add_argument(
        "--self-id",
        help="Shape id that $self refers to in --expr",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    with open(args.path, encoding="utf-8") as fin:
        data = json.load(fin)

    logger.info("Loading scene from %s", args.path)
    shapes, view_box = load_scene(data)
    registry = AnchorRegistry()

    try:
        run_pass(registry, shapes, view_box)
    except (ExprSyntaxError, ResolutionError) as exc:
        logger.error("Pass failed: %s", exc)
        _print_report(registry)
        return 1

    _print_report(registry)

    if args.expr:
        try:
            value = registry.resolve(args.expr, args.self_id)
        except (ExprSyntaxError, ResolutionError) as exc:
            logger.error("Could not evaluate %r: %s", args.expr, exc)
            return 1
        print(f"{format_expr(parse_expr(args.expr))} = {number_str(value)}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
