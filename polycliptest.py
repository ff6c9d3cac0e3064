from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence

from clipping import ClippingError, OperationResult, run_operations
from logging_config import setup_logging
from plotting import PageLayout, RenderError, build_render_job, save_job_as_svg
from shapes import ConfigurationError, SlotConfig, SlotShapes, build_slot, format_contour, format_polygon

logger = logging.getLogger("polyclip.cli")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Build a rounded slot, apply Union/Intersection/Difference/XOR across its shapes "
                    "and draw the results to an SVG page."
    )
    p.add_argument("--segments", type=int, default=1,
                   help="the number of segments per 1/4 circle at the ends of the slot (default: 1)")
    p.add_argument("--radius", type=float, default=8.0,
                   help="the radius of the circles at the ends of the slot (default: 8)")
    p.add_argument("--add_right_circle", action="store_true",
                   help="add an additional circle on the right side of the rectangle")
    p.add_argument("--output", type=str, default="polycliptest.svg",
                   help="SVG file to write (default: polycliptest.svg)")
    p.add_argument("--log-level", type=str, default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="diagnostic log level")
    return p.parse_args(argv)


def print_contours(slot: SlotShapes) -> None:
    print("\n-- Rectangle Contour --")
    print(format_contour(slot.rectangle.contour))
    print("\n-- Left Circle Contour --")
    print(format_contour(slot.left_circle.contour))
    if slot.right_circle is not None:
        print("\n-- Right Circle Contour --")
        print(format_contour(slot.right_circle.contour))


def print_result(result: OperationResult) -> None:
    name = result.operation.label
    print(f"\n== {name} Polygon ==")
    print(format_polygon(result.polygon))
    if result.is_empty:
        print(name, "operation failed OR the result was empty...")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(getattr(logging, args.log_level))

    layout = PageLayout()
    try:
        config = SlotConfig(
            segments=args.segments,
            radius=args.radius,
            add_right_circle=args.add_right_circle,
            center=(layout.poly_x, layout.start_y),
        )
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    slot = build_slot(config)
    print_contours(slot)

    shapes = slot.ordered()
    try:
        results: List[OperationResult] = run_operations(shapes)
    except ClippingError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    for res in results:
        print_result(res)

    job = build_render_job(shapes, results, layout)
    try:
        failed = save_job_as_svg(job, args.output)
    except RenderError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    if failed:
        logger.warning("%d row(s) could not be drawn", failed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
