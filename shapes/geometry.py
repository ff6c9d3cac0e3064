from __future__ import annotations

from typing import NamedTuple, Sequence, Tuple
import math
import numpy as np


class Point(NamedTuple):
    x: float
    y: float


# A closed ring of points; the last point connects back to the first.
Contour = Tuple[Point, ...]
# One or more contours; nested contours are holes (even-odd rule).
Polygon = Tuple[Contour, ...]


def _radians(deg: float) -> float:
    return (deg * math.pi) / 180


def circle_contour(cx: float, cy: float, r: float, segments: int) -> Contour:
    """
    Regular polygon inscribed in the circle of radius r around (cx, cy).

    'segments' is the number of segments per quarter circle, so the contour
    has exactly 4 * segments points. It starts at the top (cx, cy - r) and
    every following vertex is reached by an equal chord of length
    2 * r * cos(la), pointing along the middle angle of its arc.
    """
    if isinstance(segments, bool) or not isinstance(segments, (int, np.integer)) or segments < 1:
        raise ValueError(f"segments must be a positive integer, got {segments!r}")
    if not r > 0:
        raise ValueError(f"radius must be positive, got {r!r}")
    n = float(segments)
    la = _radians(90 - (90.0 / (2 * n)))
    chord = 2 * r * math.cos(la)
    j = np.arange(1, 4 * segments, dtype=float)
    sa = _radians(90 - ((90.0 / (2 * n)) * (2 * j - 1)))
    steps = np.empty((4 * segments, 2), dtype=float)
    steps[0] = (cx, cy - r)
    # libm trig per step; vectorised np.sin may differ in the last bit
    steps[1:] = [(chord * math.sin(a), chord * math.cos(a)) for a in sa.tolist()]
    pts = np.cumsum(steps, axis=0)
    return tuple(Point(float(x), float(y)) for x, y in pts)


def circle_error_bound(r: float, segments: int) -> float:
    """Largest radial gap between the circle and its approximation."""
    return r * (1.0 - math.cos(math.pi / (4 * segments)))


def rectangle_contour(left: float, right: float, top: float, bottom: float) -> Contour:
    # clockwise on a y-down page, starting at the top-left corner
    return (
        Point(left, top),
        Point(right, top),
        Point(right, bottom),
        Point(left, bottom),
    )


def contour_bounds(contours: Sequence[Contour]) -> Tuple[float, float, float, float]:
    """
    (minx, miny, maxx, maxy) over all points of the given contours.
    """
    pts = np.array([p for c in contours for p in c], dtype=float)
    if pts.size == 0:
        raise ValueError("no points to bound")
    xmin, ymin = pts.min(axis=0)
    xmax, ymax = pts.max(axis=0)
    return float(xmin), float(ymin), float(xmax), float(ymax)


def split_xy(contour: Contour) -> Tuple[list[float], list[float]]:
    xs = [p.x for p in contour]
    ys = [p.y for p in contour]
    return xs, ys


def format_contour(contour: Contour) -> str:
    return "[" + " ".join(f"{{{p.x!r} {p.y!r}}}" for p in contour) + "]"


def format_polygon(polygon: Polygon) -> str:
    return "[" + " ".join(format_contour(c) for c in polygon) + "]"
