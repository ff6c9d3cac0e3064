from __future__ import annotations

from enum import Enum
from typing import Any, Iterator
import logging

from shapely.errors import GEOSException
from shapely.geometry import GeometryCollection
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.validation import explain_validity

from shapes.geometry import Contour, Point, Polygon

logger = logging.getLogger("polyclip.clipping")


class ClippingError(RuntimeError):
    """The boolean engine could not compute a result."""


class Operation(Enum):
    UNION = ("Union", "union")
    INTERSECTION = ("Intersection", "intersection")
    DIFFERENCE = ("Difference", "difference")
    XOR = ("XOR", "symmetric_difference")

    def __init__(self, label: str, method: str):
        self.label = label
        self.method = method


def _to_geometry(polygon: Polygon) -> Any:
    """
    Build a fresh shapely geometry from contours. Overlapping contours
    cancel out (even-odd), so a contour nested in another one is a hole.
    """
    geom = GeometryCollection()
    for i, contour in enumerate(polygon):
        if len(contour) < 3:
            raise ClippingError(f"contour {i} has {len(contour)} points, need at least 3")
        ring = ShapelyPolygon([(float(x), float(y)) for x, y in contour])
        if not ring.is_valid:
            raise ClippingError(f"contour {i} is malformed: {explain_validity(ring)}")
        geom = ring if geom.is_empty else geom.symmetric_difference(ring)
    return geom


def _area_parts(geom: Any) -> Iterator[ShapelyPolygon]:
    if isinstance(geom, ShapelyPolygon):
        if not geom.is_empty:
            yield geom
    elif hasattr(geom, "geoms"):
        for part in geom.geoms:
            yield from _area_parts(part)
    # points and lines left over where boundaries touch have no area


def _ring_to_contour(ring: Any) -> Contour:
    coords = list(ring.coords)[:-1]
    return tuple(Point(float(x), float(y)) for x, y in coords)


def _to_polygon(geom: Any) -> Polygon:
    contours: list[Contour] = []
    for part in _area_parts(geom):
        contours.append(_ring_to_contour(part.exterior))
        contours.extend(_ring_to_contour(hole) for hole in part.interiors)
    return tuple(contours)


def construct(subject: Polygon, operation: Operation, clip: Polygon) -> Polygon:
    """
    Apply a boolean operation to two polygons and return the result's
    contours. An empty tuple means the result covers no area.

    Raises ClippingError when an operand is malformed or the engine fails.
    """
    try:
        a = _to_geometry(subject)
        b = _to_geometry(clip)
        result = getattr(a, operation.method)(b)
    except GEOSException as e:
        raise ClippingError(f"{operation.label} failed: {e}") from e
    return _to_polygon(result)
