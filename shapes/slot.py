from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple
import logging
import numbers

from .geometry import Contour, Point, circle_contour, circle_error_bound, rectangle_contour

logger = logging.getLogger("polyclip.shapes")


RECTANGLE = "rectangle"
LEFT_CIRCLE = "left circle"
RIGHT_CIRCLE = "right circle"


class ConfigurationError(ValueError):
    """Raised when the slot layout parameters cannot produce a valid slot."""


@dataclass(frozen=True)
class SlotConfig:
    """
    Layout parameters of the slot, fixed for one run.

    'segments' is the circle resolution per quarter, 'width' the overall
    slot width measured between the outer edges of both circles.
    """
    segments: int = 1
    radius: float = 8.0
    add_right_circle: bool = False
    center: Tuple[float, float] = (30.0, 15.0)
    width: float = 20.0

    def __post_init__(self):
        if isinstance(self.segments, bool) or not isinstance(self.segments, numbers.Integral):
            raise ConfigurationError(f"segments must be an integer, got {self.segments!r}")
        if self.segments < 1:
            raise ConfigurationError(f"segments must be at least 1, got {self.segments}")
        if not self.radius > 0:
            raise ConfigurationError(f"radius must be positive, got {self.radius}")
        if self.radius >= self.width:
            raise ConfigurationError(
                f"radius ({self.radius}) must be smaller than the slot width ({self.width})"
            )

    @property
    def span(self) -> float:
        # distance between the two circle centers
        return self.width - self.radius


@dataclass(frozen=True)
class Shape:
    role: str
    contour: Contour


@dataclass(frozen=True)
class SlotShapes:
    rectangle: Shape
    left_circle: Shape
    right_circle: Optional[Shape] = None

    def ordered(self) -> Tuple[Shape, ...]:
        """
        Shapes in fold order: rectangle, left circle, then the right circle
        if there is one. Difference and XOR depend on this order.
        """
        if self.right_circle is None:
            return (self.rectangle, self.left_circle)
        return (self.rectangle, self.left_circle, self.right_circle)


def build_slot(config: SlotConfig) -> SlotShapes:
    cx, cy = float(config.center[0]), float(config.center[1])
    r = float(config.radius)
    half = config.span / 2
    left = Point(cx - half, cy)
    right = Point(cx + half, cy)

    rect = Shape(RECTANGLE, rectangle_contour(left.x, right.x, left.y - r, left.y + r))
    left_circle = Shape(LEFT_CIRCLE, circle_contour(left.x, left.y, r, config.segments))
    right_circle = None
    if config.add_right_circle:
        right_circle = Shape(RIGHT_CIRCLE, circle_contour(right.x, right.y, r, config.segments))

    logger.debug(
        "Built slot: span=%g radius=%g segments=%d (max radial error %g) right_circle=%s",
        config.span, r, config.segments, circle_error_bound(r, config.segments), config.add_right_circle,
    )
    return SlotShapes(rectangle=rect, left_circle=left_circle, right_circle=right_circle)
