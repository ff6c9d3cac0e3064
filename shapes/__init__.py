# Re-export core geometry API for convenience
from .geometry import (
    Point,
    Contour,
    Polygon,
    circle_contour,
    circle_error_bound,
    rectangle_contour,
    contour_bounds,
    split_xy,
    format_contour,
    format_polygon,
)
from .slot import (
    RECTANGLE,
    LEFT_CIRCLE,
    RIGHT_CIRCLE,
    ConfigurationError,
    SlotConfig,
    Shape,
    SlotShapes,
    build_slot,
)
