from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence
import logging

from shapes.geometry import Polygon, contour_bounds
from shapes.slot import Shape

from .ops import Operation, construct

logger = logging.getLogger("polyclip.clipping")


# Rows are laid out in this order.
OPERATION_ORDER = (
    Operation.UNION,
    Operation.INTERSECTION,
    Operation.DIFFERENCE,
    Operation.XOR,
)


@dataclass(frozen=True)
class OperationResult:
    operation: Operation
    polygon: Polygon

    @property
    def is_empty(self) -> bool:
        return len(self.polygon) == 0


def fold_operation(operation: Operation, shapes: Sequence[Shape]) -> Polygon:
    """
    Fold one operation left-to-right over the shapes:
    ((s0 op s1) op s2) ...
    """
    if len(shapes) < 2:
        raise ValueError("need at least two shapes to fold an operation over")
    result: Polygon = (shapes[0].contour,)
    for shape in shapes[1:]:
        result = construct(result, operation, (shape.contour,))
        logger.debug("%s with %s -> %d contour(s)", operation.label, shape.role, len(result))
    return result


def run_operations(shapes: Sequence[Shape],
                   operations: Sequence[Operation] = OPERATION_ORDER) -> List[OperationResult]:
    results: List[OperationResult] = []
    for op in operations:
        polygon = fold_operation(op, shapes)
        if not polygon:
            logger.info("%s produced an empty result", op.label)
        else:
            logger.debug("%s result spans %s", op.label, contour_bounds(polygon))
        results.append(OperationResult(operation=op, polygon=polygon))
    return results
