from .ops import (
    ClippingError,
    Operation,
    construct,
)
from .pipeline import (
    OPERATION_ORDER,
    OperationResult,
    fold_operation,
    run_operations,
)
