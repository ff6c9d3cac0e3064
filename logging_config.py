"""
Diagnostics for polycliptest go to stderr; stdout carries only the
contour report.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.WARNING, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route the 'polyclip.*' loggers to stderr, and to log_file when given.
    Calling it again replaces the previous handlers.
    """
    root = logging.getLogger("polyclip")
    root.setLevel(level)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    fmt = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    for h in handlers:
        h.setLevel(level)
        h.setFormatter(fmt)
        root.addHandler(h)
    return root
