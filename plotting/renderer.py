from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple
import logging
import os

import matplotlib.pyplot as plt
from matplotlib import transforms
from matplotlib.colors import to_rgba

logger = logging.getLogger("polyclip.plotting")

MM_PER_INCH = 25.4
POINTS_PER_MM = 72.0 / MM_PER_INCH


class RenderError(OSError):
    """The output image could not be created or written."""


@dataclass(frozen=True)
class PageLayout:
    """
    Page geometry and drawing styles. All lengths are millimetres on a
    y-down page, like SVG user units.
    """
    width: float = 100.0
    height: float = 150.0
    precision: int = 3
    poly_x: float = 30.0
    text_x: float = 60.0
    start_y: float = 15.0
    step_y: float = 25.0
    stroke_color: str = "black"
    stroke_width: float = 0.2
    font_size: float = 1.3
    fill_opacity: float = 0.5
    shape_colors: Tuple[str, ...] = ("red", "blue", "green")
    result_color: str = "grey"

    def row_offset(self, index: int) -> float:
        return (index + 1) * self.step_y


class SvgPage:
    """
    A single SVG page backed by a matplotlib figure.

    The output file is acquired by open() and released by close() (or when
    leaving the with-block). If the block raises, nothing is written and the
    partial file is removed.
    """

    def __init__(self, path: str, layout: Optional[PageLayout] = None):
        self.path = path
        self.layout = layout or PageLayout()
        self._fh = None
        self._fig = None
        self._ax = None
        self._offset: Optional[transforms.Affine2D] = None
        self._group: Optional[str] = None
        self._count = 0

    # ---- Lifecycle ----
    def open(self) -> "SvgPage":
        try:
            self._fh = open(self.path, "wb")
        except OSError as e:
            raise RenderError(f"Unable to create the '{self.path}' file: {e.strerror}") from e
        lay = self.layout
        self._fig = plt.figure(figsize=(lay.width / MM_PER_INCH, lay.height / MM_PER_INCH))
        ax = self._fig.add_axes((0.0, 0.0, 1.0, 1.0))
        ax.set_xlim(0.0, lay.width)
        ax.set_ylim(lay.height, 0.0)
        ax.set_aspect("equal")
        ax.axis("off")
        self._ax = ax
        logger.debug("Opened %s (%gx%g mm)", self.path, lay.width, lay.height)
        return self

    def close(self) -> None:
        if self._fh is None:
            return
        try:
            with plt.rc_context({"svg.fonttype": "none", "svg.hashsalt": "polyclip"}):
                self._fig.savefig(self._fh, format="svg", metadata={"Date": None})
        except OSError as e:
            self._release()
            self._remove_partial()
            raise RenderError(f"Unable to write the '{self.path}' file: {e}") from e
        except Exception:
            self._release()
            self._remove_partial()
            raise
        self._release()
        logger.info("Wrote %s", self.path)

    def discard(self) -> None:
        if self._fh is None:
            return
        self._release()
        self._remove_partial()

    def _release(self) -> None:
        fh, self._fh = self._fh, None
        fh.close()
        if self._fig is not None:
            plt.close(self._fig)
        self._fig = None
        self._ax = None

    def _remove_partial(self) -> None:
        try:
            os.remove(self.path)
        except OSError:
            logger.warning("Could not remove partial output %s", self.path)

    def __enter__(self) -> "SvgPage":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            self.discard()

    # ---- Primitives ----
    def _round(self, v: float) -> float:
        return round(float(v), self.layout.precision)

    def _next_gid(self, kind: str) -> str:
        self._count += 1
        prefix = f"{self._group}-" if self._group else ""
        return f"{prefix}{kind}{self._count}"

    def text(self, x: float, y: float, label: str) -> None:
        if self._ax is None:
            raise RenderError("page is not open")
        lay = self.layout
        self._ax.text(
            self._round(x), self._round(y), label,
            fontsize=lay.font_size * POINTS_PER_MM,
            color="black",
            ha="left",
            va="baseline",
            gid=self._next_gid("text"),
        )

    def polygon(self, xs: Sequence[float], ys: Sequence[float], fill: str) -> None:
        if self._ax is None:
            raise RenderError("page is not open")
        if len(xs) != len(ys):
            raise ValueError("x and y coordinate arrays differ in length")
        if len(xs) < 3:
            raise ValueError(f"a filled polygon needs at least 3 points, got {len(xs)}")
        lay = self.layout
        transform = self._ax.transData
        if self._offset is not None:
            transform = self._offset + self._ax.transData
        # only the fill is translucent, the outline stays opaque
        self._ax.fill(
            [self._round(x) for x in xs],
            [self._round(y) for y in ys],
            fc=to_rgba(fill, lay.fill_opacity),
            ec=lay.stroke_color,
            linewidth=lay.stroke_width * POINTS_PER_MM,
            transform=transform,
            gid=self._next_gid("path"),
        )

    @contextmanager
    def row(self, offset_y: float, name: str) -> Iterator["SvgPage"]:
        """Translate everything drawn inside the block down by offset_y."""
        self._offset = transforms.Affine2D().translate(0.0, self._round(offset_y))
        self._group = name
        try:
            yield self
        finally:
            self._offset = None
            self._group = None
