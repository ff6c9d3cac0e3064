from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple
import logging

from clipping.pipeline import OperationResult
from shapes.geometry import Polygon, split_xy
from shapes.slot import Shape

from .renderer import PageLayout, SvgPage

logger = logging.getLogger("polyclip.plotting")


@dataclass(frozen=True)
class RenderRow:
    label: str
    offset_y: float
    polygon: Polygon


@dataclass(frozen=True)
class RenderJob:
    """
    Everything that ends up on the page: the input shapes with their fill
    colors, the title label, and one row per operation result.
    """
    title: str
    shapes: Tuple[Tuple[Shape, str], ...]
    rows: Tuple[RenderRow, ...]
    layout: PageLayout


def build_render_job(
    shapes: Sequence[Shape],
    results: Sequence[OperationResult],
    layout: Optional[PageLayout] = None,
    title: str = "Contours",
) -> RenderJob:
    layout = layout or PageLayout()
    if len(shapes) > len(layout.shape_colors):
        raise ValueError(f"layout has colors for {len(layout.shape_colors)} shapes, got {len(shapes)}")
    colored = tuple(zip(shapes, layout.shape_colors))
    rows = tuple(
        RenderRow(label=res.operation.label, offset_y=layout.row_offset(i), polygon=res.polygon)
        for i, res in enumerate(results)
    )
    return RenderJob(title=title, shapes=colored, rows=rows, layout=layout)


def _draw_row(page: SvgPage, row: RenderRow, layout: PageLayout) -> None:
    page.text(layout.text_x, layout.start_y + row.offset_y, row.label)
    if not row.polygon:
        return
    with page.row(row.offset_y, name=f"row-{row.label.lower()}"):
        for contour in row.polygon:
            xs, ys = split_xy(contour)
            page.polygon(xs, ys, fill=layout.result_color)


def render_job(job: RenderJob, page: SvgPage) -> int:
    """
    Draw the job onto an open page. Returns the number of rows that failed
    to draw; a failing row is logged and the remaining rows still drawn.
    """
    layout = job.layout
    page.text(layout.text_x, layout.start_y, job.title)
    for shape, color in job.shapes:
        xs, ys = split_xy(shape.contour)
        page.polygon(xs, ys, fill=color)

    failed = 0
    for row in job.rows:
        try:
            _draw_row(page, row, layout)
        except Exception:
            failed += 1
            logger.exception("Drawing the %s row failed", row.label)
    return failed


def save_job_as_svg(job: RenderJob, filename: str) -> int:
    """
    Render the job to an SVG file. Raises RenderError if the file cannot be
    created.
    """
    with SvgPage(filename, job.layout) as page:
        failed = render_job(job, page)
    return failed
