from .renderer import (
    PageLayout,
    RenderError,
    SvgPage,
)
from .vectorizer import (
    RenderJob,
    RenderRow,
    build_render_job,
    render_job,
    save_job_as_svg,
)
