import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path so the flat packages import without install
ROOT = Path(__file__).resolve().parent.parent
if ROOT.as_posix() not in sys.path:
    sys.path.insert(0, ROOT.as_posix())

from shapes import SlotConfig, build_slot  # noqa: E402


@pytest.fixture
def default_slot():
    """segments=1, radius=8, no right circle."""
    return build_slot(SlotConfig())


@pytest.fixture
def two_circle_slot():
    return build_slot(SlotConfig(segments=4, radius=5.0, add_right_circle=True))


@pytest.fixture
def svg_path(tmp_path: Path) -> Path:
    return tmp_path / "polycliptest.svg"
