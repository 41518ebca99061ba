import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import ansi_slides` works
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from ansi_slides.config import RenderOptions  # noqa: E402


class FakeBanner:
    """Stand-in for figlet that records its calls."""

    def __init__(self):
        self.calls = []

    def __call__(self, text, width, font=None):
        self.calls.append((text, width, font))
        return f"<<{text}>>"


def fake_highlight(code, language):
    return f"<{language}>{code}"


@pytest.fixture
def banner():
    return FakeBanner()


@pytest.fixture
def options(banner):
    """Small, colorless terminal with fake external tools."""
    return RenderOptions(
        columns=20,
        rows=6,
        color=False,
        banner=banner,
        highlighter=fake_highlight,
    )
