"""
Render options for terminal slides.

Options are passed explicitly to every renderer; there is no ambient
"current options" state.
"""
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional

from . import external
from .models import Meta

logger = logging.getLogger(__name__)

# Identifier matched against the format tag of raw blocks and inlines.
ENGINE_FORMAT = "ansi"

DEFAULT_COLUMNS = 80
DEFAULT_ROWS = 24


@dataclass(frozen=True)
class RenderOptions:
    """Settings consumed by the inline and block renderers."""
    unicode: bool = False          # bullets, dinkus, superscripts, note markers
    italic: bool = False           # emphasis as italic instead of underline
    color: bool = True             # color accents on emphasis, bullets, numbers
    columns: int = DEFAULT_COLUMNS
    rows: int = DEFAULT_ROWS
    slide_level: int = 1
    preserve_breaks: bool = False  # soft breaks become line breaks
    executable: bool = True        # slide files carry an interpreter line
    banner_font: Optional[str] = None

    # External formatters, replaceable for tests and embedders.
    banner: Callable[..., str] = field(default=external.banner, compare=False, repr=False)
    highlighter: Callable[[str, str], str] = field(default=external.highlight, compare=False, repr=False)

    def __post_init__(self):
        if self.columns < 1 or self.rows < 1:
            raise ValueError(f"Terminal size must be positive, got {self.rows}x{self.columns}")
        if self.slide_level < 1:
            raise ValueError(f"Slide level must be positive, got {self.slide_level}")

    def accent(self, color: str) -> Optional[str]:
        """Return *color* when colors are enabled, else ``None``."""
        return color if self.color else None

    def with_terminal(self, meta: Optional[Meta] = None, query: Callable = None) -> "RenderOptions":
        """Fill rows and columns from the terminal, letting *meta* override them."""
        rows, cols = (query or external.terminal_size)()
        if meta is not None:
            rows = meta.rows or rows
            cols = meta.cols or cols
        logger.debug("Using terminal size %sx%s", rows, cols)
        return replace(self, rows=rows, columns=cols)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unicode": self.unicode,
            "italic": self.italic,
            "color": self.color,
            "columns": self.columns,
            "rows": self.rows,
            "slide_level": self.slide_level,
            "preserve_breaks": self.preserve_breaks,
            "executable": self.executable,
            "banner_font": self.banner_font,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RenderOptions":
        """Build options from a mapping, accepting dashed keys as in YAML."""
        known = set(cls().to_dict())
        values = {}
        for key, value in data.items():
            name = key.replace("-", "_")
            if name not in known:
                logger.warning("Ignoring unknown option %r", key)
                continue
            values[name] = value
        return cls(**values)
