"""ANSI Slides – top-level package

Renders documents into text decorated with ANSI escape sequences and splits
the result into one file per slide. Exposes the public API
(`SlideGenerator`, `chunk`, `render_text`, etc.) **and** sets up a minimal
logging configuration so that every sub-module can call

```python
import logging
logger = logging.getLogger(__name__)
```

and honour a single environment variable `ANSI_SLIDES_LOG_LEVEL`.
"""

from __future__ import annotations

import logging
import os

# ------------------------------------------------------------------
# Default logging – honour env var, otherwise WARNING.
# ------------------------------------------------------------------
LOG_LEVEL = os.getenv("ANSI_SLIDES_LOG_LEVEL", "WARNING").upper()
logging.getLogger(__name__).setLevel(LOG_LEVEL)

# Public API re-exports ------------------------------------------------
from .chunker import chunk  # noqa: E402
from .config import RenderOptions  # noqa: E402
from .errors import (AnsiSlidesError, ExternalToolFailure, IOFailure,  # noqa: E402
                     UnknownStyle, UnsupportedNodeVariant)
from .generator import SlideGenerator, write_slides  # noqa: E402
from .markdown_reader import MarkdownReader  # noqa: E402
from .models import Document, Meta, SlideUnit  # noqa: E402
from .renderer import render_document, render_text  # noqa: E402

__all__ = [
    "AnsiSlidesError",
    "Document",
    "ExternalToolFailure",
    "IOFailure",
    "MarkdownReader",
    "Meta",
    "RenderOptions",
    "SlideGenerator",
    "SlideUnit",
    "UnknownStyle",
    "UnsupportedNodeVariant",
    "chunk",
    "render_document",
    "render_text",
    "write_slides",
]
