"""
Wrappers around the external formatters used for special effects.

* ``banner``        – big letter titles, produced by the ``figlet`` program
* ``highlight``     – syntax highlighting for code blocks, via Pygments
* ``terminal_size`` – rows and columns of the controlling terminal

Failures are raised as :class:`ExternalToolFailure`; nothing is retried.
"""
import logging
import os
import shutil
import subprocess
import sys
from typing import Optional, Tuple

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .errors import ExternalToolFailure

logger = logging.getLogger(__name__)

FALLBACK_SIZE = (24, 80)


def banner(text: str, width: int, font: Optional[str] = None) -> str:
    """Render *text* in big letters no wider than ``width`` columns."""
    figlet = shutil.which("figlet")
    if figlet is None:
        raise ExternalToolFailure("figlet", "program not found on PATH")
    cmd = [figlet, "-w", str(width)]
    if font:
        cmd += ["-f", font]
    cmd.append(text)
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=30)
    except (OSError, subprocess.SubprocessError) as e:
        raise ExternalToolFailure("figlet", str(e)) from e
    if result.returncode != 0:
        raise ExternalToolFailure("figlet", result.stderr.strip() or f"exit status {result.returncode}")
    lines = result.stdout.split("\n")
    # figlet pads its output with rows of spaces
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


def highlight(code: str, language: str) -> str:
    """Return *code* colored with ANSI escapes for the given *language*."""
    try:
        lexer = get_lexer_by_name(language)
    except ClassNotFound as e:
        raise ExternalToolFailure("pygments", f"no lexer for language {language!r}") from e
    return pygments_highlight(code, lexer, TerminalFormatter()).rstrip("\n")


def terminal_size() -> Tuple[int, int]:
    """Return ``(rows, cols)`` of the terminal attached to stdout."""
    try:
        size = os.get_terminal_size(sys.__stdout__.fileno())
    except (OSError, ValueError, AttributeError):
        logger.debug("No terminal attached, using %sx%s", *FALLBACK_SIZE)
        return FALLBACK_SIZE
    rows = size.lines or FALLBACK_SIZE[0]
    cols = size.columns or FALLBACK_SIZE[1]
    return rows, cols
