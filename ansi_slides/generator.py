#!/usr/bin/env python3
"""
Main slide generator module that ties together reader, chunker and writer.
"""

import logging
import os
import stat
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence

from .chunker import chunk
from .config import RenderOptions
from .errors import AnsiSlidesError, IOFailure
from .markdown_reader import MarkdownReader
from .models import SlideUnit

logger = logging.getLogger(__name__)

# Makes the slide print itself when executed by the slide stepper.
INTERPRETER_LINE = "#!/usr/bin/tail -n+2\n"
SLIDE_SUFFIX = ".sh"


def write_slides(units: Sequence[SlideUnit], directory) -> List[Path]:
    """Write each slide to ``<directory>/<name>.sh`` in order.

    The first failing write raises :class:`IOFailure`; files written before
    it stay on disk.
    """
    directory = Path(directory)
    paths = []
    for unit in units:
        path = directory / f"{unit.name}{SLIDE_SUFFIX}"
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                if unit.executable:
                    f.write(INTERPRETER_LINE)
                f.write(unit.text)
                f.write("\n")
            if unit.executable:
                mode = os.stat(path).st_mode
                os.chmod(path, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        except OSError as e:
            raise IOFailure(path, e) from e
        paths.append(path)
    return paths


class SlideGenerator:
    """
    Convert markdown into a directory of terminal slides.
    """

    def __init__(self, options: Optional[RenderOptions] = None, *, query_terminal: bool = True,
                 slide_level: Optional[int] = None, columns: Optional[int] = None,
                 rows: Optional[int] = None, debug: bool = False):
        """Create a new :class:`SlideGenerator`.

        Parameters
        ----------
        options
            Render options; defaults to :class:`RenderOptions` defaults.
        query_terminal
            Take rows and columns from the current terminal unless the
            document metadata sets them.
        slide_level
            Heading level at which slides are split. Inferred from the
            document when not given.
        columns, rows
            Explicit terminal size, replacing the queried one. Sizes set in
            the document front matter still take precedence.
        debug
            Log every generated slide.
        """
        self.options = options or RenderOptions()
        self.query_terminal = query_terminal
        self.slide_level = slide_level
        self.columns = columns
        self.rows = rows
        self.debug = debug
        self.reader = MarkdownReader()

    def build(self, markdown_text: str) -> List[SlideUnit]:
        """Render *markdown_text* into slide units without touching the disk."""
        document = self.reader.read(markdown_text)
        options = self.options
        if self.query_terminal:
            options = options.with_terminal(document.meta)
        if self.columns or self.rows:
            options = replace(options, columns=self.columns or options.columns, rows=self.rows or options.rows)
        return chunk(document, options, slide_level=self.slide_level)

    def generate(self, markdown_text: str, output_dir="_slides") -> List[Path]:
        """
        Generate slide files from markdown text.

        Args:
            markdown_text: The markdown content to convert
            output_dir: Directory receiving one file per slide

        Returns:
            list of written slide paths, title slide first
        """
        units = self.build(markdown_text)
        paths = write_slides(units, output_dir)

        if self.debug:
            for path in paths:
                logger.info(f"Wrote {path}")
        logger.info(f"Created {len(paths)} slides in {output_dir}")
        return paths


def _build_parser():
    import argparse

    p = argparse.ArgumentParser(prog="ansi-slides", description="Convert Markdown to terminal slides.")
    p.add_argument("markdown", type=Path, help="Markdown file to convert")
    p.add_argument("--output", "-o", type=Path, default=Path("_slides"), help="Directory for the slide files")
    p.add_argument("--slide-level", type=int, help="Heading level that starts a new slide (default: inferred)")
    p.add_argument("--columns", type=int, help="Terminal width (default: current terminal)")
    p.add_argument("--rows", type=int, help="Terminal height (default: current terminal)")
    p.add_argument("--unicode", action="store_true", help="Use Unicode bullets, dinkus and superscripts")
    p.add_argument("--italic", action="store_true", help="Render emphasis in italics instead of underlined")
    p.add_argument("--no-color", action="store_true", help="Disable color accents")
    p.add_argument("--preserve-breaks", action="store_true", help="Keep soft line breaks from the source")
    p.add_argument("--banner-font", help="figlet font for big titles")
    p.add_argument("--debug", action="store_true", help="Enable verbose logging")
    return p


def main(argv=None):
    """Command-line entry point for the slide generator."""
    import sys

    args = _build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                        format="%(levelname)s  %(message)s", force=True)

    md_path: Path = args.markdown
    if not md_path.exists():
        logger.error(f"Markdown file '{md_path}' not found")
        sys.exit(1)

    options = RenderOptions(
        unicode=args.unicode,
        italic=args.italic,
        color=not args.no_color,
        preserve_breaks=args.preserve_breaks,
        banner_font=args.banner_font,
    )
    generator = SlideGenerator(options, slide_level=args.slide_level, debug=args.debug,
                               columns=args.columns, rows=args.rows)
    markdown_text = md_path.read_text(encoding="utf-8")
    try:
        paths = generator.generate(markdown_text, args.output)
    except AnsiSlidesError as e:
        logger.error(str(e))
        sys.exit(1)

    print("The following slides were created:")
    for path in paths:
        print(path)


if __name__ == "__main__":
    main()
