#!/usr/bin/env python3
"""
Split a document into slides.

A new slide starts at every heading whose level is at or above the slide
level. Content before the first such heading forms a slide of its own. Every
slide is rendered in a separate pass, so footnote numbers restart on each
slide. A title slide built from the document metadata always comes first.
"""
import logging
import re
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from .blocks import SECTION_CLASS, SECTION_TITLE_ATTR
from .config import RenderOptions
from .fonts import font
from .layout import Doc, blankline, concat, empty, hcenter, literal, render, vcenter
from .models import Block, Container, Document, Heading, HorizontalRule, Meta, SlideUnit, stringify
from .renderer import render_text

logger = logging.getLogger(__name__)

TITLE_SLUG = "title"
DEFAULT_SLUG = "slide"


def slugify(text: str) -> str:
    """Lower case, dash separated identifier for file names."""
    slug = re.sub(r"[^\w]+", "-", text.lower(), flags=re.UNICODE).strip("-_")
    return slug or DEFAULT_SLUG


def infer_slide_level(blocks: Sequence[Block]) -> int:
    """Lowest heading level directly followed by content rather than a heading."""
    levels = []
    for current, following in zip(blocks, blocks[1:]):
        if isinstance(current, Heading) and not isinstance(following, (Heading, HorizontalRule)):
            levels.append(current.level)
    return min(levels, default=1)


def split_blocks(blocks: Sequence[Block], slide_level: int) -> List[Tuple[Optional[str], List[Block]]]:
    """Group *blocks* into slides, returning ``(section_title, blocks)`` pairs.

    ``section_title`` is the text of the closest heading above the slide
    level, used as header row on slides that start at the slide level.
    """
    groups: List[Tuple[Optional[str], List[Block]]] = []
    section_title = None
    current: List[Block] = []
    current_title = None
    for block in blocks:
        if isinstance(block, Heading) and block.level <= slide_level:
            if current:
                groups.append((current_title, current))
            if block.level < slide_level:
                section_title = stringify(block.content)
            current = []
            current_title = section_title if block.level == slide_level else None
        current.append(block)
    if current:
        groups.append((current_title, current))
    return groups


def wrap_section(blocks: List[Block], section_title: Optional[str], slide_level: int) -> Tuple[Block, ...]:
    first = blocks[0]
    if not (isinstance(first, Heading) and first.level == slide_level):
        return tuple(blocks)
    attributes = {SECTION_TITLE_ATTR: section_title} if section_title else {}
    return (Container(children=tuple(blocks), classes=(SECTION_CLASS,), attributes=attributes),)


def slide_slug(blocks: Sequence[Block]) -> str:
    first = blocks[0] if blocks else None
    if isinstance(first, Heading):
        return slugify(first.identifier or stringify(first.content))
    return DEFAULT_SLUG


def title_doc(meta: Meta, options: RenderOptions) -> Doc:
    """Banner title, with the author in italics above it, centered vertically."""
    parts = []
    if meta.author:
        parts.append(hcenter(font("italic", meta.author), options.columns))
    if meta.title:
        big = options.banner(meta.title, options.columns, options.banner_font)
        parts.append(hcenter(literal(big), options.columns))
    if not parts:
        return empty
    return vcenter(concat(parts, blankline), options.rows, options.columns)


def resolve_options(document: Document, options: Optional[RenderOptions],
                    slide_level: Optional[int] = None) -> RenderOptions:
    """Apply the document's slide level and explicit terminal size to *options*."""
    options = options or RenderOptions()
    meta = document.meta
    level = slide_level or meta.slide_level or infer_slide_level(document.blocks)
    return replace(
        options,
        slide_level=level,
        rows=meta.rows or options.rows,
        columns=meta.cols or options.columns,
    )


def chunk(document: Document, options: Optional[RenderOptions] = None,
          slide_level: Optional[int] = None) -> List[SlideUnit]:
    """Render *document* into a title slide followed by one slide per chunk."""
    options = resolve_options(document, options, slide_level)
    logger.debug("Chunking at slide level %d", options.slide_level)

    units = [SlideUnit(
        number=0,
        name=f"{0:03d}-{TITLE_SLUG}",
        text=render(title_doc(document.meta, options), options.columns),
        executable=options.executable,
    )]
    groups = split_blocks(document.blocks, options.slide_level)
    for number, (section_title, blocks) in enumerate(groups, 1):
        name = f"{number:03d}-{slide_slug(blocks)}"
        text = render_text(wrap_section(blocks, section_title, options.slide_level), options)
        units.append(SlideUnit(number=number, name=name, text=text, executable=options.executable))
        logger.debug("Rendered slide %s", name)
    return units
