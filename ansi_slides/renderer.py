#!/usr/bin/env python3
"""
Top-level rendering of a block sequence into terminal text.

Each call owns a fresh :class:`FootnoteCollector`: footnote numbers start at
one for every call and the collected notes are printed after the content.
"""
import logging
from typing import Sequence

from .blocks import BlockRenderer
from .config import RenderOptions
from .footnotes import FootnoteCollector
from .inlines import footnote_marker
from .layout import Doc, blankline, concat, hang, render
from .models import Block

logger = logging.getLogger(__name__)


class DocumentRenderer(BlockRenderer):
    """Renderer for one top-level pass over a block sequence."""

    def __init__(self, options: RenderOptions):
        super().__init__(options, FootnoteCollector())

    def render_document(self, blocks: Sequence[Block]) -> Doc:
        self.footnotes.reset()
        body = self.render_blocks(blocks, blankline)
        return concat([body, blankline, self.render_footnotes()])

    def render_footnotes(self) -> Doc:
        notes = []
        index = 0
        # rendering a note may register further notes (links inside notes)
        while index < len(self.footnotes):
            blocks = self.footnotes[index]
            index += 1
            if self.options.unicode:
                prefix = footnote_marker(index, self.options) + " "
            else:
                prefix = f"[^{index}]: "
            notes.append(hang(self.render_blocks(blocks, blankline), 4, prefix))
        if notes:
            logger.debug("Rendered %d footnotes", len(notes))
        return concat(notes, blankline)


def render_document(blocks: Sequence[Block], options: RenderOptions) -> Doc:
    """Render *blocks* followed by their footnotes."""
    return DocumentRenderer(options).render_document(blocks)


def render_text(blocks: Sequence[Block], options: RenderOptions) -> str:
    """Render *blocks* to a string laid out for ``options.columns``."""
    return render(render_document(blocks, options), options.columns)
