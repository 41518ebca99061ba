"""
Rendering of inline nodes.

Every inline variant maps to one ``_render_*`` method. Emphasis, links and
footnote markers follow the render options; footnote bodies are handed to
the :class:`FootnoteCollector` of the current render pass.
"""
from typing import Sequence

from .config import ENGINE_FORMAT, RenderOptions
from .errors import UnsupportedNodeVariant
from .fonts import font
from .footnotes import FootnoteCollector
from .layout import Doc, concat, cr, empty, literal, space
from . import models as m

UNICODE_SUPERSCRIPT = {
    "0": "⁰", "1": "¹", "2": "²", "3": "³", "4": "⁴",
    "5": "⁵", "6": "⁶", "7": "⁷", "8": "⁸", "9": "⁹",
    "+": "⁺", "-": "⁻", "=": "⁼", "(": "⁽", ")": "⁾",
}


def to_superscript(text: str):
    """Return *text* in Unicode superscript glyphs, or ``None`` if impossible."""
    chars = [UNICODE_SUPERSCRIPT.get(c) for c in text]
    if None in chars:
        return None
    return "".join(chars)


def footnote_marker(number: int, options: RenderOptions) -> str:
    if options.unicode:
        superscript = to_superscript(str(number))
        if superscript is not None:
            return superscript
    return f"[^{number}]"


class InlineRenderer:
    """Render inline nodes to layout docs."""

    def __init__(self, options: RenderOptions, footnotes: FootnoteCollector):
        self.options = options
        self.footnotes = footnotes
        self._inline_rules = {
            m.Text: self._render_text,
            m.Space: self._render_space,
            m.SoftBreak: self._render_soft_break,
            m.LineBreak: self._render_line_break,
            m.RawInline: self._render_raw_inline,
            m.Code: self._render_code,
            m.Emph: self._render_emph,
            m.Strong: self._render_strong,
            m.Strikeout: self._render_strikeout,
            m.Subscript: self._render_subscript,
            m.Superscript: self._render_superscript,
            m.SmallCaps: self._render_small_caps,
            m.Underline: self._render_underline,
            m.Cite: self._render_cite,
            m.Math: self._render_math,
            m.Span: self._render_span,
            m.Link: self._render_link,
            m.Image: self._render_image,
            m.Quoted: self._render_quoted,
            m.Note: self._render_note,
        }

    def render_inlines(self, nodes: Sequence[m.Inline]) -> Doc:
        return concat([self.render_inline(node) for node in nodes])

    def render_inline(self, node: m.Inline) -> Doc:
        rule = self._inline_rules.get(type(node))
        if rule is None:
            raise UnsupportedNodeVariant(node)
        return rule(node)

    def _render_text(self, el: m.Text) -> Doc:
        return literal(el.text)

    def _render_space(self, el: m.Space) -> Doc:
        return space

    def _render_soft_break(self, el: m.SoftBreak) -> Doc:
        return cr if self.options.preserve_breaks else space

    def _render_line_break(self, el: m.LineBreak) -> Doc:
        return cr

    def _render_raw_inline(self, el: m.RawInline) -> Doc:
        if el.format == ENGINE_FORMAT:
            return literal(el.text)
        return empty

    def _render_code(self, el) -> Doc:
        return font("bold", el.text)

    def _render_emph(self, el: m.Emph) -> Doc:
        effect = "italic" if self.options.italic else "underline"
        return font([effect, self.options.accent("green")], self.render_inlines(el.content))

    def _render_strong(self, el: m.Strong) -> Doc:
        return font(["bold", self.options.accent("red")], self.render_inlines(el.content))

    def _render_strikeout(self, el: m.Strikeout) -> Doc:
        return font("strikeout", self.render_inlines(el.content))

    def _render_subscript(self, el: m.Subscript) -> Doc:
        # No Unicode table for subscripts; letters mostly lack glyphs.
        return concat(["~", self.render_inlines(el.content), "~"])

    def _render_superscript(self, el: m.Superscript) -> Doc:
        if self.options.unicode:
            all_unicode = True

            def convert(text):
                nonlocal all_unicode
                superscript = to_superscript(text)
                if superscript is None:
                    all_unicode = False
                    return text
                return superscript

            converted = m.map_text(el.content, convert)
            if all_unicode:
                return self.render_inlines(converted)
        return concat(["^", self.render_inlines(el.content), "^"])

    def _render_small_caps(self, el: m.SmallCaps) -> Doc:
        return self.render_inlines(m.map_text(el.content, str.upper))

    def _render_underline(self, el: m.Underline) -> Doc:
        return font("underline", self.render_inlines(el.content))

    def _render_cite(self, el: m.Cite) -> Doc:
        return self.render_inlines(el.content)

    def _render_math(self, el: m.Math) -> Doc:
        marker = "$$" if el.display else "$"
        return concat([marker, self._render_code(el), marker])

    def _render_span(self, el: m.Span) -> Doc:
        return self.render_inlines(el.content)

    def _render_link(self, el: m.Link) -> Doc:
        if el.target.startswith("#"):
            # same-document anchor
            return self.render_inlines(el.content)
        if el.target == m.stringify(el.content):
            # autolink
            return self.render_inlines(el.content)
        note = m.Note((m.Plain((m.Text(el.target),)),))
        return self.render_inlines(el.content + (note,))

    def _render_image(self, el: m.Image) -> Doc:
        return self.render_inlines(el.caption)

    def _render_quoted(self, el: m.Quoted) -> Doc:
        if el.double:
            open_, close = ("“", "”") if self.options.unicode else ('"', '"')
        else:
            open_, close = ("‘", "’") if self.options.unicode else ("'", "'")
        return concat([open_, self.render_inlines(el.content), close])

    def _render_note(self, el: m.Note) -> Doc:
        number = self.footnotes.add(el.blocks)
        return literal(footnote_marker(number, self.options))
