"""
Rendering of block nodes.

Headings above the slide level become title screens, centered both ways.
Lists are "tight" (no blank lines between items) when every item is a single
plain block, optionally followed by one nested list.
"""
from typing import Sequence

from .config import ENGINE_FORMAT
from .errors import UnsupportedNodeVariant
from .fonts import font
from .inlines import InlineRenderer
from .layout import (Doc, blankline, concat, cr, empty, hang, hcenter, literal,
                     nest, prefixed, vcenter)
from . import models as m

TABLE_PLACEHOLDER = "table omitted"

NOTE_CLASSES = ("note", "notes")
CENTER_CLASSES = ("center", "centered")
SECTION_CLASS = "section"
SECTION_TITLE_ATTR = "section-title"

LIST_TYPES = (m.BulletList, m.OrderedList, m.DefinitionList)

ROMAN_NUMERALS = (
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
    (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
)


def to_roman(n: int) -> str:
    """Upper case roman numeral for a positive integer."""
    if n < 1:
        return str(n)
    digits = []
    for value, numeral in ROMAN_NUMERALS:
        count, n = divmod(n, value)
        digits.append(numeral * count)
    return "".join(digits)


def format_number(n: int, style: m.ListNumberStyle) -> str:
    if style == m.ListNumberStyle.LOWER_ALPHA:
        return chr(96 + n % 26)
    if style == m.ListNumberStyle.UPPER_ALPHA:
        return chr(64 + n % 26)
    if style == m.ListNumberStyle.UPPER_ROMAN:
        return to_roman(n)
    if style == m.ListNumberStyle.LOWER_ROMAN:
        return to_roman(n).lower()
    return str(n)


def delimit_number(number: str, delimiter: m.ListDelimiter) -> str:
    if delimiter == m.ListDelimiter.ONE_PAREN:
        return f"{number})"
    if delimiter == m.ListDelimiter.TWO_PARENS:
        return f"({number})"
    return f"{number}."


def is_tight_list(node) -> bool:
    if not isinstance(node, LIST_TYPES):
        return False
    if isinstance(node, m.DefinitionList):
        return False
    for item in node.items:
        if len(item) == 1 and isinstance(item[0], m.Plain):
            continue
        if len(item) == 2 and isinstance(item[0], m.Plain) and isinstance(item[1], LIST_TYPES):
            continue
        return False
    return True


class BlockRenderer(InlineRenderer):
    """Render block nodes to layout docs."""

    def __init__(self, options, footnotes):
        super().__init__(options, footnotes)
        self._block_rules = {
            m.Paragraph: self._render_para,
            m.Plain: self._render_para,
            m.BlockQuote: self._render_block_quote,
            m.Heading: self._render_heading,
            m.Container: self._render_container,
            m.RawBlock: self._render_raw_block,
            m.LineBlock: self._render_line_block,
            m.Table: self._render_table,
            m.DefinitionList: self._render_definition_list,
            m.BulletList: self._render_bullet_list,
            m.OrderedList: self._render_ordered_list,
            m.CodeBlock: self._render_code_block,
            m.HorizontalRule: self._render_horizontal_rule,
        }

    def render_blocks(self, nodes: Sequence[m.Block], sep=blankline) -> Doc:
        return concat([self.render_block(node) for node in nodes], sep)

    def render_block(self, node: m.Block) -> Doc:
        rule = self._block_rules.get(type(node))
        if rule is None:
            raise UnsupportedNodeVariant(node)
        return rule(node)

    def _render_para(self, el) -> Doc:
        return self.render_inlines(el.content)

    def _render_block_quote(self, el: m.BlockQuote) -> Doc:
        return prefixed(nest(self.render_blocks(el.content), 1), ">")

    def _render_heading(self, h: m.Heading) -> Doc:
        opts = self.options
        if h.level < opts.slide_level:
            if "big" in h.classes:
                body = literal(opts.banner(m.stringify(h.content), opts.columns, opts.banner_font))
            else:
                body = self.render_inlines(h.content)
            title = hcenter(font("bold", body), opts.columns)
            return vcenter(title, opts.rows, opts.columns)
        content = self.render_inlines(h.content)
        if h.level == 1:
            return hcenter(font(["bold", "underline"], content), opts.columns)
        if h.level == 2:
            return hcenter(font("bold", content), opts.columns)
        if h.level == 3:
            return font(["bold", "underline"], content)
        if h.level == 4:
            return font("faint", content)
        return font("bold", content)

    def _render_container(self, el: m.Container) -> Doc:
        if any(c in NOTE_CLASSES for c in el.classes):
            # speaker notes stay off screen
            return empty
        if any(c in CENTER_CLASSES for c in el.classes):
            width = int(el.attributes.get("width", self.options.columns))
            return hcenter(self.render_blocks(el.children), width)
        if SECTION_CLASS in el.classes and self._starts_slide(el):
            body = self.render_blocks(el.children)
            title = el.attributes.get(SECTION_TITLE_ATTR)
            if not title:
                return body
            header = font(["faint", self.options.accent("cyan")], title)
            return concat([header, body], blankline)
        return concat([cr, self.render_blocks(el.children), blankline])

    def _starts_slide(self, el: m.Container) -> bool:
        first = el.children[0] if el.children else None
        return isinstance(first, m.Heading) and first.level == self.options.slide_level

    def _render_raw_block(self, el: m.RawBlock) -> Doc:
        if el.format == ENGINE_FORMAT:
            return literal(el.text)
        return empty

    def _render_line_block(self, el: m.LineBlock) -> Doc:
        return concat([self.render_inlines(line) for line in el.lines], cr)

    def _render_table(self, el: m.Table) -> Doc:
        return literal(TABLE_PLACEHOLDER)

    def _render_definition_list(self, el: m.DefinitionList) -> Doc:
        def render_definition(blocks):
            return concat([blankline, self.render_blocks(blocks), blankline])

        def render_item(term, definitions):
            inner = concat([render_definition(d) for d in definitions])
            return hang(inner, 2, concat([self.render_inlines((m.Strong(term),)), cr]))

        return concat([render_item(term, defs) for term, defs in el.items], blankline)

    def _render_bullet_list(self, el: m.BulletList) -> Doc:
        marker = "• " if self.options.unicode else "- "
        bullet = font([self.options.accent("red")], marker)
        items = [nest(hang(self.render_blocks(item), 2, bullet), 2) for item in el.items]
        sep = cr if is_tight_list(el) else blankline
        return cr + concat(items, sep)

    def _render_ordered_list(self, el: m.OrderedList) -> Doc:
        highest = el.start + len(el.items) - 1
        if el.style in (m.ListNumberStyle.UPPER_ROMAN, m.ListNumberStyle.LOWER_ROMAN):
            width = 5
        elif highest > 9:
            width = 4
        else:
            width = 3
        items = []
        for number, item in enumerate(el.items, el.start):
            label = delimit_number(format_number(number, el.style), el.delimiter)
            padding = width - len(label)
            label += " " * padding if padding >= 1 else " "
            marker = font([self.options.accent("red")], label)
            items.append(nest(hang(self.render_blocks(item), width, marker), 2))
        sep = cr if is_tight_list(el) else blankline
        return cr + concat(items, sep)

    def _render_code_block(self, el: m.CodeBlock) -> Doc:
        if el.language:
            highlighted = self.options.highlighter(el.text, el.language)
            return concat([cr, literal(highlighted), cr])
        return nest(concat([cr, literal(el.text), cr]), 4)

    def _render_horizontal_rule(self, el: m.HorizontalRule) -> Doc:
        dinkus = "⁂" if self.options.unicode else "* * * * *"
        return hcenter(dinkus, self.options.columns)
