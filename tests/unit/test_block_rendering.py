#!/usr/bin/env python3
"""
Test rendering of block nodes.
"""
from dataclasses import dataclass, replace

import pytest

from ansi_slides import models as m
from ansi_slides.blocks import (BlockRenderer, delimit_number, format_number,
                                is_tight_list, to_roman)
from ansi_slides.errors import UnsupportedNodeVariant
from ansi_slides.footnotes import FootnoteCollector
from ansi_slides.renderer import render_text


def plain(text):
    words = []
    for i, word in enumerate(text.split()):
        if i:
            words.append(m.Space())
        words.append(m.Text(word))
    return m.Plain(tuple(words))


def para(text):
    return m.Paragraph(plain(text).content)


def heading(level, text, **kwargs):
    return m.Heading(level, plain(text).content, **kwargs)


class TestLists:
    """Bullet, ordered and definition lists."""

    def test_tight_bullet_list(self, options):
        node = m.BulletList(((plain("one"),), (plain("two"),)))
        assert render_text([node], options) == "  - one\n  - two"

    def test_unicode_bullets(self, options):
        node = m.BulletList(((plain("one"),),))
        assert render_text([node], replace(options, unicode=True)) == "  • one"

    def test_loose_bullet_list(self, options):
        node = m.BulletList((
            (para("one"), para("extra paragraph")),
            (para("two"),),
        ))
        expected = "  - one\n\n    extra paragraph\n\n  - two"
        assert render_text([node], options) == expected

    def test_bullet_wraps_under_text(self, options):
        node = m.BulletList(((plain("aaaa bbbb cccc dddd eeee"),),))
        assert render_text([node], options) == "  - aaaa bbbb cccc\n    dddd eeee"

    def test_roman_numbers_are_padded(self, options):
        node = m.OrderedList(
            ((plain("one"),), (plain("two"),), (plain("three"),)),
            style=m.ListNumberStyle.UPPER_ROMAN,
        )
        assert render_text([node], options) == "  I.   one\n  II.  two\n  III. three"

    def test_wide_numbers_above_nine(self, options):
        node = m.OrderedList(((plain("a"),), (plain("b"),)), start=9)
        assert render_text([node], options) == "  9.  a\n  10. b"

    def test_delimiters(self, options):
        two = m.OrderedList(((plain("a"),),), delimiter=m.ListDelimiter.TWO_PARENS)
        one = m.OrderedList(((plain("a"),),), delimiter=m.ListDelimiter.ONE_PAREN)
        assert render_text([two], options) == "  (1) a"
        assert render_text([one], options) == "  1) a"

    def test_definition_list(self, options):
        node = m.DefinitionList((((m.Text("Term"),), ((plain("Def"),),)),))
        assert render_text([node], options) == "\x1b[01mTerm\x1b[22m\n\n  Def"

    def test_number_helpers(self):
        assert to_roman(1994) == "MCMXCIV"
        assert format_number(4, m.ListNumberStyle.LOWER_ROMAN) == "iv"
        assert format_number(2, m.ListNumberStyle.LOWER_ALPHA) == "b"
        assert format_number(3, m.ListNumberStyle.UPPER_ALPHA) == "C"
        assert format_number(7, m.ListNumberStyle.DEFAULT) == "7"
        assert delimit_number("3", m.ListDelimiter.DEFAULT) == "3."


class TestTightness:
    """Which lists are rendered without blank lines between items."""

    def test_plain_items_are_tight(self):
        assert is_tight_list(m.BulletList(((plain("a"),), (plain("b"),))))

    def test_plain_with_nested_list_is_tight(self):
        nested = m.BulletList(((plain("b"),),))
        assert is_tight_list(m.OrderedList(((plain("a"), nested),)))

    def test_paragraph_items_are_loose(self):
        assert not is_tight_list(m.BulletList(((para("a"),),)))

    def test_two_plains_are_loose(self):
        assert not is_tight_list(m.BulletList(((plain("a"), plain("b")),)))

    def test_definition_lists_and_other_blocks(self):
        assert not is_tight_list(m.DefinitionList(()))
        assert not is_tight_list(para("a"))


class TestHeadings:
    """Heading levels relative to the slide level."""

    def test_section_title_is_centered_both_ways(self, options):
        opts = replace(options, slide_level=2)
        expected = "\n\n       \x1b[01mIntro\x1b[22m"
        assert render_text([heading(1, "Intro")], opts) == expected

    def test_big_title_uses_banner(self, options, banner):
        opts = replace(options, slide_level=2, banner_font="small")
        node = heading(1, "Hi", classes=("big",))
        assert render_text([node], opts) == "\n\n       \x1b[01m<<Hi>>\x1b[22m"
        assert banner.calls == [("Hi", 20, "small")]

    def test_big_title_closes_bold_after_blank_banner_row(self, options):
        """A trailing row of spaces in the banner keeps the bold stop code."""
        opts = replace(options, slide_level=2,
                       banner=lambda text, width, font=None: "#  #\n####\n    ")
        node = heading(1, "Hi", classes=("big",))
        text = render_text([node, para("after")], opts)
        assert text == "\n        \x1b[01m#  #\n        ####\n\x1b[22m\n\nafter"
        assert text.count("\x1b[22m") == text.count("\x1b[01m") == 1

    def test_level_one(self, options):
        assert render_text([heading(1, "Title")], options) == "       \x1b[01;04mTitle\x1b[22;24m"

    def test_level_two(self, options):
        opts = replace(options, slide_level=2)
        assert render_text([heading(2, "Title")], opts) == "       \x1b[01mTitle\x1b[22m"

    @pytest.mark.parametrize("level, expected", [
        (3, "\x1b[01;04mT\x1b[22;24m"),
        (4, "\x1b[02mT\x1b[22m"),
        (5, "\x1b[01mT\x1b[22m"),
        (6, "\x1b[01mT\x1b[22m"),
    ])
    def test_lower_levels(self, options, level, expected):
        assert render_text([heading(level, "T")], options) == expected

    def test_level_must_be_positive(self):
        with pytest.raises(ValueError):
            m.Heading(0, ())


class TestContainers:
    """Notes, centered regions and slide sections."""

    def test_notes_are_hidden(self, options):
        note = m.Container((plain("secret"),), classes=("notes",))
        assert render_text([plain("a"), note], options) == "a"

    def test_centered(self, options):
        node = m.Container((plain("ab"),), classes=("center",))
        assert render_text([node], options) == "         ab"

    def test_centered_with_width(self, options):
        node = m.Container((plain("ab"),), classes=("centered",), attributes={"width": "10"})
        assert render_text([node], options) == "    ab"

    def test_section_header(self, options):
        opts = replace(options, slide_level=2)
        node = m.Container(
            (heading(2, "Details"), plain("x")),
            classes=("section",),
            attributes={"section-title": "Intro"},
        )
        expected = "\x1b[02mIntro\x1b[22m\n\n      \x1b[01mDetails\x1b[22m\n\nx"
        assert render_text([node], opts) == expected

    def test_section_header_is_colored(self, options):
        opts = replace(options, slide_level=2, color=True)
        node = m.Container(
            (heading(2, "D"),),
            classes=("section",),
            attributes={"section-title": "Intro"},
        )
        assert render_text([node], opts).startswith("\x1b[02;36mIntro\x1b[22;39m\n\n")

    def test_centered_style_opened_before_line_break(self, options):
        emph = m.Emph((m.LineBreak(), m.Text("x")))
        node = m.Container((m.Plain((emph,)),), classes=("center",))
        assert render_text([node], options) == "\x1b[04m\n         x\x1b[24m"

    def test_generic_container(self, options):
        node = m.Container((plain("a"),), classes=("aside",))
        assert render_text([node, plain("b")], options) == "a\n\nb"


class TestOtherBlocks:
    """Quotes, code, rules, raw and omitted content."""

    def test_block_quote(self, options):
        node = m.BlockQuote((para("a"), para("b")))
        assert render_text([node], options) == "> a\n>\n> b"

    def test_code_without_language_is_indented(self, options):
        node = m.CodeBlock("x = 1\n\ny = 2")
        assert render_text([node], options) == "    x = 1\n\n    y = 2"

    def test_code_with_language_is_highlighted(self, options):
        node = m.CodeBlock("print(1)", "python")
        assert render_text([node], options) == "<python>print(1)"

    def test_code_is_not_wrapped(self, options):
        node = m.CodeBlock("a b c d e f g h i j k l m n")
        assert render_text([node], options) == "    a b c d e f g h i j k l m n"

    def test_horizontal_rule(self, options):
        assert render_text([m.HorizontalRule()], options) == "     * * * * *"
        assert render_text([m.HorizontalRule()], replace(options, unicode=True)) == " " * 9 + "⁂"

    def test_table_is_omitted(self, options):
        node = m.Table((((m.Text("a"),),),))
        assert render_text([node], options) == "table omitted"

    def test_raw_blocks(self, options):
        nodes = [m.RawBlock("ansi", "\x1b[05mhi\x1b[25m"), m.RawBlock("html", "<hr>")]
        assert render_text(nodes, options) == "\x1b[05mhi\x1b[25m"

    def test_line_block(self, options):
        node = m.LineBlock(((m.Text("a"),), (m.Text("b"),)))
        assert render_text([node], options) == "a\nb"

    def test_paragraphs_are_separated(self, options):
        assert render_text([para("a"), para("b")], options) == "a\n\nb"


def test_unknown_block_raises(options):
    @dataclass(frozen=True)
    class Figure(m.Block):
        src: str

    with pytest.raises(UnsupportedNodeVariant):
        render_text([Figure("x.png")], options)


def test_every_block_variant_has_a_rule(options):
    renderer = BlockRenderer(options, FootnoteCollector())
    variants = [cls for cls in m.Block.__subclasses__() if cls.__module__ == m.__name__]
    missing = [cls.__name__ for cls in variants if cls not in renderer._block_rules]
    assert missing == []
