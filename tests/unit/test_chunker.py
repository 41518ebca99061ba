#!/usr/bin/env python3
"""
Test splitting documents into slides.
"""
from dataclasses import replace

from ansi_slides import models as m
from ansi_slides.chunker import (chunk, infer_slide_level, resolve_options, slugify,
                                 split_blocks)


def text(value):
    words = []
    for i, word in enumerate(value.split()):
        if i:
            words.append(m.Space())
        words.append(m.Text(word))
    return tuple(words)


def heading(level, value, **kwargs):
    return m.Heading(level, text(value), **kwargs)


def bullets(*items):
    return m.BulletList(tuple((m.Plain(text(item)),) for item in items))


def para(*inlines):
    return m.Paragraph(tuple(inlines))


def test_two_level_deck(options):
    """Sections above the slide level label the slides below them."""
    document = m.Document(blocks=(
        heading(1, "Intro"), bullets("a"),
        heading(2, "Details"), bullets("b"),
    ))
    units = chunk(document, options, slide_level=2)

    assert [u.name for u in units] == ["000-title", "001-intro", "002-details"]
    assert [u.number for u in units] == [0, 1, 2]
    assert units[1].text == "\n\n       \x1b[01mIntro\x1b[22m\n\n  - a"
    assert units[2].text == "\x1b[02mIntro\x1b[22m\n\n      \x1b[01mDetails\x1b[22m\n\n  - b"


def test_title_slide(options, banner):
    document = m.Document(meta=m.Meta(title="Deck", author="Ann"))
    units = chunk(document, options)
    assert len(units) == 1
    assert units[0].text == "\n        \x1b[03mAnn\x1b[23m\n\n      <<Deck>>"
    assert banner.calls == [("Deck", 20, None)]


def test_title_slide_without_metadata(options, banner):
    units = chunk(m.Document(blocks=(para(m.Text("x")),)), options)
    assert units[0].name == "000-title"
    assert units[0].text == ""
    assert banner.calls == []


def test_footnotes_restart_on_every_slide(options):
    document = m.Document(blocks=(
        heading(1, "A"), para(m.Text("x"), m.Note((m.Plain(text("one")),))),
        heading(1, "B"), para(m.Text("y"), m.Note((m.Plain(text("two")),))),
    ))
    first, second = chunk(document, options)[1:]
    assert first.text.endswith("x[^1]\n\n[^1]: one")
    assert second.text.endswith("y[^1]\n\n[^1]: two")


def test_content_before_first_heading(options):
    document = m.Document(blocks=(para(m.Text("intro")), heading(1, "A"), para(m.Text("x"))))
    units = chunk(document, options)
    assert [u.name for u in units] == ["000-title", "001-slide", "002-a"]
    assert units[1].text == "intro"


def test_heading_identifier_names_the_slide(options):
    document = m.Document(blocks=(heading(1, "Some Title", identifier="custom-id"),))
    assert chunk(document, options)[1].name == "001-custom-id"


def test_executable_flag_is_carried(options):
    document = m.Document(blocks=(para(m.Text("x")),))
    units = chunk(document, replace(options, executable=False))
    assert not any(u.executable for u in units)


def test_resolve_options_from_metadata(options):
    document = m.Document(meta=m.Meta(rows=10, cols=40, slide_level=3))
    resolved = resolve_options(document, options)
    assert (resolved.rows, resolved.columns, resolved.slide_level) == (10, 40, 3)
    assert resolve_options(document, options, slide_level=1).slide_level == 1


def test_resolve_options_keeps_terminal_size(options):
    resolved = resolve_options(m.Document(), options)
    assert (resolved.rows, resolved.columns) == (6, 20)


def test_infer_slide_level():
    assert infer_slide_level([heading(1, "a"), heading(2, "b"), para(m.Text("x"))]) == 2
    assert infer_slide_level([heading(2, "a"), para(m.Text("x")), heading(1, "b"), para(m.Text("y"))]) == 1
    assert infer_slide_level([para(m.Text("x"))]) == 1
    assert infer_slide_level([]) == 1


def test_split_blocks_tracks_section_titles():
    blocks = [
        heading(1, "Part"), heading(2, "One"), para(m.Text("x")),
        heading(2, "Two"), para(m.Text("y")), heading(3, "Sub"),
    ]
    groups = split_blocks(blocks, 2)
    assert [title for title, _ in groups] == [None, "Part", "Part"]
    assert [len(group) for _, group in groups] == [1, 2, 3]


def test_slugify():
    assert slugify("Hello, World!") == "hello-world"
    assert slugify("  Ünïcode  words ") == "ünïcode-words"
    assert slugify("!!!") == "slide"
