"""
Markdown front end producing the document tree consumed by the renderer.
"""
import logging
import re
from typing import Dict, List, Optional, Tuple

import yaml
from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.attrs import attrs_block_plugin, attrs_plugin
from mdit_py_plugins.attrs.parse import ParseError, parse as parse_attrs
from mdit_py_plugins.container import container_plugin
from mdit_py_plugins.deflist import deflist_plugin
from mdit_py_plugins.dollarmath import dollarmath_plugin
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.front_matter import front_matter_plugin
from mdit_py_plugins.subscript import sub_plugin
from mdit_py_plugins.superscript import superscript_plugin

from .markdown_plugins.heading_attrs import heading_attrs_plugin
from .markdown_plugins.speaker_notes import speaker_notes_plugin
from . import models as m

logger = logging.getLogger(__name__)

CONTAINER_NAMES = ("note", "notes", "center", "centered")
RAW_FENCE_RE = re.compile(r"^\{?=(\w+)\}?$")
WHITESPACE_RE = re.compile(r"[ \t]+")

SPAN_CLASS_NODES = {
    "smallcaps": m.SmallCaps,
    "underline": m.Underline,
    "ul": m.Underline,
}


def split_words(text: str) -> List[m.Inline]:
    """Turn a text run into words separated by breakable spaces."""
    result: List[m.Inline] = []
    for i, word in enumerate(WHITESPACE_RE.split(text)):
        if i:
            result.append(m.Space())
        if word:
            result.append(m.Text(word))
    return result


def _classes(node: SyntaxTreeNode) -> Tuple[str, ...]:
    value = node.attrs.get("class", "")
    return tuple(str(value).split())


class MarkdownReader:
    """
    Parse markdown into a :class:`~ansi_slides.models.Document`.

    Besides CommonMark the reader understands YAML front matter, footnotes,
    definition lists, ``$`` math, ``{.class}`` attributes on spans, blocks and
    heading ends, ``:::note`` / ``:::center`` containers, ``???`` speaker notes and
    pandoc style sub/superscripts.
    """

    def __init__(self):
        md = MarkdownIt("commonmark", {"html": True})
        md.enable(["table", "strikethrough"])
        md = (
            md.use(front_matter_plugin)
              .use(footnote_plugin)
              .use(deflist_plugin)
              .use(dollarmath_plugin, allow_space=False, allow_digits=False, double_inline=True)
              .use(attrs_plugin, spans=True)
              .use(attrs_block_plugin)
              .use(speaker_notes_plugin)
              .use(heading_attrs_plugin)
              .use(sub_plugin)
              .use(superscript_plugin)
        )
        for name in CONTAINER_NAMES:
            md = md.use(container_plugin, name)
        self.markdown_processor = md
        self._footnotes: Dict[int, SyntaxTreeNode] = {}

    def read(self, markdown_text: str) -> m.Document:
        tokens = self.markdown_processor.parse(markdown_text)
        root = SyntaxTreeNode(tokens)

        meta = m.Meta()
        self._footnotes = {}
        for node in root.children:
            if node.type == "front_matter":
                meta = self.parse_front_matter(node.content)
            elif node.type == "footnote_block":
                for footnote in node.children:
                    self._footnotes[footnote.meta["id"]] = footnote

        blocks = self.convert_blocks(root.children)
        logger.debug("Read %d top-level blocks", len(blocks))
        return m.Document(blocks=blocks, meta=meta)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    @staticmethod
    def parse_front_matter(text: str) -> m.Meta:
        data = yaml.safe_load(text) or {}
        if not isinstance(data, dict):
            raise ValueError("Front matter must be a mapping")
        author = data.get("author")
        if isinstance(author, (list, tuple)):
            author = ", ".join(str(a) for a in author)

        def _int(key: str) -> Optional[int]:
            value = data.get(key)
            return int(value) if value is not None else None

        return m.Meta(
            title=str(data.get("title", "") or ""),
            author=str(author) if author else None,
            rows=_int("rows"),
            cols=_int("cols") or _int("columns"),
            slide_level=_int("slide-level") or _int("slide_level"),
        )

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def convert_blocks(self, nodes) -> Tuple[m.Block, ...]:
        blocks = []
        for node in nodes:
            block = self.convert_block(node)
            if block is not None:
                blocks.append(block)
        return tuple(blocks)

    def convert_block(self, node: SyntaxTreeNode) -> Optional[m.Block]:
        kind = node.type
        if kind in ("front_matter", "footnote_block", "footnote_anchor"):
            return None
        if kind == "paragraph":
            content = self._inline_content(node)
            return m.Plain(content) if node.hidden else m.Paragraph(content)
        if kind == "heading":
            return m.Heading(
                level=int(node.tag[1:]),
                content=self._inline_content(node),
                identifier=str(node.attrs.get("id", "")),
                classes=_classes(node),
            )
        if kind == "blockquote":
            return m.BlockQuote(self.convert_blocks(node.children))
        if kind == "bullet_list":
            return m.BulletList(self._list_items(node))
        if kind == "ordered_list":
            delimiter = m.ListDelimiter.ONE_PAREN if node.markup == ")" else m.ListDelimiter.PERIOD
            return m.OrderedList(
                items=self._list_items(node),
                start=int(node.attrs.get("start", 1)),
                style=m.ListNumberStyle.DECIMAL,
                delimiter=delimiter,
            )
        if kind == "fence":
            return self._fence(node)
        if kind == "code_block":
            return m.CodeBlock(node.content.rstrip("\n"))
        if kind == "hr":
            return m.HorizontalRule()
        if kind == "html_block":
            return m.RawBlock("html", node.content)
        if kind == "table":
            return m.Table(self._table_rows(node))
        if kind == "dl":
            return self._definition_list(node)
        if kind in ("math_block", "math_block_label"):
            return m.Paragraph((m.Math(node.content.strip(), display=True),))
        if kind == "speaker_note":
            return m.Container(children=(m.Plain(tuple(split_words(node.content))),), classes=("note",))
        if kind.startswith("container_"):
            name = kind[len("container_"):]
            classes, attributes = self._container_info(node.info)
            attributes.update({k: str(v) for k, v in node.attrs.items() if k != "class"})
            return m.Container(
                children=self.convert_blocks(node.children),
                classes=(name,) + classes + _classes(node),
                attributes=attributes,
            )
        raise ValueError(f"Unsupported markdown element {kind!r}")

    @staticmethod
    def _container_info(info: str) -> Tuple[Tuple[str, ...], Dict[str, str]]:
        """Split the text after ``:::name`` into classes and attributes.

        ``{width=40 .wide}`` is read as an attribute block; bare words are
        classes.
        """
        parts = info.strip().split(None, 1) if info else []
        rest = parts[1].strip() if len(parts) > 1 else ""
        if not rest.startswith("{"):
            return tuple(rest.split()), {}
        try:
            end, attrs = parse_attrs(rest)
        except ParseError as e:
            raise ValueError(f"Bad container attributes {rest!r}: {e}") from e
        if rest[end:] != "}":
            raise ValueError(f"Bad container attributes {rest!r}")
        classes = tuple(attrs.pop("class", "").split())
        width = attrs.get("width")
        if width is not None and not (width.isdigit() and int(width) > 0):
            raise ValueError(f"Container width must be a positive integer, got {width!r}")
        return classes, attrs

    def _fence(self, node: SyntaxTreeNode) -> m.Block:
        text = node.content.rstrip("\n")
        info = node.info.strip()
        raw = RAW_FENCE_RE.match(info)
        if raw:
            return m.RawBlock(raw.group(1), text)
        language = info.split()[0] if info else None
        return m.CodeBlock(text, language)

    def _list_items(self, node: SyntaxTreeNode) -> Tuple[Tuple[m.Block, ...], ...]:
        return tuple(self.convert_blocks(item.children) for item in node.children)

    def _definition_list(self, node: SyntaxTreeNode) -> m.DefinitionList:
        items = []
        for child in node.children:
            if child.type == "dt":
                items.append((self._inline_content(child), []))
            elif child.type == "dd" and items:
                items[-1][1].append(self.convert_blocks(child.children))
        return m.DefinitionList(tuple((term, tuple(defs)) for term, defs in items))

    def _table_rows(self, node: SyntaxTreeNode):
        rows = []
        for section in node.children:
            for row in section.children:
                rows.append(tuple(self._inline_content(cell) for cell in row.children))
        return tuple(rows)

    # ------------------------------------------------------------------
    # Inlines
    # ------------------------------------------------------------------

    def _inline_content(self, node: SyntaxTreeNode) -> Tuple[m.Inline, ...]:
        inlines: List[m.Inline] = []
        for child in node.children:
            if child.type == "inline":
                inlines.extend(self.convert_inlines(child.children))
        return tuple(inlines)

    def convert_inlines(self, nodes) -> Tuple[m.Inline, ...]:
        inlines: List[m.Inline] = []
        for node in nodes:
            inlines.extend(self.convert_inline(node))
        return tuple(inlines)

    def convert_inline(self, node: SyntaxTreeNode) -> List[m.Inline]:
        kind = node.type
        if kind == "text":
            return split_words(node.content)
        if kind == "softbreak":
            return [m.SoftBreak()]
        if kind == "hardbreak":
            return [m.LineBreak()]
        if kind == "code_inline":
            return [m.Code(node.content)]
        if kind == "em":
            return [m.Emph(self.convert_inlines(node.children))]
        if kind == "strong":
            return [m.Strong(self.convert_inlines(node.children))]
        if kind == "s":
            return [m.Strikeout(self.convert_inlines(node.children))]
        if kind == "sub":
            return [m.Subscript(self.convert_inlines(node.children))]
        if kind == "sup":
            return [m.Superscript(self.convert_inlines(node.children))]
        if kind == "link":
            return [m.Link(
                target=str(node.attrs.get("href", "")),
                content=self.convert_inlines(node.children),
                title=str(node.attrs.get("title", "")),
            )]
        if kind == "image":
            return [m.Image(caption=self.convert_inlines(node.children), src=str(node.attrs.get("src", "")))]
        if kind == "span":
            return [self._span(node)]
        if kind == "html_inline":
            return [m.RawInline("html", node.content)]
        if kind in ("math_inline", "math_inline_double"):
            return [m.Math(node.content, display=kind == "math_inline_double")]
        if kind == "footnote_ref":
            return [self._footnote(node)]
        if kind == "footnote_anchor":
            return []
        raise ValueError(f"Unsupported markdown inline element {kind!r}")

    def _span(self, node: SyntaxTreeNode) -> m.Inline:
        classes = _classes(node)
        content = self.convert_inlines(node.children)
        for cls in classes:
            if cls in SPAN_CLASS_NODES:
                return SPAN_CLASS_NODES[cls](content)
        attributes = {k: str(v) for k, v in node.attrs.items() if k != "class"}
        return m.Span(content=content, classes=classes, attributes=attributes)

    def _footnote(self, node: SyntaxTreeNode) -> m.Inline:
        footnote = self._footnotes.get(node.meta["id"])
        if footnote is None:
            raise ValueError(f"Footnote {node.meta.get('label', node.meta['id'])!r} has no definition")
        return m.Note(self.convert_blocks(footnote.children))
