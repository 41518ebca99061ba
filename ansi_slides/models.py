"""
Data models for the terminal slide renderer.

The document tree is made of two node families, blocks and inlines. Nodes are
frozen dataclasses holding their children in tuples so a tree can be shared
between render passes without being mutated.
"""
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Callable, Dict, Optional, Tuple, Union


class ListNumberStyle(str, Enum):
    """Numbering schemes for ordered lists."""
    DEFAULT = "DefaultStyle"
    EXAMPLE = "Example"
    DECIMAL = "Decimal"
    LOWER_ALPHA = "LowerAlpha"
    UPPER_ALPHA = "UpperAlpha"
    LOWER_ROMAN = "LowerRoman"
    UPPER_ROMAN = "UpperRoman"


class ListDelimiter(str, Enum):
    """Delimiters placed around ordered list numbers."""
    DEFAULT = "DefaultDelim"
    PERIOD = "Period"
    ONE_PAREN = "OneParen"
    TWO_PARENS = "TwoParens"


# ---------------------------------------------------------------------------
# Inline nodes
# ---------------------------------------------------------------------------

class Inline:
    """Marker base class for inline nodes."""


@dataclass(frozen=True)
class Text(Inline):
    text: str


@dataclass(frozen=True)
class Space(Inline):
    pass


@dataclass(frozen=True)
class SoftBreak(Inline):
    pass


@dataclass(frozen=True)
class LineBreak(Inline):
    pass


@dataclass(frozen=True)
class RawInline(Inline):
    format: str
    text: str


@dataclass(frozen=True)
class Code(Inline):
    text: str


@dataclass(frozen=True)
class Emph(Inline):
    content: Tuple[Inline, ...] = ()


@dataclass(frozen=True)
class Strong(Inline):
    content: Tuple[Inline, ...] = ()


@dataclass(frozen=True)
class Strikeout(Inline):
    content: Tuple[Inline, ...] = ()


@dataclass(frozen=True)
class Subscript(Inline):
    content: Tuple[Inline, ...] = ()


@dataclass(frozen=True)
class Superscript(Inline):
    content: Tuple[Inline, ...] = ()


@dataclass(frozen=True)
class SmallCaps(Inline):
    content: Tuple[Inline, ...] = ()


@dataclass(frozen=True)
class Underline(Inline):
    content: Tuple[Inline, ...] = ()


@dataclass(frozen=True)
class Cite(Inline):
    content: Tuple[Inline, ...] = ()
    citation_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Math(Inline):
    text: str
    display: bool = False


@dataclass(frozen=True)
class Span(Inline):
    content: Tuple[Inline, ...] = ()
    classes: Tuple[str, ...] = ()
    attributes: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class Link(Inline):
    target: str
    content: Tuple[Inline, ...] = ()
    title: str = ""


@dataclass(frozen=True)
class Image(Inline):
    caption: Tuple[Inline, ...] = ()
    src: str = ""


@dataclass(frozen=True)
class Quoted(Inline):
    content: Tuple[Inline, ...] = ()
    double: bool = True


@dataclass(frozen=True)
class Note(Inline):
    """Footnote whose body is a sequence of blocks."""
    blocks: Tuple["Block", ...] = ()


# ---------------------------------------------------------------------------
# Block nodes
# ---------------------------------------------------------------------------

class Block:
    """Marker base class for block nodes."""


@dataclass(frozen=True)
class Plain(Block):
    content: Tuple[Inline, ...] = ()


@dataclass(frozen=True)
class Paragraph(Block):
    content: Tuple[Inline, ...] = ()


@dataclass(frozen=True)
class BlockQuote(Block):
    content: Tuple[Block, ...] = ()


@dataclass(frozen=True)
class Heading(Block):
    level: int
    content: Tuple[Inline, ...] = ()
    identifier: str = ""
    classes: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.level < 1:
            raise ValueError(f"Heading level must be positive, got {self.level}")


@dataclass(frozen=True)
class Container(Block):
    """Generic tagged group of blocks (notes, centering, slide sections)."""
    children: Tuple[Block, ...] = ()
    classes: Tuple[str, ...] = ()
    attributes: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class RawBlock(Block):
    format: str
    text: str


@dataclass(frozen=True)
class LineBlock(Block):
    lines: Tuple[Tuple[Inline, ...], ...] = ()


@dataclass(frozen=True)
class Table(Block):
    """Tables are never laid out; the node only records that one was there."""
    rows: Tuple[Tuple[Tuple[Inline, ...], ...], ...] = ()


@dataclass(frozen=True)
class DefinitionList(Block):
    items: Tuple[Tuple[Tuple[Inline, ...], Tuple[Tuple[Block, ...], ...]], ...] = ()


@dataclass(frozen=True)
class BulletList(Block):
    items: Tuple[Tuple[Block, ...], ...] = ()


@dataclass(frozen=True)
class OrderedList(Block):
    items: Tuple[Tuple[Block, ...], ...] = ()
    start: int = 1
    style: ListNumberStyle = ListNumberStyle.DEFAULT
    delimiter: ListDelimiter = ListDelimiter.DEFAULT


@dataclass(frozen=True)
class CodeBlock(Block):
    text: str
    language: Optional[str] = None


@dataclass(frozen=True)
class HorizontalRule(Block):
    pass


# ---------------------------------------------------------------------------
# Documents and slides
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Meta:
    """Document level metadata used for the title slide."""
    title: str = ""
    author: Optional[str] = None
    rows: Optional[int] = None
    cols: Optional[int] = None
    slide_level: Optional[int] = None


@dataclass(frozen=True)
class Document:
    blocks: Tuple[Block, ...] = ()
    meta: Meta = field(default_factory=Meta)


@dataclass(frozen=True)
class SlideUnit:
    """One rendered slide, the durable output of the pipeline."""
    number: int
    name: str
    text: str
    executable: bool = True


# ---------------------------------------------------------------------------
# Tree helpers
# ---------------------------------------------------------------------------

Node = Union[Inline, Block]

_INLINE_CHILD_FIELDS = ("content", "caption")


def stringify(nodes) -> str:
    """Return the plain text of a sequence of inlines (or a single inline)."""
    if isinstance(nodes, Inline):
        nodes = (nodes,)
    parts = []
    for node in nodes:
        if isinstance(node, (Text, Code, Math)):
            parts.append(node.text)
        elif isinstance(node, (Space, SoftBreak, LineBreak)):
            parts.append(" ")
        elif isinstance(node, Quoted):
            quote = '"' if node.double else "'"
            parts.append(quote + stringify(node.content) + quote)
        elif isinstance(node, (RawInline, Note)):
            continue
        else:
            for name in _INLINE_CHILD_FIELDS:
                if hasattr(node, name):
                    parts.append(stringify(getattr(node, name)))
                    break
    return "".join(parts)


def map_text(nodes: Tuple[Inline, ...], func: Callable[[str], str]) -> Tuple[Inline, ...]:
    """Apply *func* to every ``Text`` node below *nodes*, rebuilding parents.

    Notes are left untouched; their bodies belong to a different context.
    """
    result = []
    for node in nodes:
        if isinstance(node, Text):
            result.append(Text(func(node.text)))
            continue
        if isinstance(node, Note):
            result.append(node)
            continue
        changes = {}
        for f in fields(node):
            if f.name in _INLINE_CHILD_FIELDS:
                changes[f.name] = map_text(getattr(node, f.name), func)
        result.append(replace(node, **changes) if changes else node)
    return tuple(result)
