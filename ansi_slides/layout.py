"""
Composable text layout for terminal output.

A :class:`Doc` is an immutable description of laid out text. Docs are built
from a handful of primitives (literal text, breaking spaces, line breaks,
blank lines, prefixed regions) and only turned into a string by
:func:`render`, which wraps lines at a column width.

All width computations ignore ANSI escape sequences. Styled text carries
``ESC [ ... m`` codes that occupy no columns on screen, so measuring with
``len`` would misplace every centered or wrapped line.
"""
import re
from dataclasses import dataclass
from functools import cached_property
from typing import Iterable, Iterator, List, Optional, Tuple, Union

__all__ = [
    "Doc", "empty", "cr", "blankline", "space", "literal", "concat", "nest",
    "hang", "prefixed", "hcenter", "vcenter", "render", "strip_ansi",
    "visible_width", "to_doc",
]

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def strip_ansi(text: str) -> str:
    """Remove all ANSI escape sequences from *text*."""
    return ANSI_ESCAPE_RE.sub("", text)


def _text_width(text: str) -> int:
    return len(strip_ansi(text))


class Doc:
    """Base class of all layout values."""

    def __add__(self, other) -> "Doc":
        return concat([self, other])

    def __radd__(self, other) -> "Doc":
        return concat([other, self])

    def render(self, width: Optional[int] = None) -> str:
        return render(self, width)

    def nest(self, n: int) -> "Doc":
        return nest(self, n)

    @cached_property
    def width(self) -> int:
        """Visible width of the widest line, trailing spaces included."""
        widest = column = 0
        pending_space = False
        for atom in _flatten(self):
            kind = atom[0]
            if kind == _TEXT:
                if pending_space and column:
                    column += 1
                pending_space = False
                column += atom[2]
                widest = max(widest, column)
            elif kind == _SPACE:
                pending_space = True
            elif kind in (_CR, _NEWLINE, _BLANK):
                column = 0
                pending_space = False
        return widest

    @cached_property
    def height(self) -> int:
        text = render(self)
        return len(text.split("\n")) if text else 0


@dataclass(frozen=True)
class _Empty(Doc):
    pass


@dataclass(frozen=True)
class _Literal(Doc):
    """A run of text without newlines; ``columns`` is its visible width."""
    text: str
    columns: int


@dataclass(frozen=True)
class _BreakingSpace(Doc):
    pass


@dataclass(frozen=True)
class _CarriageReturn(Doc):
    pass


@dataclass(frozen=True)
class _NewLine(Doc):
    """Unconditional line end, emitted even when the line is empty."""


@dataclass(frozen=True)
class _BlankLines(Doc):
    count: int


@dataclass(frozen=True)
class _Prefixed(Doc):
    prefix: str
    body: Doc


@dataclass(frozen=True)
class _Concat(Doc):
    parts: Tuple[Doc, ...]


empty = _Empty()
cr = _CarriageReturn()
blankline = _BlankLines(1)
space = _BreakingSpace()


DocLike = Union[Doc, str, Iterable]


def literal(text: str) -> Doc:
    """Return *text* as a non-breaking doc; embedded newlines are kept."""
    if not text:
        return empty
    parts: List[Doc] = []
    for i, line in enumerate(text.split("\n")):
        if i:
            parts.append(_NewLine())
        if line:
            parts.append(_Literal(line, _text_width(line)))
    return parts[0] if len(parts) == 1 else _Concat(tuple(parts))


def to_doc(value: DocLike) -> Doc:
    if isinstance(value, Doc):
        return value
    if isinstance(value, str):
        return literal(value)
    if value is None:
        return empty
    return concat(value)


def concat(docs: Iterable[DocLike], sep: DocLike = empty) -> Doc:
    """Join *docs* in order, placing *sep* between neighbours."""
    sep = to_doc(sep)
    parts: List[Doc] = []
    for i, doc in enumerate(docs):
        if i and sep is not empty:
            parts.append(sep)
        parts.append(to_doc(doc))
    if not parts:
        return empty
    if len(parts) == 1:
        return parts[0]
    return _Concat(tuple(parts))


def nest(doc: DocLike, n: int) -> Doc:
    """Indent every line that *doc* starts by ``n`` columns.

    The first line is only indented if *doc* begins at the start of a line.
    """
    doc = to_doc(doc)
    if n <= 0:
        return doc
    return _Prefixed(" " * n, doc)


def prefixed(doc: DocLike, marker: str) -> Doc:
    """Put *marker* in front of every line of *doc*."""
    return _Prefixed(marker, to_doc(doc))


def hang(doc: DocLike, n: int, prefix: DocLike) -> Doc:
    """Lead with *prefix*, indent the remaining lines of *doc* by ``n``.

    A prefix narrower than ``n`` is padded so that continuation lines line up
    under the first character of content.
    """
    prefix = to_doc(prefix)
    padding = n - prefix.width
    if padding > 0:
        prefix = prefix + " " * padding
    return concat([prefix, nest(doc, n)])


def _lines_doc(lines: List[str]) -> Doc:
    return concat([cr, literal("\n".join(lines)), cr])


def _drop_indent(line: str, n: int) -> str:
    """Remove ``n`` leading visible spaces from *line*, keeping escape codes."""
    codes = []
    pos = 0
    while n and pos < len(line):
        match = ANSI_ESCAPE_RE.match(line, pos)
        if match:
            codes.append(match.group())
            pos = match.end()
        elif line[pos] == " ":
            n -= 1
            pos += 1
        else:
            break
    return "".join(codes) + line[pos:]


def hcenter(doc: DocLike, width: int) -> Doc:
    """Center *doc* as a block within ``width`` columns.

    One left padding, computed from the widest visible line, is applied to
    all lines so that multi-line blocks keep their shape. Leading indentation
    shared by all lines is dropped first, which makes re-centering a centered
    block a no-op. Lines without visible text keep only their escape codes,
    so styles opened or closed on them stay balanced.
    """
    lines = render(to_doc(doc), width).split("\n")
    visible = [strip_ansi(line) for line in lines]
    filled = [text for text in visible if text.strip()]
    if not filled:
        codes = "".join(ANSI_ESCAPE_RE.findall("\n".join(lines)))
        return literal(codes)
    indent = min(len(text) - len(text.lstrip(" ")) for text in filled)
    widest = max(len(text.rstrip(" ")) - indent for text in filled)
    pad = " " * max(0, (width - widest) // 2)
    centered = []
    for line, text in zip(lines, visible):
        if text.strip():
            centered.append(pad + _drop_indent(line, indent))
        else:
            centered.append("".join(ANSI_ESCAPE_RE.findall(line)))
    return _lines_doc(centered)


def vcenter(doc: DocLike, height: int, width: Optional[int] = None) -> Doc:
    """Push *doc* down so it sits in the middle of ``height`` lines."""
    text = render(to_doc(doc), width)
    if not text:
        return empty
    lines = text.split("\n")
    pad = max(0, (height - len(lines)) // 2)
    return _lines_doc([""] * pad + lines)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

_PUSH, _POP, _TEXT, _SPACE, _CR, _NEWLINE, _BLANK = range(7)


def _flatten(doc: Doc) -> Iterator[tuple]:
    if isinstance(doc, _Literal):
        yield (_TEXT, doc.text, doc.columns)
    elif isinstance(doc, _Concat):
        for part in doc.parts:
            yield from _flatten(part)
    elif isinstance(doc, _Prefixed):
        yield (_PUSH, doc.prefix)
        yield from _flatten(doc.body)
        yield (_POP,)
    elif isinstance(doc, _BreakingSpace):
        yield (_SPACE,)
    elif isinstance(doc, _CarriageReturn):
        yield (_CR,)
    elif isinstance(doc, _NewLine):
        yield (_NEWLINE,)
    elif isinstance(doc, _BlankLines):
        yield (_BLANK, doc.count)
    elif isinstance(doc, _Empty):
        return
    else:
        raise TypeError(f"Not a layout value: {doc!r}")


class _LineWriter:
    """Turns a flat stream of layout atoms into lines of text."""

    def __init__(self, width: Optional[int]):
        self.width = width
        self.lines: List[str] = []
        self.line: List[str] = []
        self.column = 0
        self.prefixes: List[str] = []
        self.has_content = False
        self.pending_space = False
        self.blanks = 0

    def _start_line(self):
        prefix = "".join(self.prefixes)
        if prefix:
            self.line.append(prefix)
            self.column = _text_width(prefix)
        self.has_content = True

    def end_line(self):
        if self.has_content:
            self.lines.append("".join(self.line).rstrip(" "))
            self.blanks = 0
        else:
            self.lines.append("".join(self.prefixes).rstrip())
            self.blanks += 1
        self.line = []
        self.column = 0
        self.has_content = False
        self.pending_space = False

    def text(self, text: str, columns: int, word_width: int):
        if self.pending_space:
            self.pending_space = False
            if self.width is not None and self.column + 1 + word_width > self.width:
                self.end_line()
            else:
                self.line.append(" ")
                self.column += 1
        if not self.has_content:
            self._start_line()
        self.line.append(text)
        self.column += columns

    def space(self):
        if self.has_content:
            self.pending_space = True

    def carriage_return(self):
        self.pending_space = False
        if self.has_content:
            self.end_line()

    def blank_lines(self, count: int):
        self.pending_space = False
        if self.has_content:
            self.end_line()
        if not self.lines:
            return
        while self.blanks < count:
            self.end_line()

    def finish(self) -> str:
        if self.has_content:
            self.end_line()
        lines = self.lines[:len(self.lines) - self.blanks] if self.blanks else self.lines
        return "\n".join(lines)


def _word_width(atoms: List[tuple], start: int) -> int:
    total = 0
    for i in range(start, len(atoms)):
        atom = atoms[i]
        kind = atom[0]
        if kind == _TEXT:
            total += atom[2]
        elif kind in (_PUSH, _POP):
            continue
        else:
            break
    return total


def render(doc: DocLike, width: Optional[int] = None) -> str:
    """Lay out *doc* as text, wrapping at breaking spaces beyond ``width``."""
    atoms = list(_flatten(to_doc(doc)))
    writer = _LineWriter(width)
    for i, atom in enumerate(atoms):
        kind = atom[0]
        if kind == _TEXT:
            if atom[1]:
                word = _word_width(atoms, i) if writer.pending_space else atom[2]
                writer.text(atom[1], atom[2], word)
        elif kind == _SPACE:
            writer.space()
        elif kind == _CR:
            writer.carriage_return()
        elif kind == _NEWLINE:
            writer.end_line()
        elif kind == _BLANK:
            writer.blank_lines(atom[1])
        elif kind == _PUSH:
            writer.prefixes.append(atom[1])
        elif kind == _POP:
            writer.prefixes.pop()
    return writer.finish()


def visible_width(value: DocLike) -> int:
    """Number of terminal columns taken by the widest line of *value*."""
    if isinstance(value, str):
        return max((_text_width(line) for line in value.split("\n")), default=0)
    return to_doc(value).width
