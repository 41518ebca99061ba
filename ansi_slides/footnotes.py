"""Collection of footnote bodies met during one render pass."""
from typing import Iterator, List, Tuple

from .models import Block


class FootnoteCollector:
    """
    Ordered store of pending footnotes.

    A collector belongs to exactly one top-level render call. Numbers handed
    out by :meth:`add` are 1-based and match the order in which the notes are
    printed after the main content.
    """

    def __init__(self):
        self._notes: List[Tuple[Block, ...]] = []

    def add(self, blocks) -> int:
        """Store a copy of *blocks* and return its footnote number."""
        self._notes.append(tuple(blocks))
        return len(self._notes)

    def reset(self):
        self._notes = []

    def __len__(self) -> int:
        return len(self._notes)

    def __getitem__(self, index: int) -> Tuple[Block, ...]:
        return self._notes[index]

    def __iter__(self) -> Iterator[Tuple[Block, ...]]:
        return iter(list(self._notes))

    def __bool__(self) -> bool:
        return bool(self._notes)
