"""Document outline of headings with position lookup."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

_HEADING_RE = re.compile(r"^\s*#*(.*?)\s*#*?\s*$")


def heading_label(level: int, block_text: str) -> str:
    """Return the indented outline label for a heading line."""
    label = "   " + "    " * max(level - 1, 0)
    match = _HEADING_RE.match(block_text)
    if match:
        label += match.group(1)
    return label


@dataclass(frozen=True)
class OutlineEntry:
    """One heading in the outline: its label and the document position of its line."""

    label: str
    position: int


class Outline:
    """Ordered list of document headings."""

    def __init__(self) -> None:
        self.entries: List[OutlineEntry] = []

    def reload(self, headings: Iterable[Tuple[int, str, Optional[int]]]) -> None:
        """Rebuild from (level, line text, line position) triples.

        Headings whose line position is None have no line in the document
        and are left out.
        """
        self.entries = [
            OutlineEntry(heading_label(level, text), position)
            for level, text, position in headings
            if position is not None
        ]

    def find_heading(self, position: int, exact_match: bool = True) -> int:
        """Binary search for the heading at a document position.

        Returns its row, or -1 when absent and exact_match is set; otherwise
        the row where a heading at that position would be inserted.
        """
        low = 0
        high = len(self.entries) - 1
        mid = 0
        while low <= high:
            mid = low + (high - low) // 2
            item_position = self.entries[mid].position
            if item_position == position:
                return mid
            if item_position < position:
                mid += 1
                low = mid
            else:
                high = mid - 1
        return -1 if exact_match else mid

    def current_row(self, position: int) -> Optional[int]:
        """Row of the heading whose section holds the position, or None."""
        count = len(self.entries)
        if count == 0 or position < 0:
            return None
        row = self.find_heading(position, False)
        if row == count or (0 <= row < count and self.entries[row].position != position):
            row -= 1
        return row if row >= 0 else None

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[OutlineEntry]:
        return iter(self.entries)

    def __getitem__(self, row: int) -> OutlineEntry:
        return self.entries[row]