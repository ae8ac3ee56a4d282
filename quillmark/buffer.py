"""Plain-text document split into blocks, with a cursor and per-block state."""

from __future__ import annotations

from enum import IntFlag
from typing import Iterator, List, Tuple


class BlockState(IntFlag):
    """Markdown state of a text block: one kind, optionally inside a block quote."""

    UNKNOWN = 0
    PARAGRAPH_BREAK = 1
    PARAGRAPH = 2
    HEADING = 4
    HORIZONTAL_RULE = 8
    NUMBERED_LIST = 16
    BULLET_POINT_LIST = 32
    TASK_LIST = 64
    PIPE_TABLE = 128
    CODE_BLOCK = 256
    BLOCKQUOTE = 512

    @property
    def kind(self) -> "BlockState":
        """The state with the block quote flag removed."""
        return BlockState(int(self) & ~int(BlockState.BLOCKQUOTE))

    @property
    def in_blockquote(self) -> bool:
        return bool(int(self) & int(BlockState.BLOCKQUOTE))


class TextBuffer:
    """Editable text made of newline-separated blocks, with a selection cursor.

    ``anchor`` and ``position`` mark the cursor; they are equal when nothing
    is selected.  Edits move both the way a document cursor follows text.
    """

    def __init__(self, text: str = "") -> None:
        self._blocks: List[str] = text.split("\n")
        self._states: List[BlockState] = [BlockState.UNKNOWN] * len(self._blocks)
        self.anchor = 0
        self.position = 0

    @property
    def text(self) -> str:
        return "\n".join(self._blocks)

    def __len__(self) -> int:
        return sum(len(block) for block in self._blocks) + len(self._blocks) - 1

    def __str__(self) -> str:
        return self.text

    def block_count(self) -> int:
        return len(self._blocks)

    def _check_position(self, position: int) -> None:
        if not 0 <= position <= len(self):
            raise ValueError(f"position {position} is outside the buffer")

    def _check_block(self, number: int) -> None:
        if not 0 <= number < len(self._blocks):
            raise IndexError(f"block {number} does not exist")

    def _locate(self, position: int) -> Tuple[int, int]:
        """Return the block number holding a position and the offset within it."""
        self._check_position(position)
        start = 0
        for number, block in enumerate(self._blocks):
            if position <= start + len(block):
                return number, position - start
            start += len(block) + 1
        raise ValueError(f"position {position} is outside the buffer")

    def block_at(self, position: int) -> int:
        """Return the number of the block containing a document position."""
        return self._locate(position)[0]

    def block_position(self, number: int) -> int:
        """Return the document position where a block starts."""
        self._check_block(number)
        return sum(len(block) + 1 for block in self._blocks[:number])

    def block_text(self, number: int) -> str:
        self._check_block(number)
        return self._blocks[number]

    def block_state(self, number: int) -> BlockState:
        self._check_block(number)
        return self._states[number]

    def set_block_state(self, number: int, state: int) -> None:
        self._check_block(number)
        self._states[number] = BlockState(state)

    def insert(self, position: int, text: str) -> int:
        """Insert text at a position and return the position just after it."""
        number, offset = self._locate(position)
        block = self._blocks[number]
        parts = text.split("\n")
        if len(parts) == 1:
            new_blocks = [block[:offset] + text + block[offset:]]
        else:
            new_blocks = [block[:offset] + parts[0], *parts[1:-1], parts[-1] + block[offset:]]
        self._blocks[number:number + 1] = new_blocks
        self._states[number + 1:number + 1] = [BlockState.UNKNOWN] * (len(new_blocks) - 1)

        added = len(text)
        if self.anchor >= position:
            self.anchor += added
        if self.position >= position:
            self.position += added
        return position + added

    def remove(self, start: int, end: int) -> None:
        """Delete the text between two positions; the first block keeps its state."""
        if start > end:
            raise ValueError("start must not be after end")
        first, first_offset = self._locate(start)
        last, last_offset = self._locate(end)
        merged = self._blocks[first][:first_offset] + self._blocks[last][last_offset:]
        self._blocks[first:last + 1] = [merged]
        del self._states[first + 1:last + 1]

        removed = end - start

        def adjust(point: int) -> int:
            if point > end:
                return point - removed
            if point > start:
                return start
            return point

        self.anchor = adjust(self.anchor)
        self.position = adjust(self.position)

    def select(self, anchor: int, position: int) -> None:
        """Place the cursor, selecting the text between anchor and position."""
        self._check_position(anchor)
        self._check_position(position)
        self.anchor = anchor
        self.position = position

    def has_selection(self) -> bool:
        return self.anchor != self.position

    def selection_range(self) -> Tuple[int, int]:
        return min(self.anchor, self.position), max(self.anchor, self.position)

    def selected_text(self) -> str:
        start, end = self.selection_range()
        return self.text[start:end]

    def selected_blocks(self) -> range:
        """Block numbers touched by the selection, or the cursor's block."""
        if self.has_selection():
            start, end = self.selection_range()
            return range(self.block_at(start), self.block_at(end) + 1)
        number = self.block_at(self.position)
        return range(number, number + 1)

    def position_in_block(self) -> int:
        """Offset of the cursor from the start of its block."""
        return self._locate(self.position)[1]

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._blocks))