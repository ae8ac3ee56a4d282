"""Editor behaviour independent of any widget toolkit.

This covers typing-pause detection, paper margins, font size steps,
image links for dropped files, and the code block and block quote
areas whose backgrounds the editor draws.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path, PurePath
from typing import List, Optional, Sequence, Tuple

from quillmark.buffer import BlockState

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "gif", "bmp", "png", "tif", "tiff", "svg"})

TYPING_PAUSE_INTERVAL = 1000
MIN_SCALED_INTERVAL = 20
MAX_SCALED_INTERVAL = 1000
TOP_PAPER_MARGIN = 20


class EditorWidth(Enum):
    """How wide the text area is, in average characters."""

    NARROW = 60
    MEDIUM = 80
    WIDE = 100
    FULL = 0


class FocusMode(Enum):
    """Which part of the text stays unfaded while writing."""

    DISABLED = "disabled"
    SENTENCE = "sentence"
    CURRENT_LINE = "current_line"
    THREE_LINES = "three_lines"
    PARAGRAPH = "paragraph"
    TYPEWRITER = "typewriter"


class BlockType(Enum):
    """Kind of area drawn with a background behind consecutive lines."""

    NONE = "none"
    QUOTE = "quote"
    CODE = "code"


class TypingMonitor:
    """Tracks pauses in typing from content changes and periodic checks.

    ``contents_changed`` is called whenever the text changes; the two
    ``check_*`` methods are called on timer ticks.  Each method returns
    whether its notification (resumed, paused, paused-scaled) fires now.
    A pause is reported once per pause.
    """

    def __init__(self) -> None:
        self.typing_has_paused = True
        self.scaled_typing_has_paused = True
        self._paused_sent = True
        self._paused_scaled_sent = True
        self.interval = TYPING_PAUSE_INTERVAL
        self.scaled_interval = TYPING_PAUSE_INTERVAL

    def contents_changed(self) -> bool:
        """Record a text change; return True when typing has just resumed."""
        if self.typing_has_paused or self.scaled_typing_has_paused:
            self.typing_has_paused = False
            self.scaled_typing_has_paused = False
            self._paused_sent = False
            self._paused_scaled_sent = False
            return True
        return False

    def check_paused(self) -> bool:
        """Timer tick; return True when the pause notification is due."""
        fire = self.typing_has_paused and not self._paused_sent
        if fire:
            self._paused_sent = True
        self.interval = TYPING_PAUSE_INTERVAL
        self.typing_has_paused = True
        return fire

    def check_paused_scaled(self, character_count: int) -> bool:
        """Timer tick scaled to document size; return True when due.

        Also sets ``scaled_interval`` to the delay before the next tick.
        """
        fire = self.scaled_typing_has_paused and not self._paused_scaled_sent
        if fire:
            self._paused_scaled_sent = True
        self.scaled_interval = scaled_typing_interval(character_count)
        self.scaled_typing_has_paused = True
        return fire


def scaled_typing_interval(character_count: int) -> int:
    """Milliseconds between scaled pause checks for a document of this size."""
    interval = (character_count // 30000) * 20
    return max(MIN_SCALED_INTERVAL, min(MAX_SCALED_INTERVAL, interval))


def paper_margin(
    width: int, editor_width: EditorWidth, average_char_width: int
) -> Tuple[int, int, int, int]:
    """Viewport margins (left, top, right, bottom) that center the text area."""
    if editor_width is EditorWidth.FULL:
        return (0, 0, 0, 0)
    proposed = average_char_width * editor_width.value
    margin = (width - proposed) // 2 if proposed <= width else 0
    return (margin, TOP_PAPER_MARGIN, margin, 0)


def adjust_font_size(size: int, delta: int) -> int:
    """Change a point size by delta, never going below 1."""
    new_size = size + delta
    return new_size if new_size > 0 else 1


def image_link_for_drop(path: str, document_path: Optional[str] = None) -> Optional[str]:
    """Markdown image link for a dropped file, or None if it is not an image.

    The link is relative to the document's directory when the document
    exists on disk; otherwise it is the file's URL.
    """
    extension = PurePath(path).suffix.lstrip(".").lower()
    if extension not in IMAGE_EXTENSIONS:
        return None

    if document_path is not None and os.path.exists(document_path):
        directory = os.path.dirname(os.path.abspath(document_path))
        target = PurePath(os.path.relpath(os.path.abspath(path), directory)).as_posix()
    else:
        file_path = Path(path)
        target = file_path.as_uri() if file_path.is_absolute() else path
    return f"![]({target})"


def _has(state: Optional[int], flag: BlockState) -> bool:
    return state is not None and (int(state) & int(flag)) == int(flag)


def inside_block_area(state: Optional[int]) -> BlockType:
    """Area type a block with this state belongs to; None means no block."""
    if _has(state, BlockState.BLOCKQUOTE):
        return BlockType.QUOTE
    if _has(state, BlockState.CODE_BLOCK):
        return BlockType.CODE
    return BlockType.NONE


def at_block_area_start(state: Optional[int], previous_state: Optional[int]) -> BlockType:
    """Area type started by a block, given the state of the block before it."""
    if state is None:
        return BlockType.NONE
    if _has(state, BlockState.CODE_BLOCK) and not _has(previous_state, BlockState.CODE_BLOCK):
        return BlockType.CODE
    if _has(state, BlockState.BLOCKQUOTE):
        return BlockType.QUOTE
    return BlockType.NONE


def at_block_area_end(state: Optional[int], block_type: BlockType) -> bool:
    """Whether a block lies past the end of an open area of the given type."""
    if block_type is BlockType.CODE:
        return not _has(state, BlockState.CODE_BLOCK) and not _has(state, BlockState.BLOCKQUOTE)
    if block_type is BlockType.QUOTE:
        return not _has(state, BlockState.BLOCKQUOTE)
    return True


def block_areas(states: Sequence[int]) -> List[Tuple[BlockType, int, int]]:
    """Areas (type, first block, last block) drawn over a whole document.

    A block that ends an area does not start the next one.
    """
    areas: List[Tuple[BlockType, int, int]] = []
    in_area = False
    area_type = BlockType.NONE
    first = 0
    last_index = len(states) - 1

    for index, state in enumerate(states):
        previous = states[index - 1] if index > 0 else None
        if not in_area:
            started = at_block_area_start(state, previous)
            if started is not BlockType.NONE:
                area_type = started
                first = index
                in_area = True
        elif at_block_area_end(state, area_type):
            areas.append((area_type, first, index - 1))
            in_area = False

        if in_area and index == last_index:
            areas.append((area_type, first, index))
            in_area = False

    return areas