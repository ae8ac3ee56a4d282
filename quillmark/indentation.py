"""Indenting and unindenting lines, with list-aware handling of empty items."""

from __future__ import annotations

import re

from quillmark.buffer import BlockState, TextBuffer

_EMPTY_NUMBERED_LIST_RE = re.compile(r"^\s*([0-9]+)[.)]\s+$")
_EMPTY_BULLET_LIST_RE = re.compile(r"^\s*[+*-]\s+$")
_EMPTY_TASK_LIST_RE = re.compile(r"^\s*[-*+] \[([x ])\]\s+$")
_NUMBER_RE = re.compile(r"\d+")

# Bullet marker used for a sublist one level deeper, and one level shallower.
_NEXT_BULLET = {"*": "-", "-": "+"}
_PREVIOUS_BULLET = {"*": "+", "-": "*"}


def _check_tab_width(tab_width: int) -> None:
    if tab_width < 1:
        raise ValueError("tab_width must be at least 1")


def _indent_string(width: int, insert_spaces: bool) -> str:
    return " " * width if insert_spaces else "\t"


def _replace_block_text(buffer: TextBuffer, block: int, text: str) -> None:
    start = buffer.block_position(block)
    buffer.remove(start, start + len(buffer.block_text(block)))
    buffer.insert(start, text)


def _cycle_bullet(buffer: TextBuffer, block: int, mapping: dict, fallback: str) -> None:
    text = buffer.block_text(block)
    old = text.strip()[0]
    new = mapping.get(old, fallback)
    _replace_block_text(buffer, block, text.replace(old, new))


def indent_text(
    buffer: TextBuffer,
    tab_width: int = 4,
    insert_spaces: bool = False,
    bullet_cycling: bool = True,
) -> None:
    """Indent the selected lines, or insert an indent at the cursor.

    With a selection every selected line gets one indent at its start.
    Without one, empty list items are indented as a whole: numbered items
    restart at 1 and bullet markers cycle when cycling is on.  Elsewhere
    the indent reaches the next tab stop.
    """
    _check_tab_width(tab_width)

    if buffer.has_selection():
        indent = _indent_string(tab_width, insert_spaces)
        for block in buffer.selected_blocks():
            buffer.insert(buffer.block_position(block), indent)
        return

    block = buffer.block_at(buffer.position)
    block_start = buffer.block_position(block)
    text = buffer.block_text(block)
    kind = buffer.block_state(block).kind
    insert_at = buffer.position
    width = tab_width

    if kind == BlockState.NUMBERED_LIST:
        if _EMPTY_NUMBERED_LIST_RE.match(text):
            _replace_block_text(buffer, block, _NUMBER_RE.sub("1", text))
            insert_at = block_start
    elif kind == BlockState.TASK_LIST:
        if _EMPTY_TASK_LIST_RE.match(text):
            insert_at = block_start
    elif kind == BlockState.BULLET_POINT_LIST:
        if _EMPTY_BULLET_LIST_RE.match(text):
            if bullet_cycling:
                _cycle_bullet(buffer, block, _NEXT_BULLET, "*")
            insert_at = block_start
    else:
        width = tab_width - (buffer.position_in_block() % tab_width)

    buffer.insert(insert_at, _indent_string(width, insert_spaces))


def unindent_text(
    buffer: TextBuffer, tab_width: int = 4, bullet_cycling: bool = True
) -> None:
    """Remove one tab, or up to ``tab_width`` spaces, from each selected line.

    When the last line handled is an empty bullet item and cycling is on,
    its marker cycles back to the shallower level's marker.
    """
    _check_tab_width(tab_width)

    blocks = buffer.selected_blocks()
    for block in blocks:
        start = buffer.block_position(block)
        text = buffer.block_text(block)
        if text.startswith("\t"):
            buffer.remove(start, start + 1)
        else:
            spaces = len(text) - len(text.lstrip(" "))
            count = min(spaces, tab_width)
            if count:
                buffer.remove(start, start + count)

    last = blocks[-1]
    if (
        bullet_cycling
        and buffer.block_state(last).kind == BlockState.BULLET_POINT_LIST
        and _EMPTY_BULLET_LIST_RE.match(buffer.block_text(last))
    ):
        _cycle_bullet(buffer, last, _PREVIOUS_BULLET, "-")