"""Markdown formatting commands applied to a text buffer's cursor or selection."""

from __future__ import annotations

import re
from typing import Dict

from quillmark.buffer import BlockState, TextBuffer

_BULLET_LIST_RE = re.compile(r"^\s*[+*-]\s+")
_NUMBERED_LIST_RE = re.compile(r"^\s*([0-9]+)[.)]\s+")
_TASK_LIST_RE = re.compile(r"^\s*[-*+] \[([x ])\]\s+")
_NON_WHITESPACE_RE = re.compile(r"\S")


def _first_non_whitespace(text: str) -> int:
    """Offset of the first non-whitespace character, or 0 if there is none."""
    match = _NON_WHITESPACE_RE.search(text)
    return match.start() if match else 0


def _delete_chars(buffer: TextBuffer, position: int, count: int) -> None:
    """Delete up to ``count`` characters following a position."""
    end = min(position + count, len(buffer))
    if end > position:
        buffer.remove(position, end)


def _replace_selection(buffer: TextBuffer, text: str) -> int:
    """Replace the selected text and return the position after the new text."""
    start, end = buffer.selection_range()
    buffer.remove(start, end)
    return buffer.insert(start, text)


def insert_formatting_markup(buffer: TextBuffer, markup: str) -> None:
    """Surround the selection with markup, or insert a pair around the cursor."""
    length = len(markup)
    if buffer.has_selection():
        start, end = buffer.selection_range()
        buffer.insert(start, markup)
        buffer.insert(end + length, markup)
        buffer.select(buffer.anchor, buffer.position - length)
    else:
        after = buffer.insert(buffer.position, markup + markup)
        buffer.select(after - length, after - length)


def bold(buffer: TextBuffer) -> None:
    insert_formatting_markup(buffer, "**")


def italic(buffer: TextBuffer) -> None:
    insert_formatting_markup(buffer, "*")


def strikethrough(buffer: TextBuffer) -> None:
    insert_formatting_markup(buffer, "~~")


def insert_comment(buffer: TextBuffer) -> None:
    """Wrap the selection in an HTML comment, or insert an empty one."""
    if buffer.has_selection():
        _replace_selection(buffer, "<!-- " + buffer.selected_text() + " -->")
    else:
        after = buffer.insert(buffer.position, "<!--  -->")
        buffer.select(after - 4, after - 4)


def insert_link(buffer: TextBuffer) -> None:
    """Turn the selection into link text, or insert an empty link."""
    if buffer.has_selection():
        after = _replace_selection(buffer, "[" + buffer.selected_text() + "]()")
    else:
        after = buffer.insert(buffer.position, "[]()")
    buffer.select(after - 1, after - 1)


def insert_prefix_for_blocks(
    buffer: TextBuffer, prefix: str, start_position: int = 0
) -> None:
    """Insert a prefix at the given offset of every selected block."""
    for number in buffer.selected_blocks():
        buffer.insert(buffer.block_position(number) + start_position, prefix)


def create_numbered_list(buffer: TextBuffer, marker: str) -> None:
    """Number the selected blocks from 1 using the given marker."""
    for number, block in enumerate(buffer.selected_blocks(), start=1):
        buffer.insert(buffer.block_position(block), f"{number}{marker} ")


def _strip_marker(buffer: TextBuffer, block: int, pattern: re.Pattern, count: int) -> None:
    text = buffer.block_text(block)
    if pattern.match(text):
        position = buffer.block_position(block) + _first_non_whitespace(text)
        _delete_chars(buffer, position, count)


def remove_bullet_list(buffer: TextBuffer, block: int) -> None:
    """Remove a bullet marker from the start of a block."""
    _strip_marker(buffer, block, _BULLET_LIST_RE, 2)


def remove_numbered_list(buffer: TextBuffer, block: int) -> None:
    """Remove a numbered list marker from the start of a block."""
    _strip_marker(buffer, block, _NUMBERED_LIST_RE, 3)


def remove_task_list(buffer: TextBuffer, block: int) -> None:
    """Remove a task list marker from the start of a block."""
    _strip_marker(buffer, block, _TASK_LIST_RE, 6)


def _insert_at_content(buffer: TextBuffer, block: int, text: str) -> int:
    """Insert text before a block's first non-whitespace character."""
    offset = _first_non_whitespace(buffer.block_text(block))
    buffer.insert(buffer.block_position(block) + offset, text)
    return offset


def toggle_bullet_list(buffer: TextBuffer) -> None:
    """Add or remove a "- " bullet marker on each selected block."""
    for block in buffer.selected_blocks():
        remove_task_list(buffer, block)
        if not _BULLET_LIST_RE.match(buffer.block_text(block)):
            remove_numbered_list(buffer, block)
            _insert_at_content(buffer, block, "- ")
        else:
            remove_bullet_list(buffer, block)


def toggle_numbered_list(buffer: TextBuffer) -> None:
    """Add or remove numbering, restarting the count for each deeper indent."""
    last_indent = 0
    number_on_indent: Dict[int, int] = {}
    for block in buffer.selected_blocks():
        if not _NUMBERED_LIST_RE.match(buffer.block_text(block)):
            remove_task_list(buffer, block)
            remove_bullet_list(buffer, block)
            indent = _first_non_whitespace(buffer.block_text(block))
            if indent > last_indent or number_on_indent.get(indent, 0) == 0:
                number_on_indent[indent] = 1
            buffer.insert(
                buffer.block_position(block) + indent, f"{number_on_indent[indent]}. "
            )
            last_indent = indent
            number_on_indent[indent] += 1
        else:
            remove_numbered_list(buffer, block)


def toggle_task_list(buffer: TextBuffer) -> None:
    """Add or remove a "- [ ] " task marker on each selected block."""
    for block in buffer.selected_blocks():
        if not _TASK_LIST_RE.match(buffer.block_text(block)):
            remove_bullet_list(buffer, block)
            remove_numbered_list(buffer, block)
            _insert_at_content(buffer, block, "- [ ] ")
        else:
            remove_task_list(buffer, block)


def remove_blockquote(buffer: TextBuffer) -> None:
    """Remove a leading '>' and one following space from each selected block."""
    last_block = buffer.block_count() - 1
    for block in buffer.selected_blocks():
        position = buffer.block_position(block)
        text = buffer.text
        if position >= len(text) or text[position] != ">":
            continue
        # A bare '>' must not let the newline after it be deleted as whitespace.
        if block != last_block and buffer.block_text(block) == ">":
            buffer.insert(position + 1, " ")
        buffer.remove(position, position + 1)
        text = buffer.text
        if position < len(text) and text[position].isspace():
            buffer.remove(position, position + 1)


def toggle_task_complete(buffer: TextBuffer) -> bool:
    """Check or uncheck each selected task list item."""
    for block in buffer.selected_blocks():
        if buffer.block_state(block).kind != BlockState.TASK_LIST:
            continue
        text = buffer.block_text(block)
        match = _TASK_LIST_RE.match(text)
        if not match:
            continue
        replacement = " " if match.group(1) == "x" else "x"
        index = text.find(" [")
        index = index + 2 if index >= 0 else 0
        position = buffer.block_position(block) + index
        _delete_chars(buffer, position, 1)
        buffer.insert(position, replacement)
    return True