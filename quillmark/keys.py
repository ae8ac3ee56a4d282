"""Key handling for Markdown editing: auto-paired characters, Enter and Backspace."""

from __future__ import annotations

import re
from typing import Dict, Optional

from quillmark.buffer import BlockState, TextBuffer

_BLOCKQUOTE_RE = re.compile(r"^ {0,3}(>\s*)+")
_NUMBERED_LIST_RE = re.compile(r"^\s*([0-9]+)[.)]\s+")
_BULLET_LIST_RE = re.compile(r"^\s*[+*-]\s+")
_TASK_LIST_RE = re.compile(r"^\s*[-*+] \[([x ])\]\s+")
_EMPTY_BLOCKQUOTE_RE = re.compile(r"^ {0,3}(>\s*)+$")
_EMPTY_NUMBERED_LIST_RE = re.compile(r"^\s*([0-9]+)[.)]\s+$")
_EMPTY_BULLET_LIST_RE = re.compile(r"^\s*[+*-]\s+$")
_EMPTY_TASK_LIST_RE = re.compile(r"^\s*[-*+] \[([x ])\]\s+$")
_NUMBER_RE = re.compile(r"\d+")
_DIGIT_RE = re.compile(r"\d")
_BULLET_MARKER_RE = re.compile(r"[+*-]")

MARKUP_PAIRS: Dict[str, str] = {
    '"': '"',
    "'": "'",
    "(": ")",
    "[": "]",
    "{": "}",
    "*": "*",
    "_": "_",
    "`": "`",
    "<": ">",
}

# Pairs between which typed whitespace replaces the closing character.
NON_EMPTY_PAIRS: Dict[str, str] = {"*": "*", "_": "_", "<": ">"}

# Opening characters that are paired even right after non-whitespace.
_ALWAYS_PAIRED = "([{<"


def _cursor_block(buffer: TextBuffer) -> int:
    return buffer.block_at(buffer.position)


class AutoMatch:
    """Automatic insertion and removal of matching markup characters."""

    def __init__(self) -> None:
        self.enabled = True
        self.pairs: Dict[str, str] = dict(MARKUP_PAIRS)
        self._filter: Dict[str, bool] = {opening: True for opening in self.pairs}

    def set_enabled(self, enabled: bool) -> None:
        """Turn automatic matching on or off for all characters."""
        self.enabled = enabled

    def set_enabled_for(self, opening: str, enabled: bool) -> None:
        """Turn automatic matching on or off for one opening character."""
        self._filter[opening] = enabled

    def _active(self, opening: str) -> bool:
        return self._filter.get(opening, False)

    def insert_paired(self, buffer: TextBuffer, char: str) -> bool:
        """Insert an opening character with its closing partner.

        A selection within one line is surrounded by the pair and stays
        selected.  Without a selection the pair is inserted around the
        cursor only where the neighbouring characters allow it.
        Returns whether anything was inserted.
        """
        if not (self.enabled and char in self.pairs and self._active(char)):
            return False
        closing = self.pairs[char]

        if buffer.has_selection():
            start, end = buffer.selection_range()
            if buffer.block_at(start) != buffer.block_at(end):
                return False
            buffer.insert(start, char)
            buffer.insert(end + 1, closing)
            buffer.select(start + 1, end + 1)
            return True

        text = buffer.block_text(_cursor_block(buffer))
        cursor_offset = buffer.position_in_block()
        index = cursor_offset
        do_match = True

        if index > 0:
            index -= 1
            if not text[index].isspace() and char not in _ALWAYS_PAIRED:
                do_match = False

        at_block_end = cursor_offset == len(text)
        following = index + 1
        if not at_block_end and following < len(text) and not text[following].isspace():
            do_match = False

        if not do_match:
            return False

        position = buffer.position
        buffer.insert(position, char + closing)
        buffer.select(position + 1, position + 1)
        return True

    def skip_closing(self, buffer: TextBuffer, char: str) -> bool:
        """Step over a closing character typed where that character already is."""
        if not self.enabled or buffer.has_selection():
            return False
        openings = [opening for opening, closing in self.pairs.items() if closing == char]
        if not openings or not self._active(openings[0]):
            return False

        text = buffer.block_text(_cursor_block(buffer))
        offset = buffer.position_in_block()
        if offset < len(text) and text[offset] == char:
            position = buffer.position + 1
            buffer.select(position, position)
            return True
        return False

    def whitespace_in_empty_match(self, buffer: TextBuffer, whitespace: str) -> bool:
        """Replace the closing half of an empty emphasis or angle pair with whitespace."""
        text = buffer.block_text(_cursor_block(buffer))
        offset = buffer.position_in_block()
        if (
            text
            and 0 < offset < len(text)
            and text[offset - 1] in NON_EMPTY_PAIRS
            and text[offset] == NON_EMPTY_PAIRS[text[offset - 1]]
        ):
            position = buffer.position
            buffer.remove(position, position + 1)
            buffer.insert(position, whitespace)
            return True
        return False

    def delete_pair(self, buffer: TextBuffer) -> bool:
        """Delete both halves of a pair when the cursor sits between them."""
        if not self.enabled or buffer.has_selection():
            return False
        offset = buffer.position_in_block()
        if offset <= 0:
            return False
        text = buffer.block_text(_cursor_block(buffer))
        if offset >= len(text):
            return False
        if self.pairs.get(text[offset - 1]) == text[offset]:
            position = buffer.position
            buffer.remove(position - 1, position + 1)
            return True
        return False


def prior_indentation(buffer: TextBuffer) -> str:
    """Leading whitespace of the line holding the cursor."""
    text = buffer.block_text(_cursor_block(buffer))
    return text[: len(text) - len(text.lstrip())] if text.strip() else text


def _item_start(text: str, pattern: re.Pattern) -> Optional[re.Match]:
    return pattern.match(text)


def handle_carriage_return(buffer: TextBuffer) -> None:
    """Start a new line, continuing the current list, task list or block quote.

    An Enter on an empty list item ends the list instead.  Elsewhere the
    new line keeps the current line's indentation.
    """
    if buffer.has_selection():
        start, end = buffer.selection_range()
        buffer.remove(start, end)
        buffer.insert(start, "\n")
        return

    block = _cursor_block(buffer)
    text = buffer.block_text(block)
    state = buffer.block_state(block)
    kind = state.kind
    offset = buffer.position_in_block()
    end_list = False

    if offset < len(text):
        auto_insert = prior_indentation(buffer)[:offset]
    elif kind == BlockState.NUMBERED_LIST:
        match = _item_start(text, _NUMBERED_LIST_RE)
        auto_insert = match.group(0) if match else ""
        if auto_insert and match is not None:
            if len(text) == len(auto_insert):
                end_list = True
            else:
                number = int(match.group(1)) + 1
                auto_insert = _NUMBER_RE.sub(str(number), auto_insert)
        else:
            auto_insert = prior_indentation(buffer)
    elif kind == BlockState.TASK_LIST:
        match = _item_start(text, _TASK_LIST_RE)
        auto_insert = match.group(0) if match else ""
        if len(text) == len(auto_insert):
            end_list = True
        else:
            auto_insert = auto_insert.replace("x", " ")
    elif kind == BlockState.BULLET_POINT_LIST:
        match = _item_start(text, _BULLET_LIST_RE)
        auto_insert = match.group(0) if match else ""
        if not auto_insert:
            auto_insert = prior_indentation(buffer)
        elif len(text) == len(auto_insert):
            end_list = True
    elif state.in_blockquote:
        match = _item_start(text, _BLOCKQUOTE_RE)
        auto_insert = match.group(0) if match else ""
    else:
        auto_insert = prior_indentation(buffer)

    if end_list:
        indentation = prior_indentation(buffer)
        start = buffer.block_position(block)
        buffer.remove(start, start + len(text))
        buffer.insert(start, indentation)
        auto_insert = ""

    buffer.insert(buffer.position, "\n" + auto_insert)


def handle_backspace(buffer: TextBuffer, auto_match: Optional[AutoMatch] = None) -> bool:
    """Handle Backspace for empty list items, block quotes and matched pairs.

    Returns whether the key was handled; when it was not, a plain
    one-character deletion is left to the caller.
    """
    if buffer.has_selection():
        return False

    block = _cursor_block(buffer)
    text = buffer.block_text(block)
    state = buffer.block_state(block)
    kind = state.kind
    backtrack = -1

    if kind == BlockState.NUMBERED_LIST:
        if _EMPTY_NUMBERED_LIST_RE.match(text):
            digit = _DIGIT_RE.search(text)
            backtrack = digit.start() if digit else -1
    elif kind == BlockState.TASK_LIST:
        if _EMPTY_BULLET_LIST_RE.match(text) or _EMPTY_TASK_LIST_RE.match(text):
            marker = _BULLET_MARKER_RE.search(text)
            backtrack = marker.start() if marker else -1
    elif state.in_blockquote:
        if _EMPTY_BLOCKQUOTE_RE.match(text):
            backtrack = text.rfind(">")
    elif auto_match is not None and auto_match.delete_pair(buffer):
        return True

    if backtrack >= 0:
        start = buffer.block_position(block)
        buffer.remove(start + backtrack, start + len(text))
        return True
    return False