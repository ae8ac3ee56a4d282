import pytest

from quillmark.buffer import BlockState, TextBuffer

SAMPLE = "one\ntwo\n\nfour"


def test_blocks_follow_newlines():
    buffer = TextBuffer(SAMPLE)
    assert buffer.block_count() == SAMPLE.count("\n") + 1
    assert [buffer.block_text(n) for n in range(buffer.block_count())] == SAMPLE.split("\n")
    assert buffer.text == SAMPLE
    assert len(buffer) == len(SAMPLE)


def test_empty_buffer_has_one_empty_block():
    buffer = TextBuffer()
    assert buffer.block_count() == 1
    assert buffer.block_text(0) == ""
    assert buffer.block_at(0) == 0


def test_block_positions_round_trip():
    buffer = TextBuffer(SAMPLE)
    for number in range(buffer.block_count()):
        start = buffer.block_position(number)
        assert buffer.block_at(start) == number
        text = buffer.block_text(number)
        assert SAMPLE[start:start + len(text)] == text
        assert buffer.block_at(start + len(text)) == number


def test_out_of_range_positions_raise():
    buffer = TextBuffer(SAMPLE)
    with pytest.raises(ValueError):
        buffer.block_at(len(SAMPLE) + 1)
    with pytest.raises(ValueError):
        buffer.block_at(-1)
    with pytest.raises(ValueError):
        buffer.select(0, len(SAMPLE) + 1)
    with pytest.raises(IndexError):
        buffer.block_text(buffer.block_count())
    with pytest.raises(ValueError):
        buffer.remove(3, 1)


def test_insert_then_remove_restores_text():
    buffer = TextBuffer(SAMPLE)
    end = buffer.insert(5, "abc\nxyz")
    assert end == 5 + len("abc\nxyz")
    assert buffer.text == SAMPLE[:5] + "abc\nxyz" + SAMPLE[5:]
    buffer.remove(5, end)
    assert buffer.text == SAMPLE


def test_insert_split_keeps_state_of_original_block():
    buffer = TextBuffer(SAMPLE)
    buffer.set_block_state(1, BlockState.NUMBERED_LIST)
    buffer.set_block_state(2, BlockState.CODE_BLOCK)
    buffer.insert(buffer.block_position(1) + 1, "x\ny")
    assert buffer.block_state(1) == BlockState.NUMBERED_LIST
    assert buffer.block_state(2) == BlockState.UNKNOWN
    assert buffer.block_state(3) == BlockState.CODE_BLOCK


def test_remove_merges_blocks_keeping_first_state():
    buffer = TextBuffer(SAMPLE)
    buffer.set_block_state(0, BlockState.TASK_LIST)
    buffer.set_block_state(3, BlockState.PARAGRAPH)
    buffer.remove(2, buffer.block_position(2))
    assert buffer.text == SAMPLE[:2] + SAMPLE[SAMPLE.index("\n\n") + 1:]
    assert buffer.block_state(0) == BlockState.TASK_LIST
    assert buffer.block_state(buffer.block_count() - 1) == BlockState.PARAGRAPH


def test_cursor_follows_insertions():
    buffer = TextBuffer(SAMPLE)
    buffer.select(5, 5)
    buffer.insert(2, "ab")
    assert buffer.position == 5 + len("ab")
    buffer.insert(buffer.position, "z")
    assert buffer.position == 5 + len("abz")
    buffer.insert(len(buffer), "tail")
    assert buffer.position == 5 + len("abz")


def test_cursor_collapses_into_removed_range():
    buffer = TextBuffer(SAMPLE)
    buffer.select(1, 9)
    buffer.remove(2, 5)
    assert buffer.anchor == 1
    assert buffer.position == 9 - (5 - 2)
    buffer.select(4, 4)
    buffer.remove(2, 6)
    assert buffer.position == 2


def test_selection_is_ordered():
    buffer = TextBuffer(SAMPLE)
    buffer.select(6, 2)
    assert buffer.has_selection()
    assert buffer.selection_range() == (2, 6)
    assert buffer.selected_text() == SAMPLE[2:6]
    buffer.select(3, 3)
    assert not buffer.has_selection()
    assert buffer.selected_text() == ""


def test_selected_blocks():
    buffer = TextBuffer(SAMPLE)
    buffer.select(1, buffer.block_position(3))
    assert list(buffer.selected_blocks()) == [0, 1, 2, 3]
    buffer.select(buffer.block_position(1) + 1, buffer.block_position(1) + 1)
    assert list(buffer.selected_blocks()) == [1]


def test_position_in_block():
    buffer = TextBuffer(SAMPLE)
    start = buffer.block_position(3)
    buffer.select(start + 2, start + 2)
    assert buffer.position_in_block() == 2


def test_block_state_kind_and_blockquote_flag():
    state = BlockState.NUMBERED_LIST | BlockState.BLOCKQUOTE
    assert state.kind == BlockState.NUMBERED_LIST
    assert state.in_blockquote
    assert not BlockState.CODE_BLOCK.in_blockquote
    buffer = TextBuffer("a")
    buffer.set_block_state(0, int(state))
    assert buffer.block_state(0) == state