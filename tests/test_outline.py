import bisect

import pytest

from quillmark.outline import Outline, OutlineEntry, heading_label

POSITIONS = [0, 14, 30, 52]


def _outline(positions=POSITIONS):
    outline = Outline()
    outline.reload((1, f"# H{i}", p) for i, p in enumerate(positions))
    return outline


def test_atx_heading_label():
    assert heading_label(1, "# Title") == "    Title"


def test_closed_atx_heading_label_is_indented_by_level():
    assert heading_label(2, "## Sub ##") == "        Sub"


def test_setext_heading_label():
    assert heading_label(1, "Title") == "   Title"


@pytest.mark.parametrize("text", ["# Words here", "### Words here ###", "  Words here  "])
def test_label_keeps_heading_text(text):
    for level in (1, 2, 3):
        assert heading_label(level, text).strip() == "Words here"


def test_deeper_levels_are_longer():
    labels = [heading_label(level, "# x") for level in range(1, 5)]
    assert labels == sorted(labels, key=len)
    assert len(set(map(len, labels))) == len(labels)


def test_reload_skips_missing_lines_and_replaces_entries():
    outline = _outline()
    assert len(outline) == len(POSITIONS)
    outline.reload([(1, "# A", 3), (2, "## B", None), (2, "## C", 40)])
    assert [entry.position for entry in outline] == [3, 40]
    assert outline[0] == OutlineEntry(heading_label(1, "# A"), 3)
    assert outline[1].label.strip() == "C"


def test_find_heading_exact():
    outline = _outline()
    for row, position in enumerate(POSITIONS):
        assert outline.find_heading(position, True) == row
    assert outline.find_heading(15, True) == -1


@pytest.mark.parametrize("position", [-5, 1, 13, 14, 20, 31, 52, 60])
def test_find_heading_insertion_point(position):
    outline = _outline()
    assert outline.find_heading(position, False) == bisect.bisect_left(POSITIONS, position)


def test_find_heading_on_empty_outline():
    outline = Outline()
    assert outline.find_heading(5, True) == -1
    assert outline.find_heading(5, False) == bisect.bisect_left([], 5)
    assert outline.current_row(5) is None


@pytest.mark.parametrize("position", [0, 1, 14, 29, 30, 51, 52, 100])
def test_current_row_is_section_start(position):
    outline = _outline()
    assert outline.current_row(position) == bisect.bisect_right(POSITIONS, position) - 1


def test_current_row_before_first_heading():
    outline = _outline([10, 20])
    assert outline.current_row(5) is None
    assert outline.current_row(-1) is None
    assert outline.current_row(10) == 0