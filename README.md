# quillmark

quillmark holds the editing logic of a Markdown writing tool. It has no GUI. All
edits work on a plain in-memory text buffer. You can use it to build an editor, or
to script the edits such an editor makes.

## Modules

### `quillmark.node`

- `MarkdownNode` is a node of a Markdown syntax tree. It carries its start and end
  lines, its column position, its length and its text.
- `NodeType` lists the node kinds.

A node has these helpers:

- `append_child()` and `children()`
- `is_block_type()` and `is_inline_type()`
- `is_setext_heading()` and `is_atx_heading()`
- `is_inside_blockquote()`
- `is_fenced_code_block()`
- `is_numbered_list_item()` and `is_bullet_list_item()`
- `list_item_number()`

`node_type_name()` gives the display name of a node type.

### `quillmark.buffer`

- `TextBuffer` is text split into newline-separated blocks. It keeps a cursor and a
  selection, given as `anchor` and `position`. Its methods are:
  - `insert()` and `remove()`
  - `select()`, `selected_text()` and `selected_blocks()`
  - `block_at()` and `block_position()`
  - `block_state()` and `set_block_state()`
- `BlockState` is the Markdown state of one block. It has a list, code block or other
  kind, and a flag for text inside a block quote.

### `quillmark.outline`

- `Outline` is built with `reload()` from (level, line text, line position) triples.
- `find_heading()` runs a binary search for the heading at a position.
- `current_row()` returns the heading whose section holds a position.
- `heading_label()` builds the indented label for a heading line.

### `quillmark.formatting`

Commands that act on the cursor or the selection:

- Inline markup: `bold`, `italic`, `strikethrough`, `insert_comment`, `insert_link`
  and `insert_formatting_markup`.
- Bullet lists: `toggle_bullet_list`.
- Numbered lists: `toggle_numbered_list`. Numbering restarts at each deeper indent.
  `create_numbered_list` uses a marker of your choice.
- Task lists: `toggle_task_list` and `toggle_task_complete`.
- Prefixes and block quotes: `insert_prefix_for_blocks` and `remove_blockquote`.

### `quillmark.indentation`

- `indent_text()` knows about lists. An empty numbered item restarts at 1. An empty
  bullet item can cycle its marker `*` → `-` → `+`. Other text is indented to the
  next tab stop.
- `unindent_text()` removes one tab, or up to the tab width in spaces, from each
  selected line.

### `quillmark.keys`

- `AutoMatch` handles paired characters: quotes, brackets, `*`, `_`, `` ` `` and
  `<>`. Its methods are:
  - `insert_paired()` inserts a pair.
  - `skip_closing()` steps over a closing character.
  - `whitespace_in_empty_match()` handles whitespace typed inside an empty pair.
  - `delete_pair()` deletes both characters of a pair.
- `handle_carriage_return()` continues numbered lists, bullet lists, task lists and
  block quotes. On an empty item it ends the list.
- `handle_backspace()` clears an empty list item or block quote marker. It returns
  `False` when a plain deletion is left to the caller.
- `prior_indentation()` returns the leading whitespace of the cursor's line.

### `quillmark.editor`

- `TypingMonitor` reports when typing resumes and when it pauses.
- `scaled_typing_interval()` gives the delay between pause checks for a document of
  a given size.
- `paper_margin()`, together with `EditorWidth`, gives viewport margins that center
  the text.
- `adjust_font_size()` changes a point size and never goes below 1.
- `image_link_for_drop()` builds a Markdown image link for a dropped image file.
- `inside_block_area()`, `at_block_area_start()`, `at_block_area_end()` and
  `block_areas()` find the runs of code block or block quote lines, as `BlockType`
  values.
- `FocusMode` names the focus modes.

## What it does not do

quillmark does not parse Markdown. You build `MarkdownNode` trees yourself. You also
set each block's `BlockState` yourself, with `TextBuffer.set_block_state()`.

It does not draw anything and has no window or command. It does no spell checking,
and it does not load or save files.

## Installing

```
pip install .
```

To run the tests, install the `test` extra and then run pytest:

```
pip install .[test]
pytest
```

## Example

```python
from quillmark.buffer import TextBuffer
from quillmark.formatting import bold, toggle_bullet_list

buffer = TextBuffer("first line\nsecond line")
buffer.select(0, len(buffer))
toggle_bullet_list(buffer)

buffer.select(2, 7)   # "first"
bold(buffer)

print(buffer.text)
# - **first** line
# - second line
```