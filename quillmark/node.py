"""Markdown syntax tree nodes with source positions."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterator, Optional


class NodeType(IntEnum):
    """Kinds of Markdown nodes; block kinds precede inline kinds."""

    INVALID = 0

    # Block types
    DOCUMENT = 1
    BLOCK_QUOTE = 2
    NUMBERED_LIST = 3
    BULLET_LIST = 4
    TASK_LIST_ITEM = 5
    LIST_ITEM = 6
    CODE_BLOCK = 7
    HTML_BLOCK = 8
    PARAGRAPH = 9
    HEADING = 10
    THEMATIC_BREAK = 11
    FOOTNOTE_DEFINITION = 12
    TABLE = 13
    TABLE_HEADING = 14
    TABLE_ROW = 15
    TABLE_CELL = 16

    # Inline types
    TEXT = 17
    SOFTBREAK = 18
    LINEBREAK = 19
    CODE = 20
    HTML_INLINE = 21
    EMPH = 22
    STRONG = 23
    LINK = 24
    IMAGE = 25
    STRIKETHROUGH = 26
    FOOTNOTE_REFERENCE = 27

    FIRST_BLOCK_TYPE = 1
    LAST_BLOCK_TYPE = 16
    FIRST_INLINE_TYPE = 17
    LAST_INLINE_TYPE = 27


_DISPLAY_NAMES = {
    NodeType.INVALID: "Invalid",
    NodeType.DOCUMENT: "Document",
    NodeType.BLOCK_QUOTE: "BlockQuote",
    NodeType.NUMBERED_LIST: "NumberedList",
    NodeType.BULLET_LIST: "BulletList",
    NodeType.TASK_LIST_ITEM: "TaskList",
    NodeType.LIST_ITEM: "ListItem",
    NodeType.CODE_BLOCK: "CodeBlock",
    NodeType.HTML_BLOCK: "HtmlBlock",
    NodeType.PARAGRAPH: "Paragraph",
    NodeType.HEADING: "Heading",
    NodeType.THEMATIC_BREAK: "ThematicBreak",
    NodeType.FOOTNOTE_DEFINITION: "FootnoteDefinition",
    NodeType.TABLE: "Table",
    NodeType.TABLE_HEADING: "TableHeading",
    NodeType.TABLE_ROW: "TableRow",
    NodeType.TABLE_CELL: "TableCell",
    NodeType.TEXT: "Text",
    NodeType.SOFTBREAK: "Softbreak",
    NodeType.LINEBREAK: "Linebreak",
    NodeType.CODE: "Code",
    NodeType.HTML_INLINE: "HtmlInline",
    NodeType.EMPH: "Emph",
    NodeType.STRONG: "Strong",
    NodeType.LINK: "Link",
    NodeType.IMAGE: "Image",
    NodeType.STRIKETHROUGH: "Strikethrough",
    NodeType.FOOTNOTE_REFERENCE: "FootnoteReference",
}


def node_type_name(node_type: int) -> str:
    """Return the display name of a node type, or its number if unknown."""
    try:
        return _DISPLAY_NAMES[NodeType(node_type)]
    except (ValueError, KeyError):
        return str(int(node_type))


class MarkdownNode:
    """A node of a Markdown syntax tree, linked to its parent and siblings."""

    def __init__(
        self,
        type: NodeType = NodeType.INVALID,
        start_line: int = 0,
        end_line: int = 0,
        position: int = 0,
        length: int = 0,
        text: str = "",
        heading_level: int = 0,
        fence_char: str = "",
        list_start: int = 0,
    ) -> None:
        self.type = NodeType(type)
        self.start_line = start_line
        self.end_line = end_line
        self.position = position
        self.length = length
        if self.type == NodeType.HEADING:
            text = " ".join(text.split())
        self.text = text
        self.heading_level = heading_level
        self.fence_char = "" if fence_char == "\0" else fence_char
        self.list_start = list_start

        self.parent: Optional[MarkdownNode] = None
        self.previous: Optional[MarkdownNode] = None
        self.next: Optional[MarkdownNode] = None
        self.first_child: Optional[MarkdownNode] = None
        self.last_child: Optional[MarkdownNode] = None

    def append_child(self, node: Optional[MarkdownNode]) -> None:
        """Append a node as the last child of this node."""
        if node is None:
            return
        node.parent = self
        node.next = None
        if self.first_child is None:
            self.first_child = node
            self.last_child = node
            node.previous = None
        else:
            assert self.last_child is not None
            self.last_child.next = node
            node.previous = self.last_child
            self.last_child = node

    def children(self) -> Iterator[MarkdownNode]:
        """Yield the children of this node in order."""
        child = self.first_child
        while child is not None:
            yield child
            child = child.next

    def is_invalid(self) -> bool:
        return self.type == NodeType.INVALID

    def is_block_type(self) -> bool:
        return NodeType.FIRST_BLOCK_TYPE <= self.type <= NodeType.LAST_BLOCK_TYPE

    def is_inline_type(self) -> bool:
        return NodeType.FIRST_INLINE_TYPE <= self.type <= NodeType.LAST_INLINE_TYPE

    def is_setext_heading(self) -> bool:
        """A heading spanning more than one line is a setext heading."""
        return (
            self.type == NodeType.HEADING
            and (self.end_line - self.start_line + 1) > 1
        )

    def is_atx_heading(self) -> bool:
        return self.type == NodeType.HEADING and not self.is_setext_heading()

    def is_inside_blockquote(self) -> bool:
        """Return whether any ancestor of this node is a block quote."""
        ancestor = self.parent
        while ancestor is not None:
            if ancestor.type == NodeType.BLOCK_QUOTE:
                return True
            ancestor = ancestor.parent
        return False

    def is_fenced_code_block(self) -> bool:
        return self.fence_char != ""

    def is_numbered_list_item(self) -> bool:
        return (
            self.type == NodeType.LIST_ITEM
            and self.parent is not None
            and self.parent.type == NodeType.NUMBERED_LIST
        )

    def is_bullet_list_item(self) -> bool:
        return (
            self.type == NodeType.LIST_ITEM
            and self.parent is not None
            and self.parent.type == NodeType.BULLET_LIST
        )

    def list_item_number(self) -> int:
        """Return the list start number plus this item's 1-based index."""
        count = 1
        sibling = self.previous
        while sibling is not None and sibling is not self.parent:
            count += 1
            sibling = sibling.previous
        return self.list_start + count

    def __str__(self) -> str:
        text = self.text or ""
        left = min(20, len(text))
        excerpt = text[:left] + "..." + text[left:]
        return (
            f"> [lines {self.start_line} - {self.end_line}]"
            f"[col {self.position}, len {self.length}] "
            f"{node_type_name(self.type)} -> {excerpt}"
        )

    def __repr__(self) -> str:
        return (
            f"MarkdownNode(type={self.type.name}, start_line={self.start_line}, "
            f"end_line={self.end_line}, position={self.position}, "
            f"length={self.length}, text={self.text!r})"
        )