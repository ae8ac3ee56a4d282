"""Markdown editing logic on a plain text buffer: nodes, formatting, indentation, keys, outlines."""

__version__ = "2.1.2"