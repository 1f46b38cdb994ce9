# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

from dataclasses import dataclass, field

from loguru import logger
from tree_sitter import Node, Tree
from tree_sitter_language_pack import get_parser

from ..exceptions import syntax_error_at, wrapper_escaped

LANGUAGE = "javascript"

# The wrapper puts the cell on the line after the arrow function header.
WRAPPER_HEADER_LINES = 1


class OffsetMap:
    """Maps tree-sitter byte offsets onto character offsets of the parsed text."""

    def __init__(self, text: str):
        self._table: list[int] | None = None
        if not text.isascii():
            table: list[int] = []
            for index, char in enumerate(text):
                table.extend([index] * len(encode(char)))
            table.append(len(text))
            self._table = table

    def char_offset(self, byte_offset: int) -> int:
        if self._table is None:
            return byte_offset
        return self._table[byte_offset]


def encode(text: str) -> bytes:
    # lone surrogates are legal in Python strings, keep them addressable
    return text.encode("utf-8", errors="surrogatepass")


@dataclass(frozen=True)
class ParsedCell:
    """A parsed wrapped cell together with the wrapper's function body."""

    text: str
    tree: Tree = field(repr=False)
    function: Node = field(repr=False)
    body: Node = field(repr=False)
    offsets: OffsetMap = field(repr=False)

    @property
    def root(self) -> Node:
        return self.tree.root_node

    def start(self, node: Node) -> int:
        return self.offsets.char_offset(node.start_byte)

    def end(self, node: Node) -> int:
        return self.offsets.char_offset(node.end_byte)

    def span(self, node: Node) -> tuple[int, int]:
        return self.start(node), self.end(node)

    def node_text(self, node: Node) -> str:
        start, end = self.span(node)
        return self.text[start:end]

    def statements(self) -> list[Node]:
        """Top-level statements of the cell, comments excluded."""
        return [child for child in self.body.named_children if child.type != "comment"]


class CellParser:
    """Parses wrapped cells with the tree-sitter JavaScript grammar."""

    @classmethod
    def parse(cls, text: str) -> ParsedCell:
        """
        Parse a wrapped cell and locate the wrapper's body.

        Args:
            text: The cell source, already wrapped in the async arrow function

        Returns:
            ParsedCell for the text

        Raises:
            CellSyntaxError: if the grammar rejects the text, or the cell
                closes the wrapper early
        """
        parser = get_parser(LANGUAGE)
        tree = parser.parse(encode(text))
        root = tree.root_node

        if root.has_error:
            bad = cls._first_error(root)
            line = bad.start_point[0] - WRAPPER_HEADER_LINES + 1
            column = bad.start_point[1] + 1
            logger.debug(f"Parser rejected cell: {bad.type} at {bad.start_point}")
            offsets = OffsetMap(text)
            snippet = text[offsets.char_offset(bad.start_byte) :][:20]
            raise syntax_error_at(line, column, snippet)

        function = cls._find_wrapper(root)
        body = function.child_by_field_name("body")
        if body is None or body.type != "statement_block":
            raise wrapper_escaped()

        return ParsedCell(text, tree, function, body, OffsetMap(text))

    @staticmethod
    def _find_wrapper(root: Node) -> Node:
        # program > expression_statement > parenthesized_expression > arrow_function
        statements = [c for c in root.named_children if c.type != "comment"]
        if len(statements) != 1 or statements[0].type != "expression_statement":
            raise wrapper_escaped()

        node = statements[0].named_children[0]
        if node.type != "parenthesized_expression":
            raise wrapper_escaped()

        node = node.named_children[0]
        if node.type != "arrow_function":
            raise wrapper_escaped()
        return node

    @staticmethod
    def _first_error(node: Node) -> Node:
        """Depth-first search for the first ERROR or MISSING node."""
        stack = [node]
        while stack:
            current = stack.pop()
            if current.is_error or current.is_missing:
                return current
            if current.has_error:
                stack.extend(reversed(current.children))
        return node
