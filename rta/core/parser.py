"""
RTA — TypeScript / TSX source parser using tree-sitter.
"""

from __future__ import annotations

import tree_sitter_typescript as tstypescript
from tree_sitter import Language, Node, Parser, Tree


TSX_LANGUAGE = Language(tstypescript.language_tsx())
TS_LANGUAGE = Language(tstypescript.language_typescript())

# Plain .ts files use the TypeScript grammar because `<T>value` casts are not
# valid TSX. Everything else (.tsx, .js, .jsx) goes through TSX.
_TS_ONLY_SUFFIXES = (".ts", ".mts", ".cts")


class SourceParser:
    """Thin wrapper around tree-sitter for TypeScript and TSX source code."""

    def language_for(self, file_path: str) -> Language:
        if file_path.endswith(_TS_ONLY_SUFFIXES):
            return TS_LANGUAGE
        return TSX_LANGUAGE

    def parse(self, code: str, file_path: str) -> tuple[Tree, bytes]:
        """Parse source and return (tree, source_bytes).

        Raises ValueError if the code cannot be parsed cleanly.
        """
        source_bytes = code.encode("utf-8")
        parser = Parser(self.language_for(file_path))
        tree = parser.parse(source_bytes)
        if tree.root_node.has_error:
            raise ValueError(f"Failed to parse {file_path}")
        return tree, source_bytes


def node_text(node: Node, source: bytes) -> str:
    """Extract source text for a node."""
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def node_position(node: Node, source: bytes) -> tuple[int, int]:
    """1-indexed (line, column) of a node, with the column counted in characters."""
    row = node.start_point[0]
    line_start = source.rfind(b"\n", 0, node.start_byte) + 1
    column = len(source[line_start:node.start_byte].decode("utf-8", errors="replace"))
    return row + 1, column + 1


def walk(node: Node):
    """Depth-first pre-order traversal of a subtree."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))
