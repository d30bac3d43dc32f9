"""
Tree-sitter infrastructure for the source parser.
Provides grammar loading, query management, and offset utilities.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from tree_sitter import Tree, Node, Parser, Query, Language, QueryCursor

from .queries import QUERIES


class SourceDocument:
    """
    Wrapper for a Tree-sitter parsed TypeScript/JavaScript document
    with named queries.
    """

    def __init__(self, text: str, ext: str = "ts"):
        self.text = text
        self.ext = ext
        self.tree: Optional[Tree] = None
        self._text_bytes = text.encode('utf-8')
        self._query_cache: Dict[str, Query] = {}
        self._parse()

    def get_language(self) -> Language:
        import tree_sitter_typescript as tsts
        if self.ext in ("tsx", "jsx"):
            # TS and TSX have two different grammars in one package
            return Language(tsts.language_tsx())
        # JavaScript is parsed with the TypeScript grammar as well
        return Language(tsts.language_typescript())

    def _parse(self):
        """Parse the document with Tree-sitter."""
        parser = Parser(self.get_language())
        self.tree = parser.parse(self._text_bytes)

    @property
    def root_node(self) -> Node:
        """Get the root node of the parsed tree."""
        if not self.tree:
            raise RuntimeError("Document not parsed")
        return self.tree.root_node

    def query(self, query_name: str) -> List[Tuple[Node, str]]:
        """
        Execute a named query on the document.

        Args:
            query_name: Name of the query to execute

        Returns:
            List of (node, capture_name) tuples in document order

        Raises:
            ValueError: If query is not defined
        """
        if query_name not in QUERIES:
            raise ValueError(f"Unknown query: {query_name}")

        if query_name not in self._query_cache:
            self._query_cache[query_name] = Query(self.get_language(), QUERIES[query_name])

        cursor = QueryCursor(self._query_cache[query_name])

        results = []
        for _pattern_index, captures in cursor.matches(self.root_node):
            for capture_name, nodes in captures.items():
                for node in nodes:
                    results.append((node, capture_name))

        results.sort(key=lambda item: item[0].start_byte)
        return results

    def has_error(self) -> bool:
        """Check if the tree has any syntax errors."""
        if not self.tree:
            return True
        return self.root_node.has_error

    def get_node_text(self, node: Node) -> str:
        """Get text content for a node."""
        return self._text_bytes[node.start_byte:node.end_byte].decode('utf-8')

    def get_node_range(self, node: Node) -> Tuple[int, int]:
        """Get char range for a node."""
        start_char = self.byte_to_char_position(node.start_byte)
        end_char = self.byte_to_char_position(node.end_byte)
        return start_char, end_char

    def get_column(self, node: Node) -> int:
        """Character column (0-based) where the node starts."""
        start_char = self.byte_to_char_position(node.start_byte)
        line_start = self.text.rfind("\n", 0, start_char) + 1
        return start_char - line_start

    def byte_to_char_position(self, byte_pos: int) -> int:
        """
        Correctly convert byte position to character position in Unicode text.
        Guarantees that if position points to the middle of a multi-byte character,
        returns position before that character.
        """
        if byte_pos <= 0:
            return 0
        if byte_pos >= len(self._text_bytes):
            return len(self.text)

        # Search for longest valid slice
        # (UTF-8 guarantees maximum 4 bytes per character)
        start = max(0, byte_pos - 4)
        for end in range(byte_pos, start - 1, -1):
            try:
                decoded = self._text_bytes[:end].decode('utf-8')
                return len(decoded)
            except UnicodeDecodeError:
                continue
        return 0

    @staticmethod
    def named_children(node: Node) -> List[Node]:
        """Named children without comments."""
        return [child for child in node.named_children if child.type != "comment"]


__all__ = ["SourceDocument", "Node"]
