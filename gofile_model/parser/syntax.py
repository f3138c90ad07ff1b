"""
Go front end.

Uses tree-sitter and tree-sitter-go to build the syntax tree consumed
by the type converter.
"""

from __future__ import annotations

from typing import Any

import tree_sitter_go as ts_go
from tree_sitter import Language, Node, Parser

from ..errors import SyntaxTreeError

GO_LANGUAGE = Language(ts_go.language())


class GoSyntaxParser:
    """Parses Go source code into a tree-sitter tree.

    A tree-sitter Parser is not safe to share between threads, each
    instance owns its own.
    """

    def __init__(self):
        self._parser = Parser(GO_LANGUAGE)

    def parse(self, source: bytes, filename: str = "") -> Any:
        """Parse Go source code.

        Args:
            source: Go source code as UTF-8 bytes
            filename: Name used in error messages

        Returns:
            tree-sitter Tree object

        Raises:
            SyntaxTreeError: If the code contains syntax errors
        """
        tree = self._parser.parse(source)

        if tree.root_node.has_error:
            errors = self._find_errors(tree.root_node)
            location = filename or "<text>"
            if errors:
                first_error = errors[0]
                line = first_error.start_point[0] + 1
                snippet = source[first_error.start_byte : first_error.end_byte].decode("utf-8", errors="replace")
                raise SyntaxTreeError(f"{location}:{line}: syntax error near '{snippet[:50]}'")
            raise SyntaxTreeError(f"{location}: syntax error")

        return tree

    def _find_errors(self, node: Node) -> list[Node]:
        """Find ERROR and missing nodes in the tree, in source order."""
        errors = []
        if node.type == "ERROR" or node.is_missing:
            errors.append(node)
        for child in node.children:
            if child.has_error or child.is_missing:
                errors.extend(self._find_errors(child))
        return errors
