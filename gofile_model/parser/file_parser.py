"""
Go source file parser.

Builds a CompilationUnit from Go source text: package name, imports and
every top-level type declaration with its tags.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from tree_sitter import Node

from ..errors import ConversionError
from ..model.nodes import CompilationUnit, Declaration, Import, Module
from ..tags import TagSet, scan_tags
from ..utils import unquote
from . import module as go_module
from .converter import TypeConverter
from .syntax import GoSyntaxParser

logger = logging.getLogger(__name__)

# Compiler directives are not part of a comment's text (//go:generate, //line ...)
_DIRECTIVE_PATTERN = re.compile(r"(?:line |extern |export |[a-z0-9]+:[a-z0-9])")


def comment_lines(comments: list[str]) -> list[str]:
    """Split comments into text lines with comment markers and directives removed."""
    lines: list[str] = []
    for comment in comments:
        if comment.startswith("//"):
            body = comment[2:]
            if _DIRECTIVE_PATTERN.match(body):
                continue
            lines.append(body)
        else:
            lines.extend(comment[2:-2].split("\n"))
    return lines


def parse_directives(tags: TagSet, comments: list[str]) -> None:
    """Scan each comment line for tags, later lines overwrite earlier keys."""
    for line in comment_lines(comments):
        tags.update(scan_tags(line.strip()))


class GoFileParser:
    """Parses Go sources into compilation units."""

    def __init__(self):
        self._syntax = GoSyntaxParser()

    def parse_text(self, content: str, filename: str = "", module: Module | None = None) -> CompilationUnit:
        """
        Parse Go source text.

        Args:
            content: Go source code
            filename: File name stored in the unit and used in error messages
            module: Module the file belongs to

        Returns:
            CompilationUnit with imports and declarations

        Raises:
            SyntaxTreeError: If the source contains syntax errors
            ConversionError: If a declaration cannot be converted
        """
        source = content.encode("utf-8")
        tree = self._syntax.parse(source, filename)
        return self.convert_tree(tree.root_node, content, filename, module)

    def parse_file(self, filename: str | Path, resolve_module: bool = False) -> CompilationUnit:
        """
        Read and parse a Go source file.

        Args:
            filename: Path of the file
            resolve_module: Whether to locate the go.mod file owning the file

        Returns:
            CompilationUnit of the file

        Raises:
            OSError: If the file cannot be read
            ModuleResolutionError: If module resolution was requested and failed
        """
        path = Path(filename).absolute()
        content = path.read_bytes().decode("utf-8", errors="replace")

        module = Module()
        if resolve_module:
            module = go_module.resolve_module(path)

        logger.debug("Parsing %s (module %s)", path, module.full_name or "<none>")
        return self.parse_text(content, str(path), module)

    def convert_tree(self, root: Node, content: str, filename: str = "", module: Module | None = None) -> CompilationUnit:
        """
        Convert an already built syntax tree.

        Args:
            root: Root node of the tree (source_file)
            content: The source text the tree was built from
            filename: File name stored in the unit
            module: Module the file belongs to

        Returns:
            CompilationUnit of the file
        """
        converter = TypeConverter(content.encode("utf-8"))
        unit = CompilationUnit(
            module=module if module is not None else Module(),
            filename=filename,
            source=content,
        )

        for node in root.named_children:
            if node.type == "package_clause":
                for child in node.named_children:
                    if child.type == "package_identifier":
                        unit.package = converter.text(child)
            elif node.type == "import_declaration":
                unit.imports.extend(self._parse_imports(node, converter))
            elif node.type == "type_declaration":
                unit.declarations.extend(self._parse_type_declaration(node, converter))

        return unit

    def _parse_imports(self, node: Node, converter: TypeConverter) -> list[Import]:
        specs: list[Node] = []
        for child in node.named_children:
            if child.type == "import_spec":
                specs.append(child)
            elif child.type == "import_spec_list":
                specs.extend(spec for spec in child.named_children if spec.type == "import_spec")

        imports = []
        for spec in specs:
            path_node = spec.child_by_field_name("path")
            if path_node is None:
                continue
            literal = converter.text(path_node)
            try:
                path = unquote(literal)
            except ValueError as e:
                raise ConversionError(f"unable to parse import {literal} [{e}]") from e

            name_node = spec.child_by_field_name("name")
            if name_node is not None:
                name = converter.text(name_node)
            else:
                name = path.rsplit("/", 1)[-1]

            imports.append(Import(name=name, path=path))
        return imports

    def _parse_type_declaration(self, node: Node, converter: TypeConverter) -> list[Declaration]:
        doc = [converter.text(comment) for comment in self._doc_comments(node)]

        declarations = []
        for spec in node.named_children:
            if spec.type not in ("type_spec", "type_alias"):
                continue

            name_node = spec.child_by_field_name("name")
            name = converter.text(name_node) if name_node is not None else ""
            if not name:
                continue

            type_node = spec.child_by_field_name("type")
            if type_node is None:
                continue
            try:
                typ = converter.convert(type_node)
            except ConversionError as e:
                raise ConversionError(f"unable to parse declaration {name} [{e}]") from e
            if typ is None:
                continue

            declaration = Declaration(name=name, type=typ, tags=TagSet())
            parse_directives(declaration.tags, doc)
            parse_directives(declaration.tags, [converter.text(comment) for comment in self._line_comments(spec)])
            declarations.append(declaration)

        return declarations

    @staticmethod
    def _doc_comments(node: Node) -> list[Node]:
        """Comments directly above a declaration, without a blank line in between."""
        comments: list[Node] = []
        expected_row = node.start_point[0]
        sibling = node.prev_named_sibling
        while sibling is not None and sibling.type == "comment":
            if sibling.end_point[0] < expected_row - 1:
                break
            previous = sibling.prev_named_sibling
            if previous is not None and previous.type != "comment" and previous.end_point[0] == sibling.start_point[0]:
                # Trailing comment of the previous code line
                break
            comments.insert(0, sibling)
            expected_row = sibling.start_point[0]
            sibling = previous
        return comments

    @staticmethod
    def _line_comments(spec: Node) -> list[Node]:
        """Comments on the same line, right after a type spec."""
        row = spec.end_point[0]
        sibling = spec.next_sibling
        if sibling is None and spec.parent is not None:
            sibling = spec.parent.next_sibling

        comments: list[Node] = []
        while sibling is not None and sibling.start_point[0] == row:
            if sibling.type == "comment":
                comments.append(sibling)
            elif sibling.is_named:
                break
            sibling = sibling.next_sibling
        return comments


def parse_text(content: str, filename: str = "", module: Module | None = None) -> CompilationUnit:
    """Parse Go source text into a CompilationUnit."""
    return GoFileParser().parse_text(content, filename, module)


def parse_file(filename: str | Path, resolve_module: bool = False) -> CompilationUnit:
    """Read and parse one Go source file."""
    return GoFileParser().parse_file(filename, resolve_module)
