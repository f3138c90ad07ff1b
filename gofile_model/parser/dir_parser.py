"""
Directory parser.

Recursively parses every Go file below a base directory, in lexical
order with sub-directories visited in place.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..model.nodes import CompilationUnit
from .file_parser import GoFileParser

logger = logging.getLogger(__name__)

# Sub-directories never parsed (compared case-insensitively)
SKIPPED_DIRECTORIES = ("vendor", "testdata")

GO_FILE_SUFFIX = ".go"
TEST_FILE_SUFFIX = "_test.go"


class DirectoryParser:
    """Parses all Go files of a directory tree."""

    def __init__(
        self,
        base_dir: str | Path,
        resolve_module: bool = False,
        include_test_files: bool = False,
        file_parser: GoFileParser | None = None,
    ):
        """
        Initialize the directory parser.

        Args:
            base_dir: Root of the tree to parse
            resolve_module: Whether to locate the go.mod owning each file
            include_test_files: Whether to parse *_test.go files
            file_parser: Parser used for each file
        """
        self.base_dir = Path(base_dir)
        self.resolve_module = resolve_module
        self.include_test_files = include_test_files
        self.file_parser = file_parser or GoFileParser()
        self.parsed_files: list[CompilationUnit] = []

    def parse(self) -> list[CompilationUnit]:
        """
        Parse the whole tree.

        Returns:
            Compilation units in traversal order

        Raises:
            GoFileParseError: On the first file that fails, no partial result is returned
            OSError: If a directory or file cannot be read
        """
        self.parsed_files = []
        self._parse_recursive(self.base_dir)
        logger.info("Parsed %d Go files under %s", len(self.parsed_files), self.base_dir)
        return self.parsed_files

    def is_go_file(self, name: str) -> bool:
        if not name.endswith(GO_FILE_SUFFIX):
            return False
        return self.include_test_files or not name.endswith(TEST_FILE_SUFFIX)

    def _parse_recursive(self, directory: Path) -> None:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)

        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                if entry.name.lower() in SKIPPED_DIRECTORIES:
                    logger.debug("Skipping %s", entry.path)
                    continue
                self._parse_recursive(Path(entry.path))
            elif self.is_go_file(entry.name):
                unit = self.file_parser.parse_file(entry.path, self.resolve_module)
                self.parsed_files.append(unit)


def parse_directory(
    base_dir: str | Path,
    resolve_module: bool = False,
    include_test_files: bool = False,
) -> list[CompilationUnit]:
    """Parse every Go file below base_dir."""
    return DirectoryParser(base_dir, resolve_module, include_test_files).parse()
