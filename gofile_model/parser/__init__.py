"""
Parser module.

Contains the Go front end, the type converter and the file, directory
and module parsers.
"""

from __future__ import annotations

from .converter import TypeConverter, guess_implicit_name
from .dir_parser import DirectoryParser, parse_directory
from .file_parser import GoFileParser, parse_file, parse_text
from .module import resolve_module
from .syntax import GoSyntaxParser

__all__ = [
    "GoSyntaxParser",
    "TypeConverter",
    "guess_implicit_name",
    "GoFileParser",
    "DirectoryParser",
    "parse_text",
    "parse_file",
    "parse_directory",
    "resolve_module",
]
