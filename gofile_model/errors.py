"""
Exceptions raised while building the Go type model.

Resolution misses are never errors: a reference that cannot be bound
simply keeps ``ref`` set to ``None``.
"""

from __future__ import annotations


class GoFileParseError(Exception):
    """Base class for every fatal error raised while parsing Go sources."""

    pass


class SyntaxTreeError(GoFileParseError):
    """Raised when the Go front end cannot build a clean syntax tree.

    This can happen when:
    - The source contains syntax errors
    - The source is truncated and tree-sitter inserted missing nodes
    """

    pass


class ConversionError(GoFileParseError):
    """Raised when a recognizable type expression cannot be converted.

    Examples are a qualified name that cannot be split into package and
    identifier, an array type without a length expression or a pointer
    to an unsupported type. Unsupported expression kinds are not errors,
    they are dropped by the converter.
    """

    pass


class ModuleResolutionError(GoFileParseError):
    """Raised when the go.mod file of a source file cannot be located or read."""

    pass
