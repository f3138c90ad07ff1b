"""Go File Model

A Python package for reading the type declarations of Go source files
into a normalized type model. Parses struct tags and comment directives,
locates go.mod modules and resolves type references across files,
packages and modules.
"""

__version__ = "1.0.0"

from .analyzer import ReferenceResolver, ResolverStats, resolve_references
from .config import ParserConfig
from .errors import ConversionError, GoFileParseError, ModuleResolutionError, SyntaxTreeError
from .parser import parse_directory, parse_file, parse_text, resolve_module
from .report import format_type, render_summary, units_to_dict
from .tags import Tag, TagSet, scan_tags
from .writer import AtomicWriter

__all__ = [
    "parse_text",
    "parse_file",
    "parse_directory",
    "resolve_module",
    "resolve_references",
    "ReferenceResolver",
    "ResolverStats",
    "ParserConfig",
    "GoFileParseError",
    "SyntaxTreeError",
    "ConversionError",
    "ModuleResolutionError",
    "Tag",
    "TagSet",
    "scan_tags",
    "format_type",
    "units_to_dict",
    "render_summary",
    "AtomicWriter",
]
