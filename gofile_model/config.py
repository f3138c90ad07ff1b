"""
Configuration for the gofile_model command line tool.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ParserConfig:
    """Configuration options for parsing and output."""

    # Whether to locate go.mod to determine each file's module
    resolve_module: bool = True

    # Whether to parse *_test.go files when walking directories
    include_test_files: bool = False

    # Whether to link NonNativeType references after parsing
    resolve_references: bool = True

    # Output format: "json" or "summary"
    output_format: str = "json"

    # JSON indentation
    indent: int = 2

    @staticmethod
    def from_dict(d: dict) -> ParserConfig:
        """Create a config from a dictionary."""
        config = ParserConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "resolve_module": self.resolve_module,
            "include_test_files": self.include_test_files,
            "resolve_references": self.resolve_references,
            "output_format": self.output_format,
            "indent": self.indent,
        }
