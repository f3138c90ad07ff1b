"""
Analyzer module.

Contains cross-file reference resolution.
"""

from __future__ import annotations

from .reference_resolver import ReferenceResolver, ResolverStats, resolve_references

__all__ = [
    "ReferenceResolver",
    "ResolverStats",
    "resolve_references",
]
