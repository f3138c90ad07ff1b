"""
Type model module.

Contains the compilation unit, declaration and type shape definitions.
"""

from __future__ import annotations

from .nodes import (
    ELLIPSIS_SIZE,
    SLICE_SIZE,
    ArrayType,
    ChannelDir,
    ChannelType,
    CompilationUnit,
    Declaration,
    Field,
    FunctionType,
    Import,
    InterfaceType,
    MapType,
    Module,
    NativeType,
    NonNativeType,
    PointerType,
    StructType,
    TypeKind,
    TypeShape,
)

__all__ = [
    "TypeShape",
    "TypeKind",
    "NativeType",
    "NonNativeType",
    "Field",
    "StructType",
    "InterfaceType",
    "MapType",
    "ArrayType",
    "PointerType",
    "ChannelDir",
    "ChannelType",
    "FunctionType",
    "Import",
    "Module",
    "Declaration",
    "CompilationUnit",
    "SLICE_SIZE",
    "ELLIPSIS_SIZE",
]
