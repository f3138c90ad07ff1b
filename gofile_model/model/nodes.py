"""
Type model node definitions.

These nodes represent the declarations found in Go source files after
conversion from the syntax tree. Every type expression is exactly one of
the TypeShape subclasses below. The only field mutated after conversion
is ``NonNativeType.ref``, filled in by the reference resolver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import ClassVar

from ..tags import TagSet
from ..utils import is_public

# Array size of a slice ([]T)
SLICE_SIZE = ""

# Array size of an array whose length is given by its literal ([...]T)
ELLIPSIS_SIZE = "..."


class TypeKind(Enum):
    """Kind of type shape in the model."""

    NATIVE = "native"  # bool, int, string, ...
    NON_NATIVE = "non_native"  # Reference to another declaration
    STRUCT = "struct"
    INTERFACE = "interface"
    MAP = "map"
    ARRAY = "array"  # Arrays and slices
    POINTER = "pointer"
    CHANNEL = "channel"
    FUNCTION = "function"


class ChannelDir(IntEnum):
    """Channel direction, same values as go/ast ChanDir."""

    SEND = 1
    RECV = 2
    BOTH = 3


@dataclass
class TypeShape:
    """Base class for all type shapes."""

    kind: ClassVar[TypeKind]


@dataclass
class NativeType(TypeShape):
    """A builtin type such as int or string."""

    kind: ClassVar[TypeKind] = TypeKind.NATIVE

    name: str = ""


@dataclass
class NonNativeType(TypeShape):
    """A reference to another declaration, possibly package-qualified (pkg.Name)."""

    kind: ClassVar[TypeKind] = TypeKind.NON_NATIVE

    name: str = ""

    # Target declaration, None until resolved. Not owned by this node.
    ref: Declaration | None = field(default=None, repr=False, compare=False)

    @property
    def is_resolved(self) -> bool:
        return self.ref is not None


@dataclass
class Field:
    """A struct field, interface method, function parameter or result."""

    names: list[str] = field(default_factory=list)

    # Promoted name of an embedded member (only set when names is empty)
    implicit_name: str = ""

    type: TypeShape | None = None
    tags: TagSet = field(default_factory=TagSet)

    @property
    def is_embedded(self) -> bool:
        return not self.names


@dataclass
class StructType(TypeShape):
    kind: ClassVar[TypeKind] = TypeKind.STRUCT

    fields: list[Field] = field(default_factory=list)


@dataclass
class InterfaceType(TypeShape):
    kind: ClassVar[TypeKind] = TypeKind.INTERFACE

    methods: list[Field] = field(default_factory=list)
    incomplete: bool = False


@dataclass
class MapType(TypeShape):
    kind: ClassVar[TypeKind] = TypeKind.MAP

    # None when the key or value expression is not supported
    key_type: TypeShape | None = None
    value_type: TypeShape | None = None


@dataclass
class ArrayType(TypeShape):
    """An array or a slice.

    ``size`` is SLICE_SIZE for slices, ELLIPSIS_SIZE for [...]T, otherwise
    the length expression as written (a literal, a constant or any other
    expression). ``parsed_int`` holds the length when it is an integer or
    rune literal.
    """

    kind: ClassVar[TypeKind] = TypeKind.ARRAY

    size: str = SLICE_SIZE
    parsed_int: int | None = None
    value_type: TypeShape | None = None

    @property
    def is_slice(self) -> bool:
        return self.size == SLICE_SIZE


@dataclass
class PointerType(TypeShape):
    kind: ClassVar[TypeKind] = TypeKind.POINTER

    to_type: TypeShape | None = None


@dataclass
class ChannelType(TypeShape):
    kind: ClassVar[TypeKind] = TypeKind.CHANNEL

    dir: ChannelDir = ChannelDir.BOTH
    value_type: TypeShape | None = None


@dataclass
class FunctionType(TypeShape):
    kind: ClassVar[TypeKind] = TypeKind.FUNCTION

    type_params: list[Field] = field(default_factory=list)
    params: list[Field] = field(default_factory=list)
    results: list[Field] = field(default_factory=list)


@dataclass
class Import:
    """An import of a compilation unit."""

    name: str = ""  # Alias, explicit or last path segment
    path: str = ""


@dataclass
class Module:
    """A Go module name plus the package sub-directory inside it."""

    name: str = ""
    sub_dir: str = ""

    @property
    def full_name(self) -> str:
        if self.sub_dir:
            return f"{self.name}/{self.sub_dir}"
        return self.name


@dataclass(eq=False)
class Declaration:
    """A named top-level type declaration.

    Declarations compare by identity: resolved references point at one
    specific declaration even when another one has the same name.
    """

    name: str = ""
    type: TypeShape | None = None
    tags: TagSet = field(default_factory=TagSet)

    @property
    def is_public(self) -> bool:
        return is_public(self.name)


@dataclass
class CompilationUnit:
    """The model extracted from one Go source file."""

    module: Module = field(default_factory=Module)
    filename: str = ""
    package: str = ""
    imports: list[Import] = field(default_factory=list)
    declarations: list[Declaration] = field(default_factory=list)

    # Raw source text, needed to recover verbatim array length expressions
    source: str = field(default="", repr=False, compare=False)

    def get_declaration(self, name: str) -> Declaration | None:
        """Get the first declaration with the given name."""
        for declaration in self.declarations:
            if declaration.name == name:
                return declaration
        return None

    def get_import(self, alias: str) -> Import | None:
        """Get the first import whose alias matches."""
        for imp in self.imports:
            if imp.name == alias:
                return imp
        return None
