"""
Serialization of a parsed batch.

Converts compilation units to plain dictionaries (for JSON output) and
renders a human readable summary with a Jinja2 template.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import jinja2

from .model.nodes import (
    ArrayType,
    ChannelDir,
    ChannelType,
    CompilationUnit,
    Declaration,
    Field,
    FunctionType,
    InterfaceType,
    MapType,
    NativeType,
    NonNativeType,
    PointerType,
    StructType,
    TypeShape,
)

TEMPLATE_DIR = Path(__file__).parent / "templates"


def format_field(fld: Field) -> str:
    if not fld.names:
        return format_type(fld.type)
    return f"{', '.join(fld.names)} {format_type(fld.type)}"


def _format_signature(function: FunctionType) -> str:
    signature = ""
    if function.type_params:
        signature += f"[{', '.join(format_field(f) for f in function.type_params)}]"
    signature += f"({', '.join(format_field(f) for f in function.params)})"
    results = function.results
    if len(results) == 1 and not results[0].names:
        signature += f" {format_type(results[0].type)}"
    elif results:
        signature += f" ({', '.join(format_field(f) for f in results)})"
    return signature


def format_type(typ: TypeShape | None) -> str:
    """Render a type shape with Go syntax.

    Examples:
        ArrayType(size="", value_type=NativeType("byte")) -> "[]byte"
        ChannelType(dir=ChannelDir.RECV, value_type=NativeType("int")) -> "<-chan int"
    """
    if typ is None:
        return "?"
    if isinstance(typ, (NativeType, NonNativeType)):
        return typ.name
    if isinstance(typ, StructType):
        return f"struct{{{'; '.join(format_field(f) for f in typ.fields)}}}"
    if isinstance(typ, InterfaceType):
        methods = []
        for method in typ.methods:
            if method.names and isinstance(method.type, FunctionType):
                methods.append(f"{method.names[0]}{_format_signature(method.type)}")
            else:
                methods.append(format_field(method))
        return f"interface{{{'; '.join(methods)}}}"
    if isinstance(typ, MapType):
        return f"map[{format_type(typ.key_type)}]{format_type(typ.value_type)}"
    if isinstance(typ, ArrayType):
        return f"[{typ.size}]{format_type(typ.value_type)}"
    if isinstance(typ, PointerType):
        return f"*{format_type(typ.to_type)}"
    if isinstance(typ, ChannelType):
        prefix = {ChannelDir.SEND: "chan<- ", ChannelDir.RECV: "<-chan ", ChannelDir.BOTH: "chan "}[typ.dir]
        return f"{prefix}{format_type(typ.value_type)}"
    if isinstance(typ, FunctionType):
        return f"func{_format_signature(typ)}"
    raise TypeError(f"Unknown type shape {type(typ).__name__}")


def iter_references(typ: TypeShape | None) -> Iterator[NonNativeType]:
    """Yield every NonNativeType inside a type shape, depth first."""
    if isinstance(typ, NonNativeType):
        yield typ
    elif isinstance(typ, (StructType, InterfaceType, FunctionType)):
        if isinstance(typ, StructType):
            fields = typ.fields
        elif isinstance(typ, InterfaceType):
            fields = typ.methods
        else:
            fields = typ.type_params + typ.params + typ.results
        for fld in fields:
            yield from iter_references(fld.type)
    elif isinstance(typ, MapType):
        yield from iter_references(typ.key_type)
        yield from iter_references(typ.value_type)
    elif isinstance(typ, (ArrayType, ChannelType)):
        yield from iter_references(typ.value_type)
    elif isinstance(typ, PointerType):
        yield from iter_references(typ.to_type)


class ModelSerializer:
    """Converts a batch of units to dictionaries.

    Resolved references are written as "<module full name>:<name>" (or
    "<filename>:<name>" for units without a module) since the model graph
    may contain cycles.
    """

    def __init__(self, units: list[CompilationUnit]):
        self.units = units
        self._declaration_ids: dict[int, str] = {}
        for unit in units:
            scope = unit.module.full_name or unit.filename
            for declaration in unit.declarations:
                self._declaration_ids[id(declaration)] = f"{scope}:{declaration.name}"

    def declaration_id(self, declaration: Declaration | None) -> str | None:
        if declaration is None:
            return None
        return self._declaration_ids.get(id(declaration), declaration.name)

    def to_dict(self) -> dict:
        return {"files": [self.unit_to_dict(unit) for unit in self.units]}

    def unit_to_dict(self, unit: CompilationUnit) -> dict:
        return {
            "filename": unit.filename,
            "package": unit.package,
            "module": {"name": unit.module.name, "sub_dir": unit.module.sub_dir},
            "imports": [{"name": imp.name, "path": imp.path} for imp in unit.imports],
            "declarations": [
                {
                    "name": declaration.name,
                    "type": self.type_to_dict(declaration.type),
                    "tags": dict(declaration.tags),
                }
                for declaration in unit.declarations
            ],
        }

    def field_to_dict(self, fld: Field) -> dict:
        return {
            "names": list(fld.names),
            "implicit_name": fld.implicit_name,
            "type": self.type_to_dict(fld.type),
            "tags": dict(fld.tags),
        }

    def type_to_dict(self, typ: TypeShape | None) -> dict | None:
        if typ is None:
            return None
        d: dict = {"kind": typ.kind.value}
        if isinstance(typ, NativeType):
            d["name"] = typ.name
        elif isinstance(typ, NonNativeType):
            d["name"] = typ.name
            d["ref"] = self.declaration_id(typ.ref)
        elif isinstance(typ, StructType):
            d["fields"] = [self.field_to_dict(f) for f in typ.fields]
        elif isinstance(typ, InterfaceType):
            d["methods"] = [self.field_to_dict(f) for f in typ.methods]
            d["incomplete"] = typ.incomplete
        elif isinstance(typ, MapType):
            d["key_type"] = self.type_to_dict(typ.key_type)
            d["value_type"] = self.type_to_dict(typ.value_type)
        elif isinstance(typ, ArrayType):
            d["size"] = typ.size
            d["parsed_int"] = typ.parsed_int
            d["value_type"] = self.type_to_dict(typ.value_type)
        elif isinstance(typ, PointerType):
            d["to_type"] = self.type_to_dict(typ.to_type)
        elif isinstance(typ, ChannelType):
            d["dir"] = typ.dir.name.lower()
            d["value_type"] = self.type_to_dict(typ.value_type)
        elif isinstance(typ, FunctionType):
            d["type_params"] = [self.field_to_dict(f) for f in typ.type_params]
            d["params"] = [self.field_to_dict(f) for f in typ.params]
            d["results"] = [self.field_to_dict(f) for f in typ.results]
        else:
            raise TypeError(f"Unknown type shape {type(typ).__name__}")
        return d


def units_to_dict(units: list[CompilationUnit]) -> dict:
    """Convert a batch of units to a JSON-serializable dictionary."""
    return ModelSerializer(units).to_dict()


def render_summary(units: list[CompilationUnit], command_line: str = "") -> str:
    """Render a text summary of a batch: imports, declarations, tags and references."""
    serializer = ModelSerializer(units)
    jinja_env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        lstrip_blocks=True,
        trim_blocks=True,
        keep_trailing_newline=True,
    )
    template = jinja_env.get_template("summary.txt.jinja2")

    files = []
    for unit in units:
        declarations = []
        for declaration in unit.declarations:
            declarations.append(
                {
                    "name": declaration.name,
                    "type": format_type(declaration.type),
                    "tags": dict(declaration.tags),
                    "refs": [
                        {"name": ref.name, "target": serializer.declaration_id(ref.ref)}
                        for ref in iter_references(declaration.type)
                    ],
                }
            )
        files.append(
            {
                "filename": unit.filename,
                "package": unit.package,
                "module": unit.module.full_name,
                "imports": unit.imports,
                "declarations": declarations,
            }
        )

    return template.render(files=files, command_line=command_line)
