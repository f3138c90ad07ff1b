"""
Tests for the conversion of Go type expressions to type shapes.
"""

import pytest

from gofile_model.errors import ConversionError, SyntaxTreeError
from gofile_model.model import (
    ArrayType,
    ChannelDir,
    ChannelType,
    Field,
    FunctionType,
    InterfaceType,
    MapType,
    NativeType,
    NonNativeType,
    PointerType,
    StructType,
    TypeKind,
)
from gofile_model.parser import guess_implicit_name, parse_text


def declaration_type(expr: str):
    unit = parse_text(f"package p\n\ntype T {expr}\n")
    assert len(unit.declarations) == 1
    return unit.declarations[0].type


def field_type(expr: str):
    """Convert expr as the type of a struct field, None if the field was dropped."""
    struct = declaration_type(f"struct {{\n\tF {expr}\n}}")
    if not struct.fields:
        return None
    return struct.fields[0].type


class TestBasicTypes:
    def test_native(self):
        assert field_type("int") == NativeType(name="int")
        assert field_type("string").kind == TypeKind.NATIVE

    def test_non_native(self):
        typ = field_type("Foo")
        assert typ == NonNativeType(name="Foo")
        assert typ.ref is None
        assert not typ.is_resolved

    def test_builtin_outside_native_set(self):
        assert field_type("error") == NonNativeType(name="error")
        assert field_type("rune") == NonNativeType(name="rune")

    def test_qualified(self):
        assert field_type("pkg.Foo") == NonNativeType(name="pkg.Foo")

    def test_parenthesized(self):
        assert field_type("*(int)") == PointerType(to_type=NativeType(name="int"))


class TestArrays:
    def test_slice(self):
        typ = field_type("[]byte")
        assert typ == ArrayType(size="", parsed_int=None, value_type=NativeType(name="byte"))
        assert typ.is_slice

    @pytest.mark.parametrize(
        "expr,size,parsed_int",
        [
            ("[10]string", "10", 10),
            ("[0x10]string", "0x10", 16),
            ("[010]string", "010", 8),
            ("['a']string", "'a'", 97),
            ("[N]string", "N", None),
            ("[pkg.N]string", "pkg.N", None),
            ("[2*N]string", "2*N", None),
        ],
    )
    def test_array_length(self, expr, size, parsed_int):
        typ = field_type(expr)
        assert isinstance(typ, ArrayType)
        assert typ.size == size
        assert typ.parsed_int == parsed_int
        assert not typ.is_slice

    def test_nested(self):
        typ = field_type("[][4]Foo")
        assert typ == ArrayType(
            size="",
            value_type=ArrayType(size="4", parsed_int=4, value_type=NonNativeType(name="Foo")),
        )


class TestCompositeTypes:
    def test_map(self):
        typ = field_type("map[string]*Foo")
        assert typ == MapType(
            key_type=NativeType(name="string"),
            value_type=PointerType(to_type=NonNativeType(name="Foo")),
        )

    def test_map_with_unsupported_value(self):
        typ = field_type("map[string]List[int]")
        assert typ == MapType(key_type=NativeType(name="string"), value_type=None)

    def test_pointer(self):
        assert field_type("**int") == PointerType(to_type=PointerType(to_type=NativeType(name="int")))

    def test_pointer_to_unsupported_type(self):
        with pytest.raises(ConversionError, match="unable to parse declaration T"):
            field_type("*List[int]")

    @pytest.mark.parametrize(
        "expr,direction",
        [
            ("chan int", ChannelDir.BOTH),
            ("<-chan int", ChannelDir.RECV),
            ("chan<- int", ChannelDir.SEND),
        ],
    )
    def test_channel(self, expr, direction):
        assert field_type(expr) == ChannelType(dir=direction, value_type=NativeType(name="int"))

    def test_channel_of_unsupported_type(self):
        with pytest.raises(ConversionError):
            field_type("chan List[int]")

    def test_generic_instantiation_is_dropped(self):
        assert field_type("List[int]") is None
        unit = parse_text("package p\n\ntype T List[int]\n")
        assert unit.declarations == []


class TestFunctions:
    def test_params_and_results(self):
        typ = field_type("func(a, b int, s string) (bool, error)")
        assert isinstance(typ, FunctionType)
        assert typ.type_params == []
        assert [f.names for f in typ.params] == [["a", "b"], ["s"]]
        assert typ.params[0].type == NativeType(name="int")
        assert [f.implicit_name for f in typ.results] == ["bool", "error"]
        assert typ.results[1].type == NonNativeType(name="error")

    def test_single_result(self):
        typ = field_type("func(int) string")
        assert typ.params == [Field(names=[], implicit_name="int", type=NativeType(name="int"))]
        assert typ.results == [Field(names=[], implicit_name="string", type=NativeType(name="string"))]

    def test_named_results(self):
        typ = field_type("func() (n int, err error)")
        assert typ.params == []
        assert [f.names for f in typ.results] == [["n"], ["err"]]

    def test_variadic_parameter_is_dropped(self):
        typ = field_type("func(format string, args ...any)")
        assert [f.names for f in typ.params] == [["format"]]


class TestStructs:
    def test_fields(self):
        typ = declaration_type(
            "struct {\n"
            '\tA, B int `json:"a" db:"col,pk"`\n'
            "\tBase\n"
            "\t*pkg.Other\n"
            "\tm map[chan int]int\n"
            "}"
        )
        assert isinstance(typ, StructType)
        a, base, other, m = typ.fields

        assert a.names == ["A", "B"]
        assert a.tags == {"json": "a", "db": "col,pk"}
        assert a.tags.get_tag("db").has_property("pk")
        assert not a.is_embedded

        assert base.is_embedded
        assert base.implicit_name == "Base"
        assert base.type == NonNativeType(name="Base")

        assert other.is_embedded
        assert other.implicit_name == "Other"
        assert other.type == PointerType(to_type=NonNativeType(name="pkg.Other"))

        assert m.type == MapType(
            key_type=ChannelType(dir=ChannelDir.BOTH, value_type=NativeType(name="int")),
            value_type=NativeType(name="int"),
        )

    def test_empty_struct(self):
        assert declaration_type("struct{}") == StructType(fields=[])

    def test_unsupported_field_is_dropped(self):
        typ = declaration_type("struct {\n\tA List[int]\n\tB int\n}")
        assert [f.names for f in typ.fields] == [["B"]]


class TestInterfaces:
    def test_methods_and_embedded(self):
        typ = declaration_type("interface {\n\tRead(p []byte) (n int, err error)\n\tio.Closer\n\tName() string\n}")
        assert isinstance(typ, InterfaceType)
        assert not typ.incomplete

        read, closer, name = typ.methods
        assert read.names == ["Read"]
        assert isinstance(read.type, FunctionType)
        assert read.type.params[0].type == ArrayType(size="", value_type=NativeType(name="byte"))

        assert closer.names == []
        assert closer.implicit_name == "Closer"
        assert closer.type == NonNativeType(name="io.Closer")

        assert name.type.results[0].type == NativeType(name="string")

    def test_empty_interface(self):
        assert declaration_type("interface{}") == InterfaceType(methods=[], incomplete=False)

    def test_union_is_dropped(self):
        typ = declaration_type("interface {\n\t~int | ~string\n}")
        assert typ.methods == []


class TestGuessImplicitName:
    def test_names(self):
        assert guess_implicit_name(NativeType(name="int")) == "int"
        assert guess_implicit_name(NonNativeType(name="pkg.Name")) == "Name"
        assert guess_implicit_name(PointerType(to_type=NonNativeType(name="Name"))) == "Name"
        assert guess_implicit_name(ArrayType(value_type=NonNativeType(name="Item"))) == "Item"
        assert guess_implicit_name(MapType(key_type=NativeType(name="string"))) == ""
        assert guess_implicit_name(None) == ""


def test_syntax_error():
    with pytest.raises(SyntaxTreeError, match="broken.go:"):
        parse_text("package p\n\ntype T struct {\n", filename="broken.go")
