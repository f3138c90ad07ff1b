"""
Tests for type formatting, dictionary conversion and the text summary.
"""

import json

import pytest

from gofile_model.analyzer import resolve_references
from gofile_model.model import (
    ArrayType,
    ChannelDir,
    ChannelType,
    Field,
    FunctionType,
    InterfaceType,
    MapType,
    Module,
    NativeType,
    NonNativeType,
    PointerType,
    StructType,
    TypeShape,
)
from gofile_model.parser import parse_text
from gofile_model.report import format_type, iter_references, render_summary, units_to_dict

SOURCE = """package shop

import "example.com/lib/money"

// db:"orders"
type Order struct {
	ID    int64 `json:"id"`
	Items []*Item
	Total money.Amount
}

type Item struct {
	Qty [2]int
}
"""


@pytest.fixture
def units():
    units = [parse_text(SOURCE, filename="order.go", module=Module(name="example.com/shop"))]
    resolve_references(units)
    return units


class TestFormatType:
    @pytest.mark.parametrize(
        "typ,expected",
        [
            (NativeType(name="int"), "int"),
            (NonNativeType(name="pkg.Name"), "pkg.Name"),
            (ArrayType(size="", value_type=NativeType(name="byte")), "[]byte"),
            (ArrayType(size="N", value_type=NativeType(name="int")), "[N]int"),
            (MapType(key_type=NativeType(name="string"), value_type=None), "map[string]?"),
            (PointerType(to_type=NonNativeType(name="T")), "*T"),
            (ChannelType(dir=ChannelDir.BOTH, value_type=NativeType(name="int")), "chan int"),
            (ChannelType(dir=ChannelDir.SEND, value_type=NativeType(name="int")), "chan<- int"),
            (ChannelType(dir=ChannelDir.RECV, value_type=NativeType(name="int")), "<-chan int"),
            (StructType(), "struct{}"),
        ],
    )
    def test_simple(self, typ, expected):
        assert format_type(typ) == expected

    def test_struct(self):
        typ = StructType(
            fields=[
                Field(names=["A", "B"], type=NativeType(name="int")),
                Field(implicit_name="Base", type=NonNativeType(name="Base")),
            ]
        )
        assert format_type(typ) == "struct{A, B int; Base}"

    def test_function(self):
        typ = FunctionType(
            params=[Field(names=["a"], type=NativeType(name="int"))],
            results=[Field(type=NonNativeType(name="error"))],
        )
        assert format_type(typ) == "func(a int) error"

        typ = FunctionType(results=[Field(names=["n"], type=NativeType(name="int")), Field(names=["err"], type=NonNativeType(name="error"))])
        assert format_type(typ) == "func() (n int, err error)"

    def test_interface(self):
        typ = InterfaceType(
            methods=[
                Field(names=["Close"], type=FunctionType(results=[Field(type=NonNativeType(name="error"))])),
                Field(implicit_name="Reader", type=NonNativeType(name="io.Reader")),
            ]
        )
        assert format_type(typ) == "interface{Close() error; io.Reader}"

    def test_unknown_shape(self):
        class Unknown(TypeShape):
            pass

        with pytest.raises(TypeError):
            format_type(Unknown())


def test_iter_references():
    typ = MapType(key_type=NonNativeType(name="K"), value_type=ArrayType(value_type=PointerType(to_type=NonNativeType(name="V"))))
    assert [ref.name for ref in iter_references(typ)] == ["K", "V"]
    assert list(iter_references(NativeType(name="int"))) == []


class TestUnitsToDict:
    def test_structure(self, units):
        data = units_to_dict(units)
        # Must be JSON serializable
        json.dumps(data)

        (unit,) = data["files"]
        assert unit["filename"] == "order.go"
        assert unit["package"] == "shop"
        assert unit["module"] == {"name": "example.com/shop", "sub_dir": ""}
        assert unit["imports"] == [{"name": "money", "path": "example.com/lib/money"}]

        order, item = unit["declarations"]
        assert order["name"] == "Order"
        assert order["tags"] == {"db": "orders"}
        assert order["type"]["kind"] == "struct"

        id_field, items, total = order["type"]["fields"]
        assert id_field == {
            "names": ["ID"],
            "implicit_name": "",
            "type": {"kind": "native", "name": "int64"},
            "tags": {"json": "id"},
        }
        assert items["type"] == {
            "kind": "array",
            "size": "",
            "parsed_int": None,
            "value_type": {
                "kind": "pointer",
                "to_type": {"kind": "non_native", "name": "Item", "ref": "example.com/shop:Item"},
            },
        }
        # Not part of the batch
        assert total["type"] == {"kind": "non_native", "name": "money.Amount", "ref": None}

        qty = item["type"]["fields"][0]["type"]
        assert qty["size"] == "2"
        assert qty["parsed_int"] == 2

    def test_channel_and_function(self):
        unit = parse_text("package p\n\ntype F func(c <-chan int) bool\n")
        (declaration,) = units_to_dict([unit])["files"][0]["declarations"]
        function = declaration["type"]
        assert function["kind"] == "function"
        assert function["params"][0]["type"] == {
            "kind": "channel",
            "dir": "recv",
            "value_type": {"kind": "native", "name": "int"},
        }
        assert function["results"][0]["implicit_name"] == "bool"


class TestRenderSummary:
    def test_summary(self, units):
        summary = render_summary(units, command_line="gofile_model order.go")
        lines = summary.splitlines()

        assert lines[0] == "# Generated by: gofile_model order.go"
        assert lines[1] == "== order.go (package shop, module example.com/shop)"
        assert 'import money "example.com/lib/money"' in lines
        assert "type Order struct{ID int64; Items []*Item; Total money.Amount}" in lines
        assert "    tag db: orders" in lines
        assert "    ref Item -> example.com/shop:Item" in lines
        assert "    ref money.Amount -> unresolved" in lines
        assert "type Item struct{Qty [2]int}" in lines

    def test_without_command_line(self):
        unit = parse_text("package p\n\ntype T int\n")
        assert render_summary([unit]) == "== <text> (package p)\ntype T int\n"
