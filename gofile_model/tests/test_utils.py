"""
Tests for Go identifier and literal helpers.
"""

import pytest

from gofile_model.utils import (
    get_identifier_parts,
    is_native_type,
    is_public,
    parse_int_literal,
    unquote,
    unquote_char,
)


class TestIdentifiers:
    def test_is_public(self):
        assert is_public("Name")
        assert is_public("ÉtéName")
        assert not is_public("name")
        assert not is_public("_Name")
        assert not is_public("")

    def test_is_native_type(self):
        for name in ("bool", "byte", "int", "uint64", "string", "float", "complex64", "uintptr"):
            assert is_native_type(name), name
        # Not in the builtin set kept as NativeType
        for name in ("rune", "error", "any", "Foo"):
            assert not is_native_type(name), name

    def test_get_identifier_parts(self):
        assert get_identifier_parts("pkg.Name") == ("pkg", "Name")
        assert get_identifier_parts("Name") == ("", "Name")
        assert get_identifier_parts("a.b.C") == ("a", "b.C")


class TestParseIntLiteral:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("10", 10),
            ("0", 0),
            ("0x1F", 31),
            ("0o17", 15),
            ("017", 15),
            ("0b101", 5),
            ("1_000", 1000),
            ("9223372036854775807", 9223372036854775807),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_int_literal(text) == expected

    def test_out_of_range(self):
        assert parse_int_literal("9223372036854775808") is None

    def test_invalid(self):
        assert parse_int_literal("N") is None
        assert parse_int_literal("089") is None


class TestUnquote:
    def test_interpreted(self):
        assert unquote('"hello"') == "hello"
        assert unquote('"a\\tb"') == "a\tb"
        assert unquote('"\\"quoted\\""') == '"quoted"'
        assert unquote('"\\u00e9"') == "é"
        assert unquote('"\\xc3\\xa9"') == "é"
        assert unquote('"\\101"') == "A"

    def test_raw(self):
        assert unquote("`a\\nb`") == "a\\nb"
        assert unquote("`a\r\nb`") == "a\nb"

    def test_invalid(self):
        with pytest.raises(ValueError):
            unquote('"unterminated')
        with pytest.raises(ValueError):
            unquote('"bad \\q escape"')
        with pytest.raises(ValueError):
            unquote("'x'")
        with pytest.raises(ValueError):
            unquote('"a"b"')

    def test_unquote_char(self):
        assert unquote_char("'a'") == 97
        assert unquote_char("'\\n'") == 10
        assert unquote_char("'\\x41'") == 65
        assert unquote_char("'é'") == 0xE9
        with pytest.raises(ValueError):
            unquote_char("'ab'")
        with pytest.raises(ValueError):
            unquote_char("''")
