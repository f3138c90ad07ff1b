"""
Utility functions for Go identifiers and literals.
"""

import re

# Builtin type names converted to NativeType
NATIVE_TYPES = frozenset(
    {
        "bool",
        "byte",
        "int",
        "int8",
        "int16",
        "int32",
        "int64",
        "uint",
        "uint8",
        "uint16",
        "uint32",
        "uint64",
        "string",
        "float",
        "float64",
        "float32",
        "complex128",
        "complex64",
        "uintptr",
    }
)

# Legacy octal literals ("0755") are not accepted by int(text, 0)
_LEGACY_OCTAL_PATTERN = re.compile(r"0[0-7_]+")

_SIMPLE_ESCAPES = {
    "a": 0x07,
    "b": 0x08,
    "f": 0x0C,
    "n": 0x0A,
    "r": 0x0D,
    "t": 0x09,
    "v": 0x0B,
    "\\": 0x5C,
}

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1


def is_public(name: str) -> bool:
    """Check whether a Go identifier is exported.

    Examples:
        "Name" -> True
        "name" -> False
        "_Name" -> False
    """
    if not name or name[0] == "_":
        return False
    first_letter = name[0]
    return first_letter.lower() != first_letter


def is_native_type(name: str) -> bool:
    """Check whether a name is one of the builtin types kept as NativeType."""
    return name in NATIVE_TYPES


def get_identifier_parts(name: str) -> tuple[str, str]:
    """Split a possibly package-qualified name.

    Examples:
        "pkg.Name" -> ("pkg", "Name")
        "Name" -> ("", "Name")
    """
    idx = name.find(".")
    if idx < 0:
        return "", name
    return name[:idx], name[idx + 1 :]


def parse_int_literal(text: str) -> int | None:
    """Parse a Go integer literal, returning None if it does not fit in an int64."""
    digits = text.replace("_", "")
    try:
        if _LEGACY_OCTAL_PATTERN.fullmatch(text):
            value = int(digits, 8)
        else:
            value = int(text, 0)
    except ValueError:
        return None
    if value < _INT64_MIN or value > _INT64_MAX:
        return None
    return value


def _decode_escape(text: str, pos: int, quote: str) -> tuple[int, bool, int]:
    """Decode the escape sequence starting right after a backslash.

    Returns:
        (value, is_byte, next position). Byte values come from \\x and octal
        escapes and must not be UTF-8 encoded again.
    """
    if pos >= len(text):
        raise ValueError("unterminated escape sequence")
    ch = text[pos]
    if ch in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[ch], False, pos + 1
    if ch in ("'", '"'):
        if ch != quote:
            raise ValueError(f"invalid escape \\{ch}")
        return ord(ch), False, pos + 1
    if ch in ("x", "u", "U"):
        width = {"x": 2, "u": 4, "U": 8}[ch]
        digits = text[pos + 1 : pos + 1 + width]
        if len(digits) != width:
            raise ValueError(f"short \\{ch} escape")
        value = int(digits, 16)
        if ch == "x":
            return value, True, pos + 1 + width
        if value > 0x10FFFF or 0xD800 <= value < 0xE000:
            raise ValueError(f"invalid code point {digits}")
        return value, False, pos + 1 + width
    if "0" <= ch <= "7":
        digits = text[pos : pos + 3]
        if len(digits) != 3 or any(d not in "01234567" for d in digits):
            raise ValueError("invalid octal escape")
        value = int(digits, 8)
        if value > 0xFF:
            raise ValueError("octal escape out of range")
        return value, True, pos + 3
    raise ValueError(f"invalid escape \\{ch}")


def unquote(literal: str) -> str:
    """Interpret a Go string literal (double-quoted or back-quoted).

    Raises:
        ValueError: If the literal is malformed
    """
    if len(literal) < 2 or literal[0] != literal[-1]:
        raise ValueError(f"invalid quoted string {literal!r}")
    quote = literal[0]
    body = literal[1:-1]

    if quote == "`":
        if "`" in body:
            raise ValueError(f"invalid raw string {literal!r}")
        return body.replace("\r", "")
    if quote != '"':
        raise ValueError(f"invalid quoted string {literal!r}")
    if "\n" in body:
        raise ValueError("newline in string literal")

    buffer = bytearray()
    pos = 0
    while pos < len(body):
        ch = body[pos]
        if ch == quote:
            raise ValueError(f"unescaped quote in {literal!r}")
        if ch != "\\":
            buffer.extend(ch.encode("utf-8"))
            pos += 1
            continue
        value, is_byte, pos = _decode_escape(body, pos + 1, quote)
        if is_byte:
            buffer.append(value)
        else:
            buffer.extend(chr(value).encode("utf-8"))
    return buffer.decode("utf-8", errors="replace")


def unquote_char(literal: str) -> int:
    """Return the code point of a Go rune literal such as 'a' or '\\n'.

    Raises:
        ValueError: If the literal is not a single valid character
    """
    if len(literal) < 3 or literal[0] != "'" or literal[-1] != "'":
        raise ValueError(f"invalid rune literal {literal!r}")
    body = literal[1:-1]
    if body[0] == "\\":
        value, _, pos = _decode_escape(body, 1, "'")
    else:
        value, pos = ord(body[0]), 1
    if pos != len(body):
        raise ValueError(f"more than one character in rune literal {literal!r}")
    return value
