"""
Struct tag and annotation parsing.

Two scanners share the quoting conventions of Go struct tags:

1. ``scan_tags`` splits a raw annotation like ``json:"name" db:"id,pk"``
   into a TagSet mapping each key to its raw value.
2. ``Tag.iter_properties`` splits one raw value into a comma separated
   list of ``key[=value]`` properties. Values are parsed on demand, a
   TagSet never stores expanded property maps.

Both scanners stop silently at the first malformed entry and keep what
was parsed before it.
"""

from __future__ import annotations

from collections.abc import Iterator

from .utils import unquote

_BLANKS = " \t"
_QUOTES = "\"'`"


class Tag(str):
    """A raw tag value that can be further split into properties."""

    def iter_properties(self) -> Iterator[tuple[str, str]]:
        """Yield ``(key, value)`` pairs in order. Flags yield an empty value."""
        text = str(self)
        size = len(text)
        ofs = 0

        while ofs < size:
            while ofs < size and text[ofs] in _BLANKS:
                ofs += 1
            if ofs >= size:
                break

            key_start = ofs
            while ofs < size and text[ofs] not in " \t=,":
                ofs += 1
            if key_start == ofs:
                break
            key = text[key_start:ofs]

            while ofs < size and text[ofs] in _BLANKS:
                ofs += 1

            # Flag without value
            if ofs >= size or text[ofs] == ",":
                yield key, ""
                ofs += 1
                continue

            # The separator character itself is not validated
            ofs += 1
            while ofs < size and text[ofs] in _BLANKS:
                ofs += 1
            if ofs >= size:
                yield key, ""
                break

            if text[ofs] in _QUOTES:
                quote = text[ofs]
                ofs += 1
                chunks: list[str] = []
                chunk_start = ofs
                while ofs < size and text[ofs] != quote:
                    if quote == "`" and text[ofs] == "\r":
                        chunks.append(text[chunk_start:ofs])
                        ofs += 1
                        chunk_start = ofs
                    elif quote != "`" and text[ofs] == "\\":
                        chunks.append(text[chunk_start:ofs])
                        ofs += 1
                        if ofs >= size:
                            break
                        chunk_start = ofs
                        ofs += 1
                    else:
                        ofs += 1
                if ofs >= size:
                    # Closing quote not found
                    return
                chunks.append(text[chunk_start:ofs])
                ofs += 1
                value = "".join(chunks)
            else:
                value_start = ofs
                while ofs < size and text[ofs] > " " and text[ofs] != ",":
                    ofs += 1
                value = text[value_start:ofs]

            yield key, value

            while ofs < size and text[ofs] in _BLANKS:
                ofs += 1
            if ofs < size:
                if text[ofs] != ",":
                    break
                ofs += 1

    def get_property(self, key: str) -> str | None:
        """Return the value of a property, "" for a flag, None if absent."""
        for name, value in self.iter_properties():
            if name == key:
                return value
        return None

    def has_property(self, key: str) -> bool:
        return self.get_property(key) is not None

    def get_bool_property(self, key: str) -> bool:
        """Interpret a property as a boolean.

        Absent properties are False. Flags, "1", "true" and "yes" (any case)
        are True. Every other value is False.
        """
        value = self.get_property(key)
        if value is None:
            return False
        if value in ("", "1"):
            return True
        return value.lower() in ("true", "yes")


class TagSet(dict[str, Tag]):
    """Tags of a field or declaration, keyed by tag name."""

    def has_tag(self, key: str) -> bool:
        return key in self

    def get_tag(self, key: str) -> Tag | None:
        return self.get(key)


def scan_tags(text: str) -> TagSet:
    """Parse ``key:"value"`` pairs separated by spaces.

    Args:
        text: Raw annotation text, e.g. a struct tag without its backquotes

    Returns:
        TagSet with one entry per key (last occurrence wins)
    """
    tags = TagSet()

    while text:
        i = 0
        while i < len(text) and text[i] == " ":
            i += 1
        text = text[i:]
        if not text:
            break

        # Key runs until a control character, space, colon, quote or DEL
        i = 0
        while i < len(text) and text[i] > " " and text[i] not in ':"' and text[i] != "\x7f":
            i += 1
        if i == 0 or i + 1 >= len(text) or text[i] != ":" or text[i + 1] != '"':
            break
        name = text[:i]
        text = text[i + 1 :]

        # Find the closing quote of the value
        i = 1
        while i < len(text) and text[i] != '"':
            if text[i] == "\\":
                i += 1
            i += 1
        if i >= len(text):
            break
        quoted_value = text[: i + 1]
        text = text[i + 1 :]

        try:
            value = unquote(quoted_value)
        except ValueError:
            continue
        tags[name] = Tag(value)

    return tags
