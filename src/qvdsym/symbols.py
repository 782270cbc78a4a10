"""Symbol stream decoders.

String streams are lenient: every byte outside the tag set is a character, so
the decoder never fails. Number streams are strict: an unknown tag or a
truncated record aborts the field.

String stream bytes:
- 0x00 ends the current value
- 0x04, CR, LF are dropped
- 0x05 + 4 bytes and 0x06 + 8 bytes are skipped (numeric part of a dual value)
- anything else is one character (one byte, one character)

Number stream records:
- 0x01 + 4 bytes big-endian signed
- 0x02 + 8 bytes big-endian signed
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from qvdsym.errors import FormatError, UnrecognizedTagError

TAG_INT = 0x01
TAG_LONG = 0x02
TAG_TEXT = 0x04
TAG_DUAL_INT = 0x05
TAG_DUAL_LONG = 0x06

STRING_TAGS = frozenset({TAG_TEXT, TAG_DUAL_INT, TAG_DUAL_LONG})
NUMBER_TAGS = frozenset({TAG_INT, TAG_LONG})

# bytes consumed by a skip/record tag, tag byte included
STRING_SKIP = {TAG_DUAL_INT: 5, TAG_DUAL_LONG: 9}
NUMBER_WIDTH = {TAG_INT: 4, TAG_LONG: 8}

_IGNORED = frozenset({TAG_TEXT, 0x0D, 0x0A})


@dataclass(frozen=True)
class StringSymbols:
    values: tuple[str, ...] = ()
    kind: Literal["strings"] = "strings"


@dataclass(frozen=True)
class NumberSymbols:
    values: tuple[int, ...] = ()
    kind: Literal["numbers"] = "numbers"


SymbolColumn = StringSymbols | NumberSymbols


def decode_string_symbols(buf: bytes) -> list[str]:
    """Split a tagged text stream into values; unterminated trailing text is dropped."""
    strings: list[str] = []
    current: list[str] = []
    i = 0
    total = len(buf)
    while i < total:
        byte = buf[i]
        if byte == 0x00:
            strings.append("".join(current))
            current.clear()
        elif byte in STRING_SKIP:
            i += STRING_SKIP[byte]
            continue
        elif byte not in _IGNORED:
            current.append(chr(byte))
        i += 1
    return strings


def decode_number_symbols(buf: bytes) -> list[int]:
    """Decode consecutive 0x01/0x02 records into signed integers."""
    numbers: list[int] = []
    i = 0
    total = len(buf)
    while i < total:
        tag = buf[i]
        width = NUMBER_WIDTH.get(tag)
        if width is None:
            raise UnrecognizedTagError(
                f"unexpected number tag 0x{tag:02x} at offset {i}", offset=i, value=tag
            )
        end = i + 1 + width
        if end > total:
            raise FormatError(
                f"truncated number record at offset {i}: tag 0x{tag:02x} needs {width} bytes, "
                f"{total - i - 1} remain",
                offset=i,
                value=tag,
            )
        numbers.append(int.from_bytes(buf[i + 1 : end], "big", signed=True))
        i = end
    return numbers
