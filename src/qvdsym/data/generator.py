"""Synthetic QVD file generator.

Builds files with an XML header and a symbol payload made of:
- text symbols (0x04 text 0x00)
- dual symbols (0x05 + int32 or 0x06 + int64, then text 0x00)
- integer symbols (0x01 + int32 or 0x02 + int64, big-endian)

Row data is not generated; the header declares an empty row section. Used for
fixtures, tests and benchmarks.
"""

from __future__ import annotations

import random
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from xml.sax.saxutils import escape

from qvdsym.symbols import TAG_DUAL_INT, TAG_DUAL_LONG, TAG_INT, TAG_LONG, TAG_TEXT

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

Symbols = Sequence[str] | Sequence[int]


@dataclass
class FieldLayout:
    name: str
    offset: int
    length: int
    no_of_symbols: int


def _fits_int32(value: int) -> bool:
    return INT32_MIN <= value <= INT32_MAX


def _text_bytes(value: str) -> bytes:
    # one byte per character, matching the decoder
    return value.encode("latin-1")


def encode_string_symbols(values: Sequence[str], dual: Sequence[int] | None = None) -> bytes:
    """Encode text symbols; when `dual` is given each value carries a numeric prefix."""
    out = bytearray()
    for idx, value in enumerate(values):
        if dual is None:
            out.append(TAG_TEXT)
        else:
            number = dual[idx]
            if _fits_int32(number):
                out.append(TAG_DUAL_INT)
                out.extend(number.to_bytes(4, "big", signed=True))
            else:
                out.append(TAG_DUAL_LONG)
                out.extend(number.to_bytes(8, "big", signed=True))
        out.extend(_text_bytes(value))
        out.append(0x00)
    return bytes(out)


def encode_number_symbols(values: Sequence[int]) -> bytes:
    out = bytearray()
    for value in values:
        if _fits_int32(value):
            out.append(TAG_INT)
            out.extend(value.to_bytes(4, "big", signed=True))
        else:
            out.append(TAG_LONG)
            out.extend(value.to_bytes(8, "big", signed=True))
    return bytes(out)


def _encode_column(values: Symbols) -> bytes:
    if values and all(isinstance(v, int) for v in values):
        return encode_number_symbols(values)  # type: ignore[arg-type]
    return encode_string_symbols([str(v) for v in values])


def build_header(table_name: str, layouts: Sequence[FieldLayout], no_of_records: int = 0) -> str:
    lines = [
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>',
        "<QvdTableHeader>",
        f"  <TableName>{escape(table_name)}</TableName>",
        "  <Fields>",
    ]
    for layout in layouts:
        lines.extend(
            [
                "    <QvdFieldHeader>",
                f"      <FieldName>{escape(layout.name)}</FieldName>",
                "      <BitOffset>0</BitOffset>",
                "      <BitWidth>0</BitWidth>",
                "      <Bias>0</Bias>",
                f"      <NoOfSymbols>{layout.no_of_symbols}</NoOfSymbols>",
                f"      <Offset>{layout.offset}</Offset>",
                f"      <Length>{layout.length}</Length>",
                "    </QvdFieldHeader>",
            ]
        )
    payload_end = layouts[-1].offset + layouts[-1].length if layouts else 0
    lines.extend(
        [
            "  </Fields>",
            f"  <NoOfRecords>{no_of_records}</NoOfRecords>",
            "  <RecordByteSize>0</RecordByteSize>",
            f"  <Offset>{payload_end}</Offset>",
            "  <Length>0</Length>",
            "</QvdTableHeader>",
        ]
    )
    return "\r\n".join(lines)


def build_qvd(
    columns: Mapping[str, Symbols | bytes],
    table_name: str = "synthetic",
    dual: Mapping[str, Sequence[int]] | None = None,
) -> bytes:
    """Lay out each column's symbol stream back to back behind a matching header.

    Columns named in `dual` are written as dual symbols with those numbers.
    Values that are already `bytes` are written as-is (symbol count 0), which
    lets tests plant hand-made streams.
    """
    dual = dual or {}
    payload = bytearray()
    layouts: list[FieldLayout] = []
    for name, values in columns.items():
        if isinstance(values, bytes):
            encoded, count = values, 0
        elif name in dual:
            encoded = encode_string_symbols([str(v) for v in values], dual=dual[name])
            count = len(values)
        else:
            encoded, count = _encode_column(values), len(values)
        layouts.append(
            FieldLayout(name=name, offset=len(payload), length=len(encoded), no_of_symbols=count)
        )
        payload.extend(encoded)
    header = build_header(table_name, layouts)
    return header.encode("utf-8") + b"\r\n\x00" + bytes(payload)


def generate_synthetic_qvd(rows: int = 8, *, seed: int = 1234) -> tuple[bytes, dict[str, list]]:
    """Generate a reproducible QVD file and return it with the expected symbols."""
    rng = random.Random(seed)
    regions: Sequence[str] = ("NYC", "LDN", "SFO", "TOR", "FRA", "TKY")
    customers = [f"CUST{10_000 + i:05d}" for i in range(rows)]
    region_symbols = sorted({rng.choice(regions) for _ in range(rows)})
    amounts = sorted({rng.randint(50_00, 250_00) for _ in range(rows)})
    ids = [rng.randint(2**40, 2**50) for _ in range(rows)]
    codes = [rng.randint(100, 999) for _ in range(rows)]

    data = build_qvd(
        {
            "Customer": customers,
            "Region": region_symbols,
            "AmountCents": amounts,
            "ExternalId": ids,
            "Code": [str(c) for c in codes],
        },
        table_name="customers",
        dual={"Code": codes},
    )
    expected: dict[str, list] = {
        "Customer": customers,
        "Region": region_symbols,
        # a lone int32 symbol is 5 bytes, below the placeholder threshold
        "AmountCents": amounts if len(amounts) > 1 else [],
        "ExternalId": ids,
        "Code": [str(c) for c in codes],
    }
    return data, expected
