"""Minimal QVD XML header reader.

Only the attributes needed to locate symbol streams (and the row section,
for callers that want it) are extracted. Unknown elements are ignored.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass

from qvdsym.errors import FormatError


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    offset: int
    length: int
    bit_offset: int = 0
    bit_width: int = 0
    bias: int = 0
    no_of_symbols: int = 0


@dataclass(frozen=True)
class TableHeader:
    table_name: str
    fields: tuple[FieldDescriptor, ...]
    no_of_records: int = 0
    record_byte_size: int = 0
    offset: int = 0
    length: int = 0


def _int(node: ET.Element, tag: str, *, required: bool = False, context: str = "") -> int:
    text = node.findtext(tag)
    if text is None or not text.strip():
        if required:
            raise FormatError(f"{context}missing <{tag}>")
        return 0
    try:
        return int(text.strip())
    except ValueError as exc:
        raise FormatError(f"{context}<{tag}> is not an integer: {text.strip()!r}") from exc


def _field(node: ET.Element, index: int) -> FieldDescriptor:
    name = node.findtext("FieldName")
    if name is None:
        raise FormatError(f"field #{index}: missing <FieldName>")
    ctx = f"field {name!r}: "
    return FieldDescriptor(
        name=name,
        offset=_int(node, "Offset", required=True, context=ctx),
        length=_int(node, "Length", required=True, context=ctx),
        bit_offset=_int(node, "BitOffset", context=ctx),
        bit_width=_int(node, "BitWidth", context=ctx),
        bias=_int(node, "Bias", context=ctx),
        no_of_symbols=_int(node, "NoOfSymbols", context=ctx),
    )


def parse_header(text: str) -> TableHeader:
    """Parse the header text preceding the payload terminator."""
    try:
        root = ET.fromstring(text.strip())
    except ET.ParseError as exc:
        raise FormatError(f"header is not well-formed XML: {exc}") from exc
    if root.tag != "QvdTableHeader":
        raise FormatError(f"unexpected header root <{root.tag}>")

    fields = tuple(
        _field(node, idx) for idx, node in enumerate(root.findall("./Fields/QvdFieldHeader"))
    )
    return TableHeader(
        table_name=root.findtext("TableName") or "",
        fields=fields,
        no_of_records=_int(root, "NoOfRecords"),
        record_byte_size=_int(root, "RecordByteSize"),
        offset=_int(root, "Offset"),
        length=_int(root, "Length"),
    )
