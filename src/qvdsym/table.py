"""Assemble the symbol table: one decoded column per field descriptor."""

from __future__ import annotations

import concurrent.futures
from collections.abc import Mapping, Sequence
from types import MappingProxyType

from qvdsym.errors import BoundsError, QvdError, UnrecognizedTagError
from qvdsym.header import FieldDescriptor
from qvdsym.symbols import (
    NUMBER_TAGS,
    STRING_TAGS,
    NumberSymbols,
    StringSymbols,
    SymbolColumn,
    decode_number_symbols,
    decode_string_symbols,
)

SymbolTable = Mapping[str, SymbolColumn]

# number fields this short are placeholders and are not read
MIN_NUMBER_LENGTH = 9


def field_slice(payload: bytes, field: FieldDescriptor) -> bytes:
    start = field.offset
    end = start + field.length
    if start < 0 or field.length < 0 or end > len(payload):
        raise BoundsError(
            f"field {field.name!r}: range [{start}, {end}) outside payload of {len(payload)} bytes",
            field=field.name,
            offset=start,
        )
    return payload[start:end]


def decode_field(payload: bytes, field: FieldDescriptor) -> SymbolColumn:
    """Pick the decoder from the leading tag byte and decode one field."""
    buf = field_slice(payload, field)
    if not buf:
        return NumberSymbols()
    tag = buf[0]
    try:
        if tag in STRING_TAGS:
            return StringSymbols(tuple(decode_string_symbols(buf)))
        if tag in NUMBER_TAGS:
            if field.length < MIN_NUMBER_LENGTH:
                return NumberSymbols()
            return NumberSymbols(tuple(decode_number_symbols(buf)))
    except QvdError as exc:
        exc.with_field(field.name)
        raise
    raise UnrecognizedTagError(
        f"field {field.name!r}: unrecognized symbol tag 0x{tag:02x} at offset {field.offset}",
        field=field.name,
        offset=field.offset,
        value=tag,
    )


def _freeze(columns: Sequence[tuple[str, SymbolColumn]]) -> SymbolTable:
    table: dict[str, SymbolColumn] = {}
    for name, column in columns:
        table[name] = column
    return MappingProxyType(table)


def decode_symbol_table(
    payload: bytes, fields: Sequence[FieldDescriptor], workers: int = 1
) -> SymbolTable:
    """Decode every field or raise on the first failure; never returns a partial table."""
    if workers <= 1 or len(fields) <= 1:
        return _freeze([(field.name, decode_field(payload, field)) for field in fields])

    results: dict[int, SymbolColumn] = {}
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        future_map = {
            executor.submit(decode_field, payload, field): idx for idx, field in enumerate(fields)
        }
        try:
            for future in concurrent.futures.as_completed(future_map):
                results[future_map[future]] = future.result()
        except BaseException:
            executor.shutdown(wait=False, cancel_futures=True)
            raise
    return _freeze([(field.name, results[idx]) for idx, field in enumerate(fields)])
