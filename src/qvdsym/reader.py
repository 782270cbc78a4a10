"""Read a QVD file end to end: boundary, header, symbol table."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from qvdsym.boundary import read_boundary, split_file
from qvdsym.config import DecodeConfig
from qvdsym.header import TableHeader, parse_header
from qvdsym.table import SymbolTable, decode_symbol_table


@dataclass(frozen=True)
class QvdFile:
    header: TableHeader
    payload_offset: int
    symbols: SymbolTable


def _decode(header_text: str, offset: int, payload: bytes, cfg: DecodeConfig) -> QvdFile:
    header = parse_header(header_text)
    fields = header.fields
    if cfg.fields:
        wanted = set(cfg.fields)
        fields = tuple(f for f in fields if f.name in wanted)
    symbols = decode_symbol_table(payload, fields, workers=cfg.workers)
    return QvdFile(header=header, payload_offset=offset, symbols=symbols)


def read_qvd_bytes(data: bytes, config: DecodeConfig | None = None) -> QvdFile:
    cfg = config or DecodeConfig()
    boundary, payload = split_file(data, encoding=cfg.header_encoding)
    return _decode(boundary.header, boundary.offset, payload, cfg)


def read_qvd(path: Path, config: DecodeConfig | None = None) -> QvdFile:
    """Stream the header, then read the payload in one go. OSError propagates."""
    cfg = config or DecodeConfig()
    with Path(path).open("rb") as f:
        boundary = read_boundary(f, encoding=cfg.header_encoding, chunk_size=cfg.chunk_size)
        payload = f.read()
    return _decode(boundary.header, boundary.offset, payload, cfg)


def read_header(path: Path, config: DecodeConfig | None = None) -> tuple[TableHeader, int]:
    """Parse only the header; returns it with the payload offset."""
    cfg = config or DecodeConfig()
    with Path(path).open("rb") as f:
        boundary = read_boundary(f, encoding=cfg.header_encoding, chunk_size=cfg.chunk_size)
    return parse_header(boundary.header), boundary.offset
