"""Locate the split between the XML header and the binary payload.

A QVD file is the header text, a single 0x00 terminator, then the payload.
Field offsets in the header are relative to the first byte after the
terminator.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO

from qvdsym.errors import DecodingError, FormatError

TERMINATOR = b"\x00"
DEFAULT_ENCODING = "utf-8"


@dataclass(frozen=True)
class Boundary:
    header: str
    offset: int


def _decode_header(raw: bytes, encoding: str) -> str:
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as exc:
        raise DecodingError(
            f"header contains invalid {encoding} at byte {exc.start}", offset=exc.start
        ) from exc


def find_boundary(data: bytes, encoding: str = DEFAULT_ENCODING) -> Boundary:
    """Return the header text and the payload offset (header length + 1)."""
    end = data.find(TERMINATOR)
    if end < 0:
        raise FormatError(f"no header terminator found in {len(data)} bytes", offset=len(data))
    return Boundary(header=_decode_header(data[:end], encoding), offset=end + 1)


def read_boundary(
    stream: BinaryIO, encoding: str = DEFAULT_ENCODING, chunk_size: int = 8192
) -> Boundary:
    """Read a stream until the terminator; seekable streams end up at the payload."""
    buffered = bytearray()
    for chunk in iter(lambda: stream.read(chunk_size), b""):
        end = chunk.find(TERMINATOR)
        if end < 0:
            buffered.extend(chunk)
            continue
        buffered.extend(chunk[:end])
        offset = len(buffered) + 1
        if stream.seekable():
            # rewind over whatever was read past the terminator
            stream.seek(end + 1 - len(chunk), 1)
        return Boundary(header=_decode_header(bytes(buffered), encoding), offset=offset)
    raise FormatError(
        f"stream ended after {len(buffered)} bytes without a header terminator",
        offset=len(buffered),
    )


def split_file(data: bytes, encoding: str = DEFAULT_ENCODING) -> tuple[Boundary, bytes]:
    boundary = find_boundary(data, encoding=encoding)
    return boundary, data[boundary.offset :]
