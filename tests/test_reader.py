from pathlib import Path

import pytest

from qvdsym.config import DecodeConfig
from qvdsym.data.generator import build_qvd, generate_synthetic_qvd
from qvdsym.errors import UnrecognizedTagError
from qvdsym.reader import read_header, read_qvd, read_qvd_bytes


def test_read_qvd_decodes_synthetic_file(tmp_path: Path):
    data, expected = generate_synthetic_qvd(rows=6, seed=3)
    path = tmp_path / "customers.qvd"
    path.write_bytes(data)

    qvd = read_qvd(path)
    assert qvd.header.table_name == "customers"
    assert {name: list(col.values) for name, col in qvd.symbols.items()} == expected
    assert qvd.symbols["Customer"].kind == "strings"
    assert qvd.symbols["ExternalId"].kind == "numbers"
    assert data[qvd.payload_offset - 1] == 0


def test_read_qvd_bytes_matches_streaming_reader(tmp_path: Path):
    data, _ = generate_synthetic_qvd(rows=4)
    path = tmp_path / "t.qvd"
    path.write_bytes(data)
    from_disk = read_qvd(path, config=DecodeConfig(chunk_size=7))
    in_memory = read_qvd_bytes(data)
    assert dict(from_disk.symbols) == dict(in_memory.symbols)
    assert from_disk.payload_offset == in_memory.payload_offset


def test_field_filter_limits_decoded_fields():
    data, _ = generate_synthetic_qvd(rows=4)
    qvd = read_qvd_bytes(data, config=DecodeConfig(fields=["Region", "Missing"]))
    assert list(qvd.symbols) == ["Region"]
    assert len(qvd.header.fields) == 5


def test_parallel_reader_matches_sequential():
    data, _ = generate_synthetic_qvd(rows=20)
    assert dict(read_qvd_bytes(data, DecodeConfig(workers=4)).symbols) == dict(
        read_qvd_bytes(data).symbols
    )


def test_bad_field_aborts_whole_file():
    data = build_qvd({"Good": ["x", "y"], "Bad": b"\x08\x00\x00"})
    with pytest.raises(UnrecognizedTagError) as info:
        read_qvd_bytes(data)
    assert info.value.field == "Bad"


def test_read_header_returns_offset(tmp_path: Path):
    data = build_qvd({"A": ["x"]})
    path = tmp_path / "a.qvd"
    path.write_bytes(data)
    header, offset = read_header(path)
    assert [f.name for f in header.fields] == ["A"]
    assert data[offset:] == b"\x04x\x00"


def test_missing_file_raises_os_error(tmp_path: Path):
    with pytest.raises(OSError):
        read_qvd(tmp_path / "missing.qvd")
