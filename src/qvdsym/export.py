"""Write decoded symbol tables as JSON-friendly payloads, JSONL or Arrow IPC."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson
import pyarrow as pa

from qvdsym.table import SymbolTable


def summarize_table(table: SymbolTable, preview: int = 8) -> list[dict[str, Any]]:
    """One row per field: kind, symbol count and the first few values."""
    return [
        {
            "field": name,
            "kind": column.kind,
            "count": len(column.values),
            "preview": list(column.values[:preview]),
        }
        for name, column in table.items()
    ]


def table_to_payload(table: SymbolTable) -> dict[str, dict[str, Any]]:
    return {
        name: {"kind": column.kind, "values": list(column.values)}
        for name, column in table.items()
    }


def table_to_jsonl(table: SymbolTable, path: Path, gzip_output: bool = False) -> None:
    """Write one JSON line per field."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if gzip_output:
        import gzip as gzip_lib

        handle = gzip_lib.open(path, "wb")
    else:
        handle = path.open("wb")

    with handle as f:
        for name, column in table.items():
            line = {"field": name, "kind": column.kind, "values": list(column.values)}
            f.write(orjson.dumps(line) + b"\n")


def table_to_arrow(table: SymbolTable, path: Path) -> None:
    """Write the table to Arrow IPC; string and number symbols get separate list columns."""
    path.parent.mkdir(parents=True, exist_ok=True)
    names = list(table.keys())
    columns = list(table.values())
    arrow_table = pa.table(
        {
            "field": pa.array(names, type=pa.string()),
            "kind": pa.array([c.kind for c in columns], type=pa.string()),
            "count": pa.array([len(c.values) for c in columns], type=pa.int64()),
            "strings": pa.array(
                [list(c.values) if c.kind == "strings" else [] for c in columns],
                type=pa.list_(pa.string()),
            ),
            "numbers": pa.array(
                [list(c.values) if c.kind == "numbers" else [] for c in columns],
                type=pa.list_(pa.int64()),
            ),
        }
    )
    with pa.OSFile(str(path), "wb") as sink:
        with pa.ipc.new_file(sink, arrow_table.schema) as writer:
            writer.write_table(arrow_table)
