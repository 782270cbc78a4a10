"""Quick viewer for a decoded QVD file.

Shows one row per field with its symbol kind, count and first few values in a Rich table.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console
from rich.table import Table

from qvdsym.config import DecodeConfig
from qvdsym.export import summarize_table
from qvdsym.reader import read_qvd


def main() -> None:
    parser = argparse.ArgumentParser(description="View decoded QVD symbol tables.")
    parser.add_argument("qvd", type=Path, help="QVD file.")
    parser.add_argument("--preview", type=int, default=5, help="Symbols to show per field.")
    parser.add_argument("--workers", type=int, default=1, help="Decode threads.")
    args = parser.parse_args()

    console = Console()
    qvd = read_qvd(args.qvd, config=DecodeConfig(workers=args.workers))

    console.print(f"[bold]{qvd.header.table_name or args.qvd.name}[/]")
    console.print(
        f"- fields: {len(qvd.symbols)}, records: {qvd.header.no_of_records}, "
        f"payload offset: {qvd.payload_offset}"
    )

    table = Table(title="Symbol Tables")
    table.add_column("Field")
    table.add_column("Kind")
    table.add_column("Symbols", justify="right")
    table.add_column("Preview")
    for row in summarize_table(qvd.symbols, preview=args.preview):
        table.add_row(
            row["field"], row["kind"], str(row["count"]), ", ".join(map(str, row["preview"]))
        )
    console.print(table)


if __name__ == "__main__":
    main()
