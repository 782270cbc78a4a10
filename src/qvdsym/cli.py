import time
from pathlib import Path
from typing import NoReturn

import orjson
import typer
import yaml
from rich.console import Console
from rich.table import Table

from qvdsym.config import DecodeConfig, load_config
from qvdsym.data.generator import generate_synthetic_qvd
from qvdsym.errors import QvdError
from qvdsym.export import summarize_table, table_to_arrow, table_to_jsonl, table_to_payload
from qvdsym.reader import read_header, read_qvd

app = typer.Typer(help="Decode QVD symbol tables into structured outputs.")
dataset_app = typer.Typer(help="Dataset helpers (synthetic QVD fixtures).")
console = Console()
SUPPORTED_FORMATS = {"json", "jsonl", "arrow"}

app.add_typer(dataset_app, name="dataset")


def _require_file(path: Path) -> Path:
    if not path.is_file():
        raise typer.BadParameter(f"Input file not found: {path}")
    return path


def _load_config(path: Path | None) -> DecodeConfig:
    if path is None:
        return DecodeConfig()
    try:
        return load_config(_require_file(path))
    except (yaml.YAMLError, AttributeError, TypeError, ValueError) as exc:
        raise typer.BadParameter(f"Invalid config {path}: {exc}") from exc


def _fail(exc: QvdError) -> NoReturn:
    console.print(f"[bold red]Decode failed:[/] {exc}")
    raise typer.Exit(code=1) from exc


@app.command()
def decode(
    input: Path = typer.Argument(..., help="QVD file to decode."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Optional path to write the full symbol table."
    ),
    format: str = typer.Option(
        "json", "--format", "-f", help="Output format for --output: json | jsonl | arrow."
    ),
    workers: int | None = typer.Option(
        None, "--workers", "-w", help="Decode fields on this many threads."
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Optional decode config (json/yaml)."
    ),
    preview: int | None = typer.Option(
        None, "--preview", help="Number of symbols per field to include in the summary."
    ),
) -> None:
    """Decode every field's symbol table and print a summary."""
    fmt = format.lower()
    if fmt not in SUPPORTED_FORMATS:
        raise typer.BadParameter(f"Unsupported format '{format}'. Choose from {SUPPORTED_FORMATS}.")

    cfg = _load_config(config)
    if workers is not None:
        cfg.workers = workers
    if preview is not None:
        cfg.preview = preview

    start = time.perf_counter()
    try:
        qvd = read_qvd(_require_file(input), config=cfg)
    except QvdError as exc:
        _fail(exc)
    elapsed_ms = (time.perf_counter() - start) * 1000
    console.print(
        f"[bold green]Decoded[/] {len(qvd.symbols)} symbol tables from {input} "
        f"in {elapsed_ms:.1f} ms"
    )

    if output:
        if fmt == "arrow":
            table_to_arrow(qvd.symbols, output)
        elif fmt == "jsonl":
            table_to_jsonl(qvd.symbols, output, gzip_output=output.suffix == ".gz")
        else:
            output.write_bytes(orjson.dumps(table_to_payload(qvd.symbols)))
        console.print(f"[bold green]Wrote symbol tables[/] to {output}")
        return

    payload = {
        "input": str(input),
        "table": qvd.header.table_name,
        "records": qvd.header.no_of_records,
        "payload_offset": qvd.payload_offset,
        "fields": summarize_table(qvd.symbols, preview=cfg.preview),
    }
    console.print(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode())


@app.command()
def header(
    input: Path = typer.Argument(..., help="QVD file whose header to show."),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Optional decode config (json/yaml)."
    ),
) -> None:
    """Show the table header and field descriptors without decoding symbols."""
    cfg = _load_config(config)
    try:
        hdr, payload_offset = read_header(_require_file(input), config=cfg)
    except QvdError as exc:
        _fail(exc)

    console.print(f"[bold]{hdr.table_name or '(unnamed)'}[/]")
    console.print(
        f"- records: {hdr.no_of_records}, record bytes: {hdr.record_byte_size}, "
        f"payload offset: {payload_offset}"
    )
    table = Table(title="Fields")
    table.add_column("Field")
    table.add_column("Offset", justify="right")
    table.add_column("Length", justify="right")
    table.add_column("Symbols", justify="right")
    table.add_column("Bit offset", justify="right")
    table.add_column("Bit width", justify="right")
    for field in hdr.fields:
        table.add_row(
            field.name,
            str(field.offset),
            str(field.length),
            str(field.no_of_symbols),
            str(field.bit_offset),
            str(field.bit_width),
        )
    console.print(table)


@dataset_app.command("synthetic")
def dataset_synthetic(
    output: Path = typer.Argument(..., help="Path to write the synthetic QVD file."),
    rows: int = typer.Option(8, "--rows", "-r", help="Number of distinct customers to emit."),
    seed: int = typer.Option(1234, "--seed", help="Seed for reproducible generation."),
) -> None:
    """Generate a QVD file with text, dual and integer symbol tables."""
    data, expected = generate_synthetic_qvd(rows=rows, seed=seed)
    output.write_bytes(data)
    console.print(f"[bold green]Wrote[/] {len(data)} bytes to {output} ({len(expected)} fields).")


if __name__ == "__main__":
    app()
