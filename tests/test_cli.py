from pathlib import Path

from typer.testing import CliRunner

from qvdsym.cli import app
from qvdsym.data.generator import build_qvd

runner = CliRunner()


def _write_sample(tmp_path: Path) -> Path:
    path = tmp_path / "sample.qvd"
    path.write_bytes(build_qvd({"Region": ["NYC", "LDN"], "Id": [7, 8]}, table_name="sample"))
    return path


def test_decode_prints_summary(tmp_path: Path):
    result = runner.invoke(app, ["decode", str(_write_sample(tmp_path))])
    assert result.exit_code == 0, result.output
    assert "Decoded" in result.output
    assert "NYC" in result.output


def test_decode_writes_json_output(tmp_path: Path):
    out = tmp_path / "symbols.json"
    result = runner.invoke(app, ["decode", str(_write_sample(tmp_path)), "-o", str(out)])
    assert result.exit_code == 0, result.output
    assert '"Region"' in out.read_text()


def test_decode_reports_malformed_file(tmp_path: Path):
    path = tmp_path / "bad.qvd"
    path.write_bytes(build_qvd({"Bad": b"\x09\x00"}))
    result = runner.invoke(app, ["decode", str(path)])
    assert result.exit_code == 1
    assert "Decode failed" in result.output


def test_decode_requires_input_argument():
    result = runner.invoke(app, ["decode"])
    assert result.exit_code != 0


def test_decode_rejects_missing_file(tmp_path: Path):
    result = runner.invoke(app, ["decode", str(tmp_path / "nope.qvd")])
    assert result.exit_code != 0


def test_header_lists_fields(tmp_path: Path):
    result = runner.invoke(app, ["header", str(_write_sample(tmp_path))])
    assert result.exit_code == 0, result.output
    assert "Region" in result.output
    assert "sample" in result.output


def test_dataset_synthetic_writes_file(tmp_path: Path):
    out = tmp_path / "synthetic.qvd"
    result = runner.invoke(app, ["dataset", "synthetic", str(out), "--rows", "3"])
    assert result.exit_code == 0, result.output
    assert out.exists()
    assert b"<QvdTableHeader>" in out.read_bytes()


def test_decode_rejects_malformed_config(tmp_path: Path):
    config = tmp_path / "decode.yaml"
    config.write_text("workers: [unclosed\n")
    result = runner.invoke(app, ["decode", str(_write_sample(tmp_path)), "-c", str(config)])
    assert result.exit_code == 2
    assert isinstance(result.exception, SystemExit)


def test_decode_rejects_non_mapping_config(tmp_path: Path):
    config = tmp_path / "decode.yaml"
    config.write_text("- just\n- a list\n")
    result = runner.invoke(app, ["decode", str(_write_sample(tmp_path)), "-c", str(config)])
    assert result.exit_code == 2


def test_header_honours_config_encoding(tmp_path: Path):
    path = tmp_path / "latin.qvd"
    data = build_qvd({"Caf\xe9": ["x"]}, table_name="latin")
    path.write_bytes(data.replace("Caf\xe9".encode("utf-8"), b"Caf\xe9"))
    config = tmp_path / "decode.yaml"
    config.write_text("header_encoding: latin-1\n")

    plain = runner.invoke(app, ["header", str(path)])
    assert plain.exit_code == 1
    assert "Decode failed" in plain.output

    result = runner.invoke(app, ["header", str(path), "--config", str(config)])
    assert result.exit_code == 0, result.output
    assert "Caf\xe9" in result.output
