from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from qvdsym.boundary import DEFAULT_ENCODING


@dataclass
class DecodeConfig:
    workers: int = 1
    header_encoding: str = DEFAULT_ENCODING
    chunk_size: int = 8192
    fields: list[str] | None = None  # decode only these names when set
    preview: int = 8

    @staticmethod
    def from_mapping(payload: dict[str, Any]) -> DecodeConfig:
        fields = payload.get("fields")
        return DecodeConfig(
            workers=int(payload.get("workers", 1)),
            header_encoding=str(payload.get("header_encoding", DEFAULT_ENCODING)),
            chunk_size=int(payload.get("chunk_size", 8192)),
            fields=[str(name) for name in fields] if fields else None,
            preview=int(payload.get("preview", 8)),
        )


def load_config(path: Path) -> DecodeConfig:
    if path.suffix.lower() in {".yml", ".yaml"}:
        payload = yaml.safe_load(path.read_text()) or {}
    else:
        payload = json.loads(path.read_text())
    return DecodeConfig.from_mapping(payload)
