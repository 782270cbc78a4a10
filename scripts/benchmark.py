"""Compare sequential and threaded symbol table decoding on one synthetic file."""

from __future__ import annotations

import time
from collections.abc import Sequence

from qvdsym.config import DecodeConfig
from qvdsym.data.generator import generate_synthetic_qvd
from qvdsym.reader import read_qvd_bytes


def _best_seconds(data: bytes, cfg: DecodeConfig, runs: int) -> float:
    timings = []
    for _ in range(runs):
        start = time.perf_counter()
        read_qvd_bytes(data, config=cfg)
        timings.append(time.perf_counter() - start)
    return min(timings)


def compare_workers(
    rows: int = 50_000, runs: int = 3, workers: Sequence[int] = (1, 2, 4)
) -> list[dict[str, float]]:
    """Decode the same buffer with each worker count; speedup is relative to the first."""
    data, _ = generate_synthetic_qvd(rows=rows)
    megabytes = len(data) / 1_000_000
    baseline = None
    report = []
    for count in workers:
        best = _best_seconds(data, DecodeConfig(workers=count), runs)
        baseline = baseline or best
        report.append(
            {
                "workers": count,
                "best_ms": round(best * 1000, 2),
                "mbps": round(megabytes / best, 2) if best else 0.0,
                "speedup": round(baseline / best, 2) if best else 0.0,
            }
        )
    return report


if __name__ == "__main__":
    for row in compare_workers():
        print(row)
