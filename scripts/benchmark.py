"""Micro-benchmark for parse() on synthetic files."""

from __future__ import annotations

import time

from achparse.data.generator import generate_synthetic_dataset
from achparse.logs import configure_logging
from achparse.parser import parse


def benchmark_parse(entries: int = 10_000, batches: int = 20, runs: int = 3) -> dict[str, float]:
    text, _ = generate_synthetic_dataset(count=entries, batches=batches)
    total_lines = text.count("\n")
    best = None
    for _ in range(runs):
        start = time.perf_counter()
        parse(text)
        elapsed = time.perf_counter() - start
        best = elapsed if best is None or elapsed < best else best
    lines_per_sec = total_lines / best if best else 0.0
    return {
        "entries": entries,
        "lines": total_lines,
        "best_seconds": best or 0.0,
        "lines_per_sec": lines_per_sec,
    }


if __name__ == "__main__":
    configure_logging()
    result = benchmark_parse()
    print(result)
