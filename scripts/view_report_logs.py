"""Quick viewer for `achparse validate` trend logs (CSV or JSONL).

Shows run totals, SEC code counts, and per-tag debit/credit totals in Rich tables.
"""

from __future__ import annotations

import argparse
from collections import Counter
from pathlib import Path

from rich.console import Console
from rich.table import Table

from achparse.report import iter_log, summarize_log


def _tag_totals(entry: dict[str, object]) -> tuple[str, int, int]:
    tag = str(entry.get("tag") or "")
    summary = entry.get("summary")
    row = summary if isinstance(summary, dict) else entry
    debit = int(row.get("total_debit_amount", 0) or 0)
    credit = int(row.get("total_credit_amount", 0) or 0)
    return tag, debit, credit


def main() -> None:
    parser = argparse.ArgumentParser(description="View achparse validation logs.")
    parser.add_argument("log", type=Path, help="CSV or JSONL log file.")
    args = parser.parse_args()

    console = Console()
    summary = summarize_log(args.log)

    console.print("[bold]Aggregate[/]")
    console.print(
        f"- runs: {summary['runs']}, entries: {summary['entries_total']}, "
        f"debit: {summary['total_debit_amount']}, credit: {summary['total_credit_amount']}"
    )

    sec_table = Table(title="SEC Code Counts")
    sec_table.add_column("SEC")
    sec_table.add_column("Batches", justify="right")
    sec_counts = summary.get("sec_code_counts", {}) or {}
    for code, count in sorted(sec_counts.items(), key=lambda kv: kv[1], reverse=True):
        sec_table.add_row(code, str(count))
    console.print(sec_table)

    runs: Counter[str] = Counter()
    debits: Counter[str] = Counter()
    credits: Counter[str] = Counter()
    for entry in iter_log(args.log):
        tag, debit, credit = _tag_totals(entry)
        if tag:
            runs[tag] += 1
            debits[tag] += debit
            credits[tag] += credit
    if runs:
        tag_table = Table(title="Tags")
        tag_table.add_column("Tag")
        tag_table.add_column("Runs", justify="right")
        tag_table.add_column("Debits (cents)", justify="right")
        tag_table.add_column("Credits (cents)", justify="right")
        for tag, count in runs.most_common():
            tag_table.add_row(tag, str(count), str(debits[tag]), str(credits[tag]))
        console.print(tag_table)


if __name__ == "__main__":
    main()
