"""Summaries, flat exports and trend logs for parsed ACH files."""

from __future__ import annotations

import csv
import json
from collections import Counter
from collections.abc import Iterator, Mapping
from dataclasses import asdict, dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, cast

import pyarrow as pa

from achparse.records import AchFile


@dataclass
class FileSummary:
    batches: int
    entries: int
    addenda: int
    total_debit_amount: int
    total_credit_amount: int
    sec_code_counts: dict[str, int]
    origin_name: str
    creation_date: str


def summarize_file(ach: AchFile) -> FileSummary:
    sec_codes: Counter[str] = Counter()
    entries = addenda = 0
    for batch in ach.batches:
        sec_codes[batch.header.standard_entry_class_code.strip()] += 1
        entries += len(batch.entries)
        addenda += sum(len(entry.addenda) for entry in batch.entries)
    return FileSummary(
        batches=len(ach.batches),
        entries=entries,
        addenda=addenda,
        total_debit_amount=ach.file_control.total_debit_amount,
        total_credit_amount=ach.file_control.total_credit_amount,
        sec_code_counts=dict(sec_codes),
        origin_name=ach.file_header.immediate_origin_name.strip(),
        creation_date=ach.file_header.file_creation_date.isoformat(),
    )


def _jsonable(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


def file_to_dict(ach: AchFile) -> dict[str, Any]:
    """Nested, JSON-ready view of the whole tree (dates as ISO strings)."""
    return cast(dict[str, Any], _jsonable(asdict(ach)))


def iter_entry_rows(ach: AchFile) -> Iterator[dict[str, Any]]:
    for batch in ach.batches:
        for entry in batch.entries:
            yield {
                "batch_number": batch.header.batch_number,
                "company_name": batch.header.company_name.strip(),
                "sec_code": batch.header.standard_entry_class_code,
                "effective_entry_date": batch.header.effective_entry_date.isoformat(),
                "transaction_code": entry.transaction_code,
                "receiving_dfi": entry.receiving_dfi_identification,
                "account_number": entry.dfi_account_number.strip(),
                "amount_cents": entry.amount,
                "individual_id": entry.individual_identification_number.strip(),
                "individual_name": entry.individual_name.strip(),
                "trace_number": entry.trace_number,
                "addenda": [a.payment_related_information.rstrip() for a in entry.addenda],
                "line_number": entry.line_number,
            }


def entries_to_jsonl(ach: AchFile, path: Path) -> int:
    """Write one JSON object per entry; returns the number written."""
    path.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    with path.open("w", encoding="utf-8") as f:
        for row in iter_entry_rows(ach):
            f.write(json.dumps(row) + "\n")
            written += 1
    return written


def entries_to_arrow(ach: AchFile, path: Path) -> int:
    """Write entries to an Arrow IPC file for analytics tooling."""
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = list(iter_entry_rows(ach))
    schema = pa.schema(
        [
            ("batch_number", pa.int64()),
            ("company_name", pa.string()),
            ("sec_code", pa.string()),
            ("effective_entry_date", pa.string()),
            ("transaction_code", pa.int64()),
            ("receiving_dfi", pa.string()),
            ("account_number", pa.string()),
            ("amount_cents", pa.int64()),
            ("individual_id", pa.string()),
            ("individual_name", pa.string()),
            ("trace_number", pa.string()),
            ("addenda", pa.list_(pa.string())),
            ("line_number", pa.int64()),
        ]
    )
    table = pa.Table.from_pylist(rows, schema=schema)
    with pa.OSFile(str(path), "wb") as sink:
        with pa.ipc.new_file(sink, table.schema) as writer:
            writer.write_table(table)
    return table.num_rows


def summary_to_row(
    summary: FileSummary | Mapping[str, object], source: str, tag: str | None = None
) -> dict:
    """Flatten a FileSummary into a CSV/JSONL-friendly row."""
    data: Mapping[str, Any] = summary if isinstance(summary, Mapping) else asdict(summary)
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "source": source,
        "tag": tag or "",
        "batches": int(data.get("batches", 0) or 0),
        "entries": int(data.get("entries", 0) or 0),
        "addenda": int(data.get("addenda", 0) or 0),
        "total_debit_amount": int(data.get("total_debit_amount", 0) or 0),
        "total_credit_amount": int(data.get("total_credit_amount", 0) or 0),
        "sec_code_counts": json.dumps(dict(data.get("sec_code_counts") or {})),
    }


def append_csv(path: Path, row: dict) -> None:
    """Append a row to a CSV file, writing headers when the file is new."""
    path.parent.mkdir(parents=True, exist_ok=True)
    is_new = not path.exists()
    with path.open("a", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(row.keys()))
        if is_new:
            writer.writeheader()
        writer.writerow(row)


def append_jsonl(path: Path, payload: dict) -> None:
    """Append a JSON line (UTF-8) to a log file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(payload, default=_jsonable_default) + "\n")


def _jsonable_default(obj: object) -> object:
    if isinstance(obj, date):
        return obj.isoformat()
    if hasattr(obj, "__dict__"):
        return obj.__dict__
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def iter_log(path: Path) -> Iterator[dict[str, Any]]:
    if path.suffix.lower() == ".csv":
        with path.open(newline="") as f:
            yield from csv.DictReader(f)
        return
    with path.open() as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            yield json.loads(line)


def summarize_log(path: Path) -> dict[str, object]:
    """Aggregate a CSV/JSONL trend log written by summary_to_row."""
    runs = 0
    entries_total = 0
    debit_total = 0
    credit_total = 0
    sec_code_counts: Counter[str] = Counter()

    for entry in iter_log(path):
        # JSONL lines from the CLI nest the summary; CSV rows are already flat.
        row = entry.get("summary") if isinstance(entry.get("summary"), dict) else entry
        runs += 1
        entries_total += int(row.get("entries", 0) or 0)
        debit_total += int(row.get("total_debit_amount", 0) or 0)
        credit_total += int(row.get("total_credit_amount", 0) or 0)
        counts_raw = row.get("sec_code_counts") or {}
        counts = json.loads(counts_raw) if isinstance(counts_raw, str) else counts_raw
        for code, n in counts.items():
            sec_code_counts[code] += int(n)

    return {
        "runs": runs,
        "entries_total": entries_total,
        "total_debit_amount": debit_total,
        "total_credit_amount": credit_total,
        "sec_code_counts": dict(sec_code_counts),
    }
