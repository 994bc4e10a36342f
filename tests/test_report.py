import json
from pathlib import Path

import pyarrow as pa

from achparse.data.generator import BatchSpec, EntrySpec, build_ach_file
from achparse.parser import parse
from achparse.report import (
    append_csv,
    append_jsonl,
    entries_to_arrow,
    entries_to_jsonl,
    file_to_dict,
    summarize_file,
    summarize_log,
    summary_to_row,
)


def _two_batches():
    return parse(
        build_ach_file(
            [
                BatchSpec(
                    entries=[
                        EntrySpec(22, "07640125", "1", 1000, "A", addenda=["NOTE"]),
                        EntrySpec(27, "21000021", "2", 250, "B"),
                    ]
                ),
                BatchSpec(entries=[EntrySpec(32, "12345678", "3", 40, "C")], sec_code="CCD"),
            ]
        )
    )


def test_summarize_file():
    summary = summarize_file(_two_batches())
    assert summary.batches == 2
    assert summary.entries == 3
    assert summary.addenda == 1
    assert summary.total_debit_amount == 250
    assert summary.total_credit_amount == 1040
    assert summary.sec_code_counts == {"PPD": 1, "CCD": 1}
    assert summary.creation_date == "2024-01-02"


def test_file_to_dict_is_json_ready(sample_ach):
    payload = file_to_dict(parse(sample_ach))
    text = json.dumps(payload)
    assert payload["file_header"]["file_creation_date"] == "2014-09-02"
    entry = payload["batches"][0]["entries"][0]
    assert entry["amount"] == 1000
    assert len(entry["addenda"]) == 1
    assert "RACHEL WELCH" in text


def test_entries_to_jsonl(tmp_path: Path):
    out = tmp_path / "out" / "entries.jsonl"
    assert entries_to_jsonl(_two_batches(), out) == 3
    rows = [json.loads(line) for line in out.read_text().splitlines()]
    assert rows[0]["addenda"] == ["NOTE"]
    assert rows[2]["sec_code"] == "CCD"
    assert rows[2]["batch_number"] == 2


def test_entries_to_arrow(tmp_path: Path):
    out = tmp_path / "entries.arrow"
    assert entries_to_arrow(_two_batches(), out) == 3
    with pa.memory_map(str(out), "r") as source:
        table = pa.ipc.open_file(source).read_all()
    assert table.num_rows == 3
    assert table.column("amount_cents").to_pylist() == [1000, 250, 40]


def test_summary_to_row_and_csv_log(tmp_path: Path):
    summary = summarize_file(_two_batches())
    row = summary_to_row(summary, source="payroll.ach", tag="nightly")
    out = tmp_path / "log.csv"
    append_csv(out, row)
    append_csv(out, row)
    content = out.read_text()
    assert content.count("payroll.ach") == 2
    assert content.count("total_debit_amount") == 1

    agg = summarize_log(out)
    assert agg["runs"] == 2
    assert agg["entries_total"] == 6
    assert agg["sec_code_counts"] == {"PPD": 2, "CCD": 2}


def test_summary_to_row_accepts_mapping():
    row = summary_to_row({"entries": 4, "total_credit_amount": 10}, source="x")
    assert row["entries"] == 4
    assert row["total_debit_amount"] == 0


def test_jsonl_log_with_nested_summary(tmp_path: Path):
    out = tmp_path / "log.jsonl"
    append_jsonl(out, {"source": "a.ach", "tag": None, "summary": summarize_file(_two_batches())})
    agg = summarize_log(out)
    assert agg["runs"] == 1
    assert agg["total_credit_amount"] == 1040
