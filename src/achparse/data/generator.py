"""Synthetic NACHA file generator.

Builds well-formed ACH text from plain specs:
- one File Header, any number of PPD/CCD style batches
- Entry Detail records with optional type 05 addenda
- Batch/File Control records whose counts, entry hash and debit/credit totals
  are computed from the entries
- optional all-9 block padding to a multiple of ten records

Used for fixtures, benchmarks and regression tests.
"""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, datetime

from achparse.records import CREDIT_CODES, DEBIT_CODES, RECORD_LENGTH

DEFAULT_CREATED = datetime(2024, 1, 2, 9, 30)
BLOCKING_FACTOR = 10


@dataclass
class EntrySpec:
    transaction_code: int
    receiving_dfi: str  # first 8 digits of the routing number
    account_number: str
    amount_cents: int
    individual_name: str
    check_digit: str = "0"
    individual_id: str = ""
    addenda: Sequence[str] = ()


@dataclass
class BatchSpec:
    entries: Sequence[EntrySpec] = field(default_factory=list)
    company_name: str = "ACME PAYROLL"
    company_id: str = "1234567890"
    sec_code: str = "PPD"
    description: str = "PAYROLL"
    effective_date: date = date(2024, 1, 3)
    service_class_code: str = "200"
    originating_dfi: str = "12345678"


def _text(value: object, length: int) -> str:
    return str(value).ljust(length)[:length]


def _num(value: int, length: int) -> str:
    return str(value).rjust(length, "0")[-length:]


def file_header_line(
    destination: str = "123456780",
    origin: str = "1234567801",
    created: datetime = DEFAULT_CREATED,
    file_id_modifier: str = "A",
    destination_name: str = "YOUR BANK",
    origin_name: str = "YOUR COMPANY",
    reference_code: str = "",
) -> str:
    return (
        "1"
        + "01"
        + destination.rjust(10)[:10]
        + origin.rjust(10)[:10]
        + created.strftime("%y%m%d")
        + created.strftime("%H%M")
        + _text(file_id_modifier, 1)
        + "094"
        + _num(BLOCKING_FACTOR, 2)
        + "1"
        + _text(destination_name, 23)
        + _text(origin_name, 23)
        + _text(reference_code, 8)
    )


def batch_header_line(batch: BatchSpec, batch_number: int) -> str:
    return (
        "5"
        + _text(batch.service_class_code, 3)
        + _text(batch.company_name, 16)
        + _text("", 20)
        + _text(batch.company_id, 10)
        + _text(batch.sec_code, 3)
        + _text(batch.description, 10)
        + _text("", 6)
        + batch.effective_date.strftime("%y%m%d")
        + _text("", 3)
        + "1"
        + _text(batch.originating_dfi, 8)
        + _num(batch_number, 7)
    )


def entry_detail_line(entry: EntrySpec, trace_number: str) -> str:
    return (
        "6"
        + _num(entry.transaction_code, 2)
        + _text(entry.receiving_dfi, 8)
        + _text(entry.check_digit, 1)
        + _text(entry.account_number, 17)
        + _num(entry.amount_cents, 10)
        + _text(entry.individual_id, 15)
        + _text(entry.individual_name, 22)
        + _text("", 2)
        + ("1" if entry.addenda else "0")
        + _text(trace_number, 15)
    )


def addenda_line(
    info: str, addenda_sequence: int, entry_sequence: int, type_code: str = "05"
) -> str:
    return (
        "7"
        + _text(type_code, 2)
        + _text(info, 80)
        + _num(addenda_sequence, 4)
        + _num(entry_sequence, 7)
    )


def batch_control_line(
    batch: BatchSpec,
    batch_number: int,
    entry_addenda_count: int,
    entry_hash: int,
    total_debit: int,
    total_credit: int,
) -> str:
    return (
        "8"
        + _text(batch.service_class_code, 3)
        + _num(entry_addenda_count, 6)
        + _num(entry_hash, 10)
        + _num(total_debit, 12)
        + _num(total_credit, 12)
        + _text(batch.company_id, 10)
        + _text("", 19)
        + _text("", 6)
        + _text(batch.originating_dfi, 8)
        + _num(batch_number, 7)
    )


def file_control_line(
    batch_count: int,
    block_count: int,
    entry_addenda_count: int,
    entry_hash: int,
    total_debit: int,
    total_credit: int,
) -> str:
    return (
        "9"
        + _num(batch_count, 6)
        + _num(block_count, 6)
        + _num(entry_addenda_count, 8)
        + _num(entry_hash, 10)
        + _num(total_debit, 12)
        + _num(total_credit, 12)
        + _text("", 39)
    )


def build_ach_file(
    batches: Sequence[BatchSpec],
    *,
    created: datetime = DEFAULT_CREATED,
    pad_blocks: bool = True,
    line_ending: str = "\n",
) -> str:
    """Render batches into a complete file with correct control records."""
    lines = [file_header_line(created=created)]
    file_count = file_hash = file_debit = file_credit = 0
    trace_seq = 0

    for batch_number, batch in enumerate(batches, start=1):
        lines.append(batch_header_line(batch, batch_number))
        count = entry_hash = debit = credit = 0
        for entry in batch.entries:
            trace_seq += 1
            lines.append(entry_detail_line(entry, batch.originating_dfi[:8] + _num(trace_seq, 7)))
            for addenda_seq, info in enumerate(entry.addenda, start=1):
                lines.append(addenda_line(info, addenda_seq, trace_seq))
            count += 1 + len(entry.addenda)
            entry_hash += int(entry.receiving_dfi[:8])
            if entry.transaction_code in DEBIT_CODES:
                debit += entry.amount_cents
            elif entry.transaction_code in CREDIT_CODES:
                credit += entry.amount_cents
        lines.append(batch_control_line(batch, batch_number, count, entry_hash, debit, credit))
        file_count += count
        file_hash += entry_hash
        file_debit += debit
        file_credit += credit

    block_count = math.ceil((len(lines) + 1) / BLOCKING_FACTOR)
    lines.append(
        file_control_line(len(batches), block_count, file_count, file_hash, file_debit, file_credit)
    )
    if pad_blocks:
        while len(lines) % BLOCKING_FACTOR:
            lines.append("9" * RECORD_LENGTH)
    return line_ending.join(lines) + line_ending


def generate_synthetic_dataset(
    count: int = 8, *, seed: int = 1234, batches: int = 2
) -> tuple[str, list[dict]]:
    """Generate a seeded ACH file with ``count`` entries spread over ``batches``."""
    rng = random.Random(seed)
    names: Sequence[str] = ("ALICE WANDERDUST", "BILLY HOLIDAY", "RACHEL WELCH", "JO SMITH")
    routing: Sequence[str] = ("07640125", "21000021", "12345678", "03100005")
    codes: Sequence[int] = (22, 27, 32, 37)
    buckets: list[list[EntrySpec]] = [[] for _ in range(max(batches, 1))]
    metadata: list[dict] = []

    for i in range(count):
        batch_index = i % len(buckets)
        addenda = ["SYNTHETIC PAYMENT INFO"] if rng.random() < 0.25 else []
        entry = EntrySpec(
            transaction_code=rng.choice(codes),
            receiving_dfi=rng.choice(routing),
            account_number=f"{rng.randint(10_000, 99_999_999)}",
            amount_cents=rng.randint(1_00, 5_000_00),
            individual_name=rng.choice(names),
            individual_id=f"ID{i:05d}",
            addenda=addenda,
        )
        buckets[batch_index].append(entry)
        metadata.append(
            {
                "batch_number": batch_index + 1,
                "transaction_code": entry.transaction_code,
                "receiving_dfi": entry.receiving_dfi,
                "amount_cents": entry.amount_cents,
                "individual_name": entry.individual_name,
                "addenda": len(addenda),
            }
        )

    specs = [
        BatchSpec(entries=entries, company_name=f"COMPANY {n + 1}")
        for n, entries in enumerate(buckets)
    ]
    return build_ach_file(specs), metadata
