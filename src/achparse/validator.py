"""Control total and entry hash checks run at batch and file close.

Totals are always recomputed from the records themselves; a declared value
that disagrees is a hard error since it means the file was corrupted or
edited by hand.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from achparse.errors import ControlTotalMismatch, HashMismatch
from achparse.layout import parse_digits
from achparse.records import Batch, BatchControl, EntryDetail, FileControl

HASH_MODULUS = 10**10


@dataclass(frozen=True)
class ControlTotals:
    entry_addenda_count: int
    entry_hash: int
    total_debit_amount: int
    total_credit_amount: int


def compute_batch_totals(entries: Sequence[EntryDetail]) -> ControlTotals:
    count = 0
    entry_hash = 0
    debits = 0
    credits = 0
    for entry in entries:
        count += 1 + len(entry.addenda)
        entry_hash += int(entry.receiving_dfi_identification)
        if entry.is_debit:
            debits += entry.amount
        elif entry.is_credit:
            credits += entry.amount
    return ControlTotals(
        entry_addenda_count=count,
        entry_hash=entry_hash % HASH_MODULUS,
        total_debit_amount=debits,
        total_credit_amount=credits,
    )


def compute_file_totals(batches: Sequence[Batch]) -> ControlTotals:
    per_batch = [compute_batch_totals(batch.entries) for batch in batches]
    return ControlTotals(
        entry_addenda_count=sum(t.entry_addenda_count for t in per_batch),
        entry_hash=sum(t.entry_hash for t in per_batch) % HASH_MODULUS,
        total_debit_amount=sum(t.total_debit_amount for t in per_batch),
        total_credit_amount=sum(t.total_credit_amount for t in per_batch),
    )


def _compare(
    declared: BatchControl | FileControl, computed: ControlTotals, scope: str
) -> None:
    line = declared.line_number or None
    if declared.entry_addenda_count != computed.entry_addenda_count:
        raise ControlTotalMismatch(
            "entry_addenda_count",
            declared.entry_addenda_count,
            computed.entry_addenda_count,
            scope,
            line,
        )
    if declared.entry_hash != computed.entry_hash:
        raise HashMismatch(declared.entry_hash, computed.entry_hash, scope, line)
    for name in ("total_debit_amount", "total_credit_amount"):
        expected = getattr(declared, name)
        actual = getattr(computed, name)
        if expected != actual:
            raise ControlTotalMismatch(name, expected, actual, scope, line)


def validate_batch(entries: Sequence[EntryDetail], control: BatchControl) -> ControlTotals:
    """Check a closing batch control against its entries."""
    totals = compute_batch_totals(entries)
    _compare(control, totals, "batch")
    return totals


def expected_block_count(physical_records: int, blocking_factor: int = 10) -> int:
    return math.ceil(physical_records / blocking_factor)


def validate_file(batches: Sequence[Batch], control: FileControl) -> ControlTotals:
    """Check the file control against all batches."""
    line = control.line_number or None
    if control.batch_count != len(batches):
        raise ControlTotalMismatch("batch_count", control.batch_count, len(batches), "file", line)
    totals = compute_file_totals(batches)
    _compare(control, totals, "file")
    return totals


def validate_block_count(
    control: FileControl, physical_records: int, blocking_factor: str = "10"
) -> int:
    """Check the declared block count; ``physical_records`` includes padding lines."""
    factor = parse_digits(blocking_factor, "blocking_factor")
    blocks = expected_block_count(physical_records, factor or 10)
    if control.block_count != blocks:
        raise ControlTotalMismatch(
            "block_count", control.block_count, blocks, "file", control.line_number or None
        )
    return blocks
