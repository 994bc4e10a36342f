"""Fixed-width field layouts for the six NACHA record types.

Offsets are 1-based and inclusive, as printed in the NACHA rules:
- TEXT: raw slice, kept as-is
- UINT / CENTS: digits only (surrounding blanks tolerated), parsed to int
- DATE: YYMMDD calendar date
- DIGITS: text that must be all digits (routing numbers)
- LITERAL: the record type code
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from achparse.errors import NumericFieldParseError
from achparse.records import (
    RECORD_LENGTH,
    Addenda,
    BatchControl,
    BatchHeader,
    EntryDetail,
    FileControl,
    FileHeader,
    RecordType,
)


class FieldKind(str, Enum):
    TEXT = "text"
    UINT = "uint"
    CENTS = "cents"
    DATE = "date"
    DIGITS = "digits"
    LITERAL = "literal"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    start: int
    length: int
    kind: FieldKind = FieldKind.TEXT

    @property
    def end(self) -> int:
        return self.start + self.length - 1

    def slice(self, line: str) -> str:
        return line[self.start - 1 : self.start - 1 + self.length]


U, C, D, L = FieldKind.UINT, FieldKind.CENTS, FieldKind.DATE, FieldKind.LITERAL

LAYOUTS: dict[RecordType, tuple[FieldSpec, ...]] = {
    RecordType.FILE_HEADER: (
        FieldSpec("record_type", 1, 1, L),
        FieldSpec("priority_code", 2, 2),
        FieldSpec("immediate_destination", 4, 10),
        FieldSpec("immediate_origin", 14, 10),
        FieldSpec("file_creation_date", 24, 6, D),
        FieldSpec("file_creation_time", 30, 4),
        FieldSpec("file_id_modifier", 34, 1),
        FieldSpec("record_size", 35, 3),
        FieldSpec("blocking_factor", 38, 2),
        FieldSpec("format_code", 40, 1),
        FieldSpec("immediate_destination_name", 41, 23),
        FieldSpec("immediate_origin_name", 64, 23),
        FieldSpec("reference_code", 87, 8),
    ),
    RecordType.BATCH_HEADER: (
        FieldSpec("record_type", 1, 1, L),
        FieldSpec("service_class_code", 2, 3),
        FieldSpec("company_name", 5, 16),
        FieldSpec("company_discretionary_data", 21, 20),
        FieldSpec("company_identification", 41, 10),
        FieldSpec("standard_entry_class_code", 51, 3),
        FieldSpec("company_entry_description", 54, 10),
        FieldSpec("company_descriptive_date", 64, 6),
        FieldSpec("effective_entry_date", 70, 6, D),
        FieldSpec("settlement_date", 76, 3),
        FieldSpec("originator_status_code", 79, 1),
        FieldSpec("originating_dfi_identification", 80, 8),
        FieldSpec("batch_number", 88, 7, U),
    ),
    RecordType.ENTRY_DETAIL: (
        FieldSpec("record_type", 1, 1, L),
        FieldSpec("transaction_code", 2, 2, U),
        FieldSpec("receiving_dfi_identification", 4, 8, FieldKind.DIGITS),
        FieldSpec("check_digit", 12, 1),
        FieldSpec("dfi_account_number", 13, 17),
        FieldSpec("amount", 30, 10, C),
        FieldSpec("individual_identification_number", 40, 15),
        FieldSpec("individual_name", 55, 22),
        FieldSpec("discretionary_data", 77, 2),
        FieldSpec("addenda_record_indicator", 79, 1),
        FieldSpec("trace_number", 80, 15),
    ),
    RecordType.ADDENDA: (
        FieldSpec("record_type", 1, 1, L),
        FieldSpec("addenda_type_code", 2, 2),
        FieldSpec("payment_related_information", 4, 80),
        FieldSpec("addenda_sequence_number", 84, 4, U),
        FieldSpec("entry_detail_sequence_number", 88, 7, U),
    ),
    RecordType.BATCH_CONTROL: (
        FieldSpec("record_type", 1, 1, L),
        FieldSpec("service_class_code", 2, 3),
        FieldSpec("entry_addenda_count", 5, 6, U),
        FieldSpec("entry_hash", 11, 10, U),
        FieldSpec("total_debit_amount", 21, 12, C),
        FieldSpec("total_credit_amount", 33, 12, C),
        FieldSpec("company_identification", 45, 10),
        FieldSpec("message_authentication_code", 55, 19),
        FieldSpec("reserved", 74, 6),
        FieldSpec("originating_dfi_identification", 80, 8),
        FieldSpec("batch_number", 88, 7, U),
    ),
    RecordType.FILE_CONTROL: (
        FieldSpec("record_type", 1, 1, L),
        FieldSpec("batch_count", 2, 6, U),
        FieldSpec("block_count", 8, 6, U),
        FieldSpec("entry_addenda_count", 14, 8, U),
        FieldSpec("entry_hash", 22, 10, U),
        FieldSpec("total_debit_amount", 32, 12, C),
        FieldSpec("total_credit_amount", 44, 12, C),
        FieldSpec("reserved", 56, 39),
    ),
}

RECORD_CLASSES: dict[RecordType, type] = {
    RecordType.FILE_HEADER: FileHeader,
    RecordType.BATCH_HEADER: BatchHeader,
    RecordType.ENTRY_DETAIL: EntryDetail,
    RecordType.ADDENDA: Addenda,
    RecordType.BATCH_CONTROL: BatchControl,
    RecordType.FILE_CONTROL: FileControl,
}


def parse_digits(raw: str, field_name: str, line_number: int | None = None) -> int:
    digits = raw.strip(" ")
    # isdigit() alone accepts superscripts like '\xb2', which are valid Latin-1.
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise NumericFieldParseError(field_name, raw, line_number)
    return int(digits)


def parse_yymmdd(raw: str, field_name: str, line_number: int | None = None) -> date:
    if len(raw) != 6 or not (raw.isascii() and raw.isdigit()):
        raise NumericFieldParseError(field_name, raw, line_number)
    try:
        return datetime.strptime(raw, "%y%m%d").date()
    except ValueError:
        raise NumericFieldParseError(field_name, raw, line_number) from None


def coerce(spec: FieldSpec, raw: str, line_number: int | None = None) -> Any:
    if spec.kind in (FieldKind.UINT, FieldKind.CENTS):
        return parse_digits(raw, spec.name, line_number)
    if spec.kind is FieldKind.DATE:
        return parse_yymmdd(raw, spec.name, line_number)
    if spec.kind is FieldKind.DIGITS and not (raw.isascii() and raw.isdigit()):
        raise NumericFieldParseError(spec.name, raw, line_number)
    return raw


def extract_fields(
    line: str, record_type: RecordType, line_number: int | None = None
) -> dict[str, Any]:
    """Slice a classified 94-character line into coerced field values."""
    return {spec.name: coerce(spec, spec.slice(line), line_number) for spec in LAYOUTS[record_type]}


def build_record(line: str, record_type: RecordType, line_number: int = 0) -> Any:
    values = extract_fields(line, record_type, line_number)
    return RECORD_CLASSES[record_type](**values, line_number=line_number)


def check_layouts() -> None:
    """Raise if any layout leaves a gap, overlaps, or misses the 94th position."""
    for record_type, specs in LAYOUTS.items():
        position = 1
        for spec in specs:
            if spec.start != position:
                raise AssertionError(f"{record_type.label}.{spec.name} starts at {spec.start}")
            position = spec.end + 1
        if position - 1 != RECORD_LENGTH:
            raise AssertionError(f"{record_type.label} covers {position - 1} positions")
