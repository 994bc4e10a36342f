"""Typed NACHA record structures.

Text fields hold the exact characters sliced from the line (callers trim);
numeric fields are ints, amounts are integer cents, dates are ``datetime.date``.
``line_number`` is the 1-based physical line the record came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

RECORD_LENGTH = 94

DEBIT_CODES = frozenset({27, 37, 28, 38})
CREDIT_CODES = frozenset({22, 32, 23, 33})


class RecordType(str, Enum):
    FILE_HEADER = "1"
    BATCH_HEADER = "5"
    ENTRY_DETAIL = "6"
    ADDENDA = "7"
    BATCH_CONTROL = "8"
    FILE_CONTROL = "9"

    @property
    def label(self) -> str:
        return "".join(part.capitalize() for part in self.name.split("_"))


@dataclass(frozen=True)
class FileHeader:
    record_type: str
    priority_code: str
    immediate_destination: str
    immediate_origin: str
    file_creation_date: date
    file_creation_time: str
    file_id_modifier: str
    record_size: str
    blocking_factor: str
    format_code: str
    immediate_destination_name: str
    immediate_origin_name: str
    reference_code: str
    line_number: int = field(default=0, compare=False)


@dataclass(frozen=True)
class BatchHeader:
    record_type: str
    service_class_code: str
    company_name: str
    company_discretionary_data: str
    company_identification: str
    standard_entry_class_code: str
    company_entry_description: str
    company_descriptive_date: str
    effective_entry_date: date
    settlement_date: str
    originator_status_code: str
    originating_dfi_identification: str
    batch_number: int
    line_number: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Addenda:
    record_type: str
    addenda_type_code: str
    payment_related_information: str
    addenda_sequence_number: int
    entry_detail_sequence_number: int
    line_number: int = field(default=0, compare=False)


@dataclass(frozen=True)
class EntryDetail:
    record_type: str
    transaction_code: int
    receiving_dfi_identification: str
    check_digit: str
    dfi_account_number: str
    amount: int
    individual_identification_number: str
    individual_name: str
    discretionary_data: str
    addenda_record_indicator: str
    trace_number: str
    line_number: int = field(default=0, compare=False)
    addenda: tuple[Addenda, ...] = ()

    @property
    def has_addenda_indicator(self) -> bool:
        return self.addenda_record_indicator == "1"

    @property
    def is_debit(self) -> bool:
        return self.transaction_code in DEBIT_CODES

    @property
    def is_credit(self) -> bool:
        return self.transaction_code in CREDIT_CODES


@dataclass(frozen=True)
class BatchControl:
    record_type: str
    service_class_code: str
    entry_addenda_count: int
    entry_hash: int
    total_debit_amount: int
    total_credit_amount: int
    company_identification: str
    message_authentication_code: str
    reserved: str
    originating_dfi_identification: str
    batch_number: int
    line_number: int = field(default=0, compare=False)


@dataclass(frozen=True)
class FileControl:
    record_type: str
    batch_count: int
    block_count: int
    entry_addenda_count: int
    entry_hash: int
    total_debit_amount: int
    total_credit_amount: int
    reserved: str
    line_number: int = field(default=0, compare=False)


@dataclass(frozen=True)
class Batch:
    header: BatchHeader
    entries: tuple[EntryDetail, ...]
    control: BatchControl


@dataclass(frozen=True)
class AchFile:
    file_header: FileHeader
    batches: tuple[Batch, ...]
    file_control: FileControl
