from datetime import date

import pytest
from conftest import replace_at

from achparse.errors import NumericFieldParseError
from achparse.layout import LAYOUTS, build_record, check_layouts, parse_digits
from achparse.records import (
    Addenda,
    BatchControl,
    BatchHeader,
    EntryDetail,
    FileControl,
    FileHeader,
    RecordType,
)


def test_layouts_cover_every_position():
    check_layouts()
    assert set(LAYOUTS) == set(RecordType)


def test_file_header_fields(sample_lines):
    fh = build_record(sample_lines[0], RecordType.FILE_HEADER, 1)
    assert isinstance(fh, FileHeader)
    assert fh.record_type == "1"
    assert fh.priority_code == "01"
    assert fh.immediate_destination == " 123456780"
    assert fh.immediate_origin.strip() == "1234567801"
    assert fh.file_creation_date == date(2014, 9, 2)
    assert fh.file_creation_time == "0123"
    assert fh.file_id_modifier == "A"
    assert fh.record_size == "094"
    assert fh.blocking_factor == "10"
    assert fh.format_code == "1"
    assert fh.immediate_destination_name.strip() == "YOUR BANK"
    assert fh.immediate_origin_name.strip() == "YOUR COMPANY"
    assert fh.line_number == 1


def test_batch_header_fields(sample_lines):
    bh = build_record(sample_lines[1], RecordType.BATCH_HEADER)
    assert isinstance(bh, BatchHeader)
    assert bh.service_class_code == "200"
    assert bh.company_name.strip() == "YOUR COMPANY"
    assert bh.company_identification == "1234567890"
    assert bh.standard_entry_class_code == "PPD"
    assert bh.company_entry_description.strip() == "PAYROLL"
    assert bh.company_descriptive_date == "      "
    assert bh.effective_entry_date == date(2014, 9, 3)
    assert bh.originator_status_code == "1"
    assert bh.originating_dfi_identification == "12345678"
    assert bh.batch_number == 1


def test_entry_detail_fields(sample_lines):
    ed = build_record(sample_lines[2], RecordType.ENTRY_DETAIL)
    assert isinstance(ed, EntryDetail)
    assert ed.transaction_code == 22
    assert ed.receiving_dfi_identification == "12345678"
    assert ed.check_digit == "0"
    assert ed.dfi_account_number.strip() == "11232132"
    assert len(ed.dfi_account_number) == 17
    assert ed.amount == 1000
    assert ed.individual_name.strip() == "ALICE WANDERDUST"
    assert ed.addenda_record_indicator == "1"
    assert ed.has_addenda_indicator
    assert ed.trace_number == "123456780000001"
    assert ed.is_credit and not ed.is_debit
    assert ed.addenda == ()


def test_addenda_fields(sample_lines):
    ad = build_record(sample_lines[3], RecordType.ADDENDA)
    assert isinstance(ad, Addenda)
    assert ad.addenda_type_code == "05"
    assert ad.payment_related_information.startswith("HERE IS SOME ADDITIONAL")
    assert len(ad.payment_related_information) == 80
    assert ad.addenda_sequence_number == 0
    assert ad.entry_detail_sequence_number == 1


def test_batch_control_fields(sample_lines):
    bc = build_record(sample_lines[6], RecordType.BATCH_CONTROL)
    assert isinstance(bc, BatchControl)
    assert bc.service_class_code == "200"
    assert bc.entry_addenda_count == 4
    assert bc.entry_hash == 37014587
    assert bc.total_debit_amount == 15000
    assert bc.total_credit_amount == 2213
    assert bc.company_identification == "1234567890"
    assert bc.originating_dfi_identification == "12345678"
    assert bc.batch_number == 1


def test_file_control_fields(sample_lines):
    fc = build_record(sample_lines[7], RecordType.FILE_CONTROL)
    assert isinstance(fc, FileControl)
    assert fc.batch_count == 1
    assert fc.block_count == 1
    assert fc.entry_addenda_count == 4
    assert fc.entry_hash == 37014587
    assert fc.total_debit_amount == 15000
    assert fc.total_credit_amount == 2213


def test_non_digit_amount_reports_field_and_raw_value(sample_lines):
    line = replace_at(sample_lines[2], 30, "00000X1000")
    with pytest.raises(NumericFieldParseError) as excinfo:
        build_record(line, RecordType.ENTRY_DETAIL, 3)
    err = excinfo.value
    assert err.field == "amount"
    assert err.raw_value == "00000X1000"
    assert err.line_number == 3


def test_invalid_effective_date_is_rejected(sample_lines):
    line = replace_at(sample_lines[1], 70, "141332")
    with pytest.raises(NumericFieldParseError) as excinfo:
        build_record(line, RecordType.BATCH_HEADER)
    assert excinfo.value.field == "effective_entry_date"


def test_routing_number_must_be_digits(sample_lines):
    line = replace_at(sample_lines[2], 4, "1234567A")
    with pytest.raises(NumericFieldParseError) as excinfo:
        build_record(line, RecordType.ENTRY_DETAIL)
    assert excinfo.value.field == "receiving_dfi_identification"


def test_parse_digits_tolerates_padding_spaces():
    assert parse_digits("  12345  ", "f") == 12345
    assert parse_digits("0000012345", "f") == 12345


@pytest.mark.parametrize("raw", ["", "    ", "12.34", "-123", "12 34", "\xb2\xb3"])
def test_parse_digits_rejects_non_digits(raw):
    with pytest.raises(NumericFieldParseError):
        parse_digits(raw, "f")
