import pytest

from achparse.errors import ErrorKind, InvalidLineLength, InvalidRecordType
from achparse.lines import PADDING_LINE, classify_record, is_block_padding, split_lines
from achparse.records import RecordType


def test_split_lines_accepts_lf_crlf_and_cr():
    assert split_lines("a\nb\r\nc\rd") == ["a", "b", "c", "d"]


def test_split_lines_drops_trailing_empty_lines_only():
    assert split_lines("a\n\nb\n\n\n") == ["a", "", "b"]
    assert split_lines("a\n  \n") == ["a", "  "]
    assert split_lines("") == []
    assert split_lines("\r\n\r\n") == []


def test_split_lines_keeps_latin1_control_characters():
    line = "x\x85y\x1cz"
    assert split_lines(line + "\n") == [line]


def test_classify_record_maps_type_codes(sample_lines):
    kinds = [classify_record(line) for line in sample_lines]
    assert kinds == [
        RecordType.FILE_HEADER,
        RecordType.BATCH_HEADER,
        RecordType.ENTRY_DETAIL,
        RecordType.ADDENDA,
        RecordType.ENTRY_DETAIL,
        RecordType.ENTRY_DETAIL,
        RecordType.BATCH_CONTROL,
        RecordType.FILE_CONTROL,
    ]


@pytest.mark.parametrize("length", [0, 1, 93, 95, 188])
def test_classify_record_reports_exact_length(length):
    with pytest.raises(InvalidLineLength) as excinfo:
        classify_record("1" * length, line_number=3)
    assert excinfo.value.actual == length
    assert excinfo.value.line_number == 3
    assert excinfo.value.kind is ErrorKind.INVALID_LINE_LENGTH


@pytest.mark.parametrize("char", ["0", "2", "X", " "])
def test_classify_record_rejects_unknown_type(char):
    with pytest.raises(InvalidRecordType) as excinfo:
        classify_record(char + "0" * 93)
    assert excinfo.value.char == char


def test_record_type_labels():
    assert RecordType.ENTRY_DETAIL.label == "EntryDetail"
    assert RecordType.FILE_CONTROL.label == "FileControl"


def test_block_padding_detection(sample_lines):
    assert is_block_padding(PADDING_LINE)
    assert not is_block_padding(sample_lines[-1])
    assert not is_block_padding("9" * 93)
