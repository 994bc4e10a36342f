"""Physical line segmentation and record classification."""

from __future__ import annotations

import re

from achparse.errors import InvalidLineLength, InvalidRecordType
from achparse.records import RECORD_LENGTH, RecordType

# str.splitlines() would also break on \x85, \x1c etc., which are legal Latin-1 payload.
LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
PADDING_LINE = "9" * RECORD_LENGTH


def split_lines(content: str) -> list[str]:
    """Split on CR, LF or CRLF and drop trailing empty lines.

    Only zero-length lines are dropped; a trailing line of spaces is still a
    record and gets classified (and rejected) like any other.
    """
    if not content:
        return []
    lines = LINE_BREAK_RE.split(content)
    while lines and lines[-1] == "":
        lines.pop()
    return lines


def classify_record(line: str, line_number: int | None = None) -> RecordType:
    if len(line) != RECORD_LENGTH:
        raise InvalidLineLength(len(line), line_number)
    try:
        return RecordType(line[0])
    except ValueError:
        raise InvalidRecordType(line[0], line_number) from None


def is_block_padding(line: str) -> bool:
    """NACHA fills the last block with all-9 records."""
    return line == PADDING_LINE
