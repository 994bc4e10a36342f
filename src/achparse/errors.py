"""Closed error taxonomy for ACH parsing.

Every failure raised by the parser is one of the ``AchError`` subclasses below.
Each carries an ``ErrorKind`` tag plus the structured context needed to point an
operator at the offending line, so callers can either catch a subclass or
dispatch on ``err.kind``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    INVALID_LINE_LENGTH = "invalid_line_length"
    INVALID_RECORD_TYPE = "invalid_record_type"
    UNEXPECTED_RECORD_ORDER = "unexpected_record_order"
    MISSING_FILE_HEADER = "missing_file_header"
    MISSING_FILE_CONTROL = "missing_file_control"
    NUMERIC_FIELD_PARSE_ERROR = "numeric_field_parse_error"
    HASH_MISMATCH = "hash_mismatch"
    CONTROL_TOTAL_MISMATCH = "control_total_mismatch"
    EMPTY_FILE = "empty_file"


class AchError(Exception):
    """Base class; never raised directly."""

    kind: ErrorKind

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number

    def context(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"kind": self.kind.value, "message": str(self)}
        if self.line_number is not None:
            payload["line_number"] = self.line_number
        payload.update(self.context())
        return payload


def _at(line_number: int | None) -> str:
    return f" (line {line_number})" if line_number is not None else ""


class InvalidLineLength(AchError):
    kind = ErrorKind.INVALID_LINE_LENGTH

    def __init__(self, actual: int, line_number: int | None = None) -> None:
        super().__init__(
            f"Invalid line length: expected 94, got {actual}{_at(line_number)}", line_number
        )
        self.actual = actual

    def context(self) -> dict[str, Any]:
        return {"actual": self.actual}


class InvalidRecordType(AchError):
    kind = ErrorKind.INVALID_RECORD_TYPE

    def __init__(self, char: str, line_number: int | None = None) -> None:
        super().__init__(f"Invalid record type: {char!r}{_at(line_number)}", line_number)
        self.char = char

    def context(self) -> dict[str, Any]:
        return {"char": self.char}


class UnexpectedRecordOrder(AchError):
    kind = ErrorKind.UNEXPECTED_RECORD_ORDER

    def __init__(
        self,
        record_type: str,
        state: str,
        line_number: int | None = None,
        reason: str | None = None,
    ) -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(
            f"Unexpected {record_type} record in state {state}{_at(line_number)}{detail}",
            line_number,
        )
        self.record_type = record_type
        self.state = state
        self.reason = reason

    def context(self) -> dict[str, Any]:
        return {"record_type": self.record_type, "state": self.state, "reason": self.reason}


class MissingFileHeader(UnexpectedRecordOrder):
    """A record other than the File Header opened the file."""

    kind = ErrorKind.MISSING_FILE_HEADER

    def __init__(self, record_type: str, line_number: int | None = None) -> None:
        super().__init__(record_type, "Start", line_number, "file header must come first")
        self.args = (f"Missing file header: first record is {record_type}{_at(line_number)}",)


class MissingFileControl(AchError):
    kind = ErrorKind.MISSING_FILE_CONTROL

    def __init__(self, state: str) -> None:
        super().__init__(f"Missing file control record: input ended in state {state}")
        self.state = state

    def context(self) -> dict[str, Any]:
        return {"state": self.state}


class NumericFieldParseError(AchError):
    kind = ErrorKind.NUMERIC_FIELD_PARSE_ERROR

    def __init__(self, field: str, raw_value: str, line_number: int | None = None) -> None:
        super().__init__(
            f"Invalid numeric field {field!r}: {raw_value!r}{_at(line_number)}", line_number
        )
        self.field = field
        self.raw_value = raw_value

    def context(self) -> dict[str, Any]:
        return {"field": self.field, "raw_value": self.raw_value}


class HashMismatch(AchError):
    kind = ErrorKind.HASH_MISMATCH

    def __init__(
        self, expected: int, computed: int, scope: str = "batch", line_number: int | None = None
    ) -> None:
        super().__init__(
            f"Entry hash mismatch in {scope} control: declared {expected}, "
            f"computed {computed}{_at(line_number)}",
            line_number,
        )
        self.expected = expected
        self.computed = computed
        self.scope = scope

    def context(self) -> dict[str, Any]:
        return {"expected": self.expected, "computed": self.computed, "scope": self.scope}


class ControlTotalMismatch(AchError):
    kind = ErrorKind.CONTROL_TOTAL_MISMATCH

    def __init__(
        self,
        field: str,
        expected: int,
        computed: int,
        scope: str = "batch",
        line_number: int | None = None,
    ) -> None:
        super().__init__(
            f"{scope.capitalize()} control {field} mismatch: declared {expected}, "
            f"computed {computed}{_at(line_number)}",
            line_number,
        )
        self.field = field
        self.expected = expected
        self.computed = computed
        self.scope = scope

    def context(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "expected": self.expected,
            "computed": self.computed,
            "scope": self.scope,
        }


class EmptyFile(AchError):
    kind = ErrorKind.EMPTY_FILE

    def __init__(self) -> None:
        super().__init__("Empty file: no records to parse")
