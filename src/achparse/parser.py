"""Sequential File -> Batch -> Entry -> Addenda assembler and the parse() entry point.

Record order in a NACHA file is a flat sequence with one level of nesting, so
the assembler is an explicit state machine keyed on (state, record type). The
legality of a record is decided before its fields are extracted, so ordering
errors do not depend on field content.
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum
from pathlib import Path

from achparse.config import ParserConfig
from achparse.errors import EmptyFile, MissingFileControl, MissingFileHeader, UnexpectedRecordOrder
from achparse.layout import build_record
from achparse.lines import classify_record, is_block_padding, split_lines
from achparse.logs import get_logger
from achparse.records import (
    AchFile,
    Addenda,
    Batch,
    BatchControl,
    BatchHeader,
    EntryDetail,
    FileControl,
    FileHeader,
    RecordType,
)
from achparse.validator import validate_batch, validate_block_count, validate_file

logger = get_logger(__name__)


class State(str, Enum):
    START = "Start"
    IN_FILE = "InFile"
    IN_BATCH = "InBatch"
    IN_ENTRY = "InEntry"
    BATCH_CLOSED = "BatchClosed"
    FILE_CLOSED = "FileClosed"


_TRANSITIONS: dict[tuple[State, RecordType], str] = {
    (State.START, RecordType.FILE_HEADER): "_open_file",
    (State.IN_FILE, RecordType.BATCH_HEADER): "_open_batch",
    (State.BATCH_CLOSED, RecordType.BATCH_HEADER): "_open_batch",
    (State.IN_BATCH, RecordType.ENTRY_DETAIL): "_add_entry",
    (State.IN_ENTRY, RecordType.ENTRY_DETAIL): "_add_entry",
    (State.IN_ENTRY, RecordType.ADDENDA): "_add_addenda",
    (State.IN_BATCH, RecordType.BATCH_CONTROL): "_close_batch",
    (State.IN_ENTRY, RecordType.BATCH_CONTROL): "_close_batch",
    (State.IN_FILE, RecordType.FILE_CONTROL): "_close_file",
    (State.BATCH_CLOSED, RecordType.FILE_CONTROL): "_close_file",
}


class HierarchyAssembler:
    """Consumes classified lines in order and builds an ``AchFile``.

    One instance per parse; nothing is shared between instances.
    """

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()
        self.state = State.START
        self.physical_records = 0
        self._file_header: FileHeader | None = None
        self._file_control: FileControl | None = None
        self._batches: list[Batch] = []
        self._batch_header: BatchHeader | None = None
        self._entries: list[EntryDetail] = []
        self._entry: EntryDetail | None = None
        self._addenda: list[Addenda] = []

    def feed(self, record_type: RecordType, line: str, line_number: int) -> None:
        self.physical_records += 1
        if self.state is State.FILE_CLOSED:
            if self.config.allow_block_padding and is_block_padding(line):
                return
            raise UnexpectedRecordOrder(
                record_type.label, self.state.value, line_number, "record after file control"
            )

        handler = _TRANSITIONS.get((self.state, record_type))
        if handler is None:
            if self.state is State.START:
                raise MissingFileHeader(record_type.label, line_number)
            raise UnexpectedRecordOrder(record_type.label, self.state.value, line_number)

        record = build_record(line, record_type, line_number)
        getattr(self, handler)(record)

    def finish(self) -> AchFile:
        if self._file_header is None or self._file_control is None:
            raise MissingFileControl(self.state.value)
        if self.config.validate_block_count:
            validate_block_count(
                self._file_control, self.physical_records, self._file_header.blocking_factor
            )
        return AchFile(
            file_header=self._file_header,
            batches=tuple(self._batches),
            file_control=self._file_control,
        )

    def _open_file(self, header: FileHeader) -> None:
        self._file_header = header
        self.state = State.IN_FILE

    def _open_batch(self, header: BatchHeader) -> None:
        self._batch_header = header
        self._entries = []
        self._entry = None
        self.state = State.IN_BATCH

    def _flush_entry(self) -> None:
        if self._entry is None:
            return
        if self._addenda:
            self._entry = replace(self._entry, addenda=tuple(self._addenda))
        self._entries.append(self._entry)
        self._entry = None
        self._addenda = []

    def _add_entry(self, entry: EntryDetail) -> None:
        self._flush_entry()
        self._entry = entry
        self.state = State.IN_ENTRY

    def _add_addenda(self, addenda: Addenda) -> None:
        entry = self._entry
        if entry is None:
            raise UnexpectedRecordOrder(
                RecordType.ADDENDA.label, self.state.value, addenda.line_number, "no open entry"
            )
        if not entry.has_addenda_indicator:
            raise UnexpectedRecordOrder(
                RecordType.ADDENDA.label,
                self.state.value,
                addenda.line_number,
                f"entry on line {entry.line_number} has addenda indicator "
                f"{entry.addenda_record_indicator!r}",
            )
        self._addenda.append(addenda)

    def _close_batch(self, control: BatchControl) -> None:
        if self._batch_header is None:
            raise UnexpectedRecordOrder(
                RecordType.BATCH_CONTROL.label,
                self.state.value,
                control.line_number,
                "no open batch",
            )
        self._flush_entry()
        totals = validate_batch(self._entries, control)
        self._batches.append(
            Batch(header=self._batch_header, entries=tuple(self._entries), control=control)
        )
        logger.debug(
            "batch_closed",
            batch_number=control.batch_number,
            entries=len(self._entries),
            entry_addenda_count=totals.entry_addenda_count,
            total_debit_amount=totals.total_debit_amount,
            total_credit_amount=totals.total_credit_amount,
            line=control.line_number,
        )
        self._batch_header = None
        self._entries = []
        self.state = State.BATCH_CLOSED

    def _close_file(self, control: FileControl) -> None:
        validate_file(self._batches, control)
        self._file_control = control
        self.state = State.FILE_CLOSED


def parse(content: str | bytes, config: ParserConfig | None = None) -> AchFile:
    """Parse ACH text into an ``AchFile`` or raise the first ``AchError``."""
    cfg = config or ParserConfig()
    if isinstance(content, bytes):
        content = content.decode(cfg.encoding)
    lines = split_lines(content)
    if not lines:
        raise EmptyFile()

    assembler = HierarchyAssembler(cfg)
    for line_number, line in enumerate(lines, start=1):
        record_type = classify_record(line, line_number)
        assembler.feed(record_type, line, line_number)
    ach = assembler.finish()
    logger.debug(
        "file_parsed",
        lines=len(lines),
        batches=len(ach.batches),
        entry_addenda_count=ach.file_control.entry_addenda_count,
    )
    return ach


def parse_file(path: Path | str, config: ParserConfig | None = None) -> AchFile:
    return parse(Path(path).read_bytes(), config)
