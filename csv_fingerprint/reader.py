"""
Record reader.

Splits raw CSV text into a header and a lazy sequence of data records.

Rules:
- Standard CSV quoting (comma separator, double-quote enclosure, doubled quotes).
- The first record that parses becomes the header.
- Blank lines are not records.
- A malformed record yields a ParseFailure and reading resumes at the physical
  line after the one where that record started.
"""

from __future__ import annotations

import csv
import io
import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, List, Optional, Union

from .rules import DELIMITER, FIRST_DATA_LINE, QUOTECHAR, WIDTH_MISMATCH_TEMPLATE

logger = logging.getLogger(__name__)


# Fields have no size limit; 2**31 - 1 is the largest value every platform's C long accepts.
MAX_FIELD_SIZE = 2**31 - 1
csv.field_size_limit(MAX_FIELD_SIZE)


@dataclass(frozen=True)
class RawRecord:
    line: int
    values: List[str]


@dataclass(frozen=True)
class ParseFailure:
    line: int
    message: str


RecordOutcome = Union[RawRecord, ParseFailure]


class _Lines:
    """Lazy line iterator that remembers the lines of the current record, so the
    csv reader can be resynced at the line after the record's first one."""

    def __init__(self, text: str):
        # newline="" keeps \r\n inside quoted fields intact for the csv module
        self._source = io.StringIO(text, newline="")
        self._pending: Deque[str] = deque()
        self._record: List[str] = []

    def __iter__(self) -> "_Lines":
        return self

    def __next__(self) -> str:
        line = self._pending.popleft() if self._pending else self._source.readline()
        if not line:
            raise StopIteration
        self._record.append(line)
        return line

    def mark(self) -> None:
        self._record = []

    def rewind(self) -> None:
        self._pending.extendleft(reversed(self._record[1:]))
        self._record = []


class RecordReader:
    def __init__(self, text: str, strict_width: bool = False):
        if text.startswith("\ufeff"):
            text = text[1:]
        self._lines = _Lines(text)
        self._reader = self._new_reader()
        self._strict_width = strict_width
        self._consumed = False
        self.header: List[str] = self._read_header()

    def _new_reader(self):
        return csv.reader(self._lines, delimiter=DELIMITER, quotechar=QUOTECHAR, strict=True)

    def _next_row(self) -> Optional[Union[List[str], csv.Error]]:
        """Return the next non-blank row, a csv.Error, or None at end of input."""
        while True:
            self._lines.mark()
            try:
                row = next(self._reader)
            except StopIteration:
                return None
            except csv.Error as exc:
                self._lines.rewind()
                self._reader = self._new_reader()
                return exc
            if row:
                return row

    def _read_header(self) -> List[str]:
        while True:
            row = self._next_row()
            if row is None:
                return []
            if isinstance(row, csv.Error):
                logger.warning("Skipping unparseable header candidate: %s", row)
                continue
            return row

    def __iter__(self) -> Iterator[RecordOutcome]:
        if self._consumed:
            raise RuntimeError("RecordReader can only be iterated once")
        self._consumed = True
        return self._records()

    def _records(self) -> Iterator[RecordOutcome]:
        line = FIRST_DATA_LINE
        while True:
            row = self._next_row()
            if row is None:
                return
            if isinstance(row, csv.Error):
                yield ParseFailure(line=line, message=str(row))
            elif self._strict_width and len(row) != len(self.header):
                yield ParseFailure(
                    line=line,
                    message=WIDTH_MISMATCH_TEMPLATE.format(len(row), len(self.header)),
                )
            else:
                yield RawRecord(line=line, values=row)
            line += 1


def read_records(text: str, strict_width: bool = False) -> RecordReader:
    """Read the header eagerly and return a reader over the remaining records."""
    return RecordReader(text, strict_width=strict_width)
