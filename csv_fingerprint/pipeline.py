"""
Row-by-row processing: parse -> validate -> fingerprint -> aggregate.

Every data record ends up in exactly one of the two report buckets, in input
order. Nothing here raises for a `str` input; serialization problems degrade to
the fallback document.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from charset_normalizer import from_bytes
from pydantic_core import PydanticSerializationError

from .errors import CsvProcessingError, DecodeError, SourceNotFoundError
from .fingerprint import fingerprint
from .models import AcceptedRow, RejectedRow, Report
from .reader import ParseFailure, RecordOutcome, read_records
from .rules import EMPTY_FIELDS_REASON, PARSE_FAILURE_TEMPLATE, SERIALIZATION_FALLBACK
from .validate import validate

logger = logging.getLogger(__name__)


def aggregate(header: Sequence[str], records: Iterable[RecordOutcome]) -> Report:
    accepted: List[AcceptedRow] = []
    rejected: List[RejectedRow] = []

    for record in records:
        if isinstance(record, ParseFailure):
            logger.debug("line %d rejected: parse failure (%s)", record.line, record.message)
            rejected.append(RejectedRow(
                line=record.line,
                reason=PARSE_FAILURE_TEMPLATE.format(record.message),
                data=None,
            ))
            continue

        result = validate(header, record.values)
        if result.is_valid:
            accepted.append(AcceptedRow(
                line=record.line,
                data=result.data,
                fingerprint=fingerprint(result.raw_values),
            ))
        else:
            logger.debug("line %d rejected: empty fields", record.line)
            rejected.append(RejectedRow(
                line=record.line,
                reason=EMPTY_FIELDS_REASON,
                data=result.data,
            ))

    return Report(accepted=accepted, rejected=rejected)


def render(report: Report) -> str:
    """Compact JSON with `processed_rows` / `errors` keys, or the fallback document."""
    try:
        return report.model_dump_json(by_alias=True)
    except (PydanticSerializationError, ValueError):
        logger.exception("Failed to serialize report, returning fallback document")
        return SERIALIZATION_FALLBACK


def build_report(csv_text: str, strict_width: bool = False) -> Report:
    reader = read_records(csv_text, strict_width=strict_width)
    report = aggregate(reader.header, reader)
    logger.info(
        "Processed %d rows: %d accepted, %d rejected",
        len(report.accepted) + len(report.rejected),
        len(report.accepted),
        len(report.rejected),
    )
    return report


def process(csv_text: str, strict_width: bool = False) -> str:
    """Validate and fingerprint every row of `csv_text`; always returns a JSON string."""
    return render(build_report(csv_text, strict_width=strict_width))


def decode_csv_bytes(raw: bytes) -> str:
    """
    Decode uploaded bytes to text.

    Rules:
    - UTF-8 (with or without BOM) is tried first, since that is the contract.
    - Otherwise decode using charset-normalizer's best guess.
    - If nothing fits, raise DecodeError instead of guessing with replacements.
    """
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass

    match = from_bytes(raw).best()
    if match is None:
        raise DecodeError("Input is not valid text in any detectable encoding")

    logger.info("Input is not UTF-8, decoded as %s", match.encoding)
    return str(match)


def process_bytes(raw: bytes, strict_width: bool = False) -> str:
    return process(decode_csv_bytes(raw), strict_width=strict_width)


def process_file(path: Union[str, Path], strict_width: bool = False) -> Dict[str, Any]:
    """Process a CSV file and return the report as a plain dict."""
    source = Path(path)
    if not source.is_file():
        raise SourceNotFoundError(f"File not found: {source}")

    try:
        # no newline translation: quoted fields keep their \r\n
        text = source.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CsvProcessingError(f"Failed to process CSV: {exc}") from exc

    return json.loads(process(text, strict_width=strict_width))


def summarize(result: Dict[str, Any], preview: Optional[int] = None) -> Dict[str, Any]:
    """Counts plus the first `preview` errors of a processed result."""
    errors = result.get("errors", [])
    return {
        "valid_rows": len(result.get("processed_rows", [])),
        "errors": len(errors),
        "error_preview": errors if preview is None else errors[:preview],
    }
