from __future__ import annotations

import hashlib
from typing import Sequence

from .rules import DELIMITER


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def canonical_row(raw_values: Sequence[str]) -> str:
    return DELIMITER.join(raw_values)


def fingerprint(raw_values: Sequence[str]) -> str:
    """Lowercase hex SHA-256 of the comma-joined raw values, UTF-8 encoded."""
    # surrogatepass: lone surrogates can't come from UTF-8 input, but str can hold them
    return _sha256_hex(canonical_row(raw_values).encode("utf-8", "surrogatepass"))
