"""
Deterministic processing rules.

This file exists to make the report contract explicit and enforceable.
"""

DELIMITER = ","
QUOTECHAR = '"'

EMPTY_FIELDS_REASON = "Row contains empty fields."
PARSE_FAILURE_TEMPLATE = "Failed to parse row: {}"
WIDTH_MISMATCH_TEMPLATE = "found record with {} fields, but the header has {} fields"

# Kept as-is for compatibility: this document does not follow the normal report schema.
SERIALIZATION_FALLBACK = '{"errors":["Failed to serialize result"]}'

FIRST_DATA_LINE = 2
