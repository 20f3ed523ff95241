from __future__ import annotations


class CsvProcessingError(Exception):
    """Raised by the file/bytes boundaries; the core pipeline never raises."""


class SourceNotFoundError(CsvProcessingError):
    pass


class DecodeError(CsvProcessingError):
    pass
