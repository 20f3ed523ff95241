from .errors import CsvProcessingError
from .pipeline import process, process_bytes, process_file

__version__ = "0.1.0"

__all__ = ["CsvProcessingError", "process", "process_bytes", "process_file"]
