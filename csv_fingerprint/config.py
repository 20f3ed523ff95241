"""
Settings for the service and CLI boundaries.

The core `process()` function takes no configuration; only the boundaries read
these values and pass them down explicitly.

Environment Variables:
    - CSVFP_LOG_LEVEL: Logging level (default: INFO)
    - CSVFP_LOG_JSON: Emit JSON log lines (default: false)
    - CSVFP_STRICT_WIDTH: Reject rows whose field count differs from the header (default: false)
    - CSVFP_MAX_UPLOAD_BYTES: Largest accepted upload in bytes (default: 10MB)
    - CSVFP_ERROR_PREVIEW: Number of errors the CLI prints (default: 5)
"""

from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "CSVFP_"

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DEFAULT_ERROR_PREVIEW = 5


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(ENV_PREFIX + name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_json: bool = False
    strict_width: bool = False
    max_upload_bytes: int = Field(default=DEFAULT_MAX_UPLOAD_BYTES, gt=0)
    error_preview: int = Field(default=DEFAULT_ERROR_PREVIEW, ge=0)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper(cls, v):
        return v.upper() if isinstance(v, str) else v

    @classmethod
    def from_environment(cls) -> "Settings":
        """Load settings from CSVFP_* variables. Raises pydantic.ValidationError on bad values."""
        return cls(
            log_level=os.getenv(ENV_PREFIX + "LOG_LEVEL", "INFO"),
            log_json=_env_flag("LOG_JSON"),
            strict_width=_env_flag("STRICT_WIDTH"),
            max_upload_bytes=os.getenv(ENV_PREFIX + "MAX_UPLOAD_BYTES", str(DEFAULT_MAX_UPLOAD_BYTES)),
            error_preview=os.getenv(ENV_PREFIX + "ERROR_PREVIEW", str(DEFAULT_ERROR_PREVIEW)),
        )
