from __future__ import annotations

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class AcceptedRow(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    line: int
    data: Dict[str, str]
    fingerprint: str = Field(alias="hash", examples=["9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08"])


class RejectedRow(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    line: int
    reason: str = Field(alias="error")
    data: Optional[Dict[str, str]] = None


class Report(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    accepted: List[AcceptedRow] = Field(default_factory=list, alias="processed_rows")
    rejected: List[RejectedRow] = Field(default_factory=list, alias="errors")


class HealthResponse(BaseModel):
    ok: bool = True
