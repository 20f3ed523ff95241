from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence


@dataclass(frozen=True)
class Validation:
    data: Dict[str, str]
    raw_values: List[str]
    is_valid: bool


def is_empty(value: str) -> bool:
    return not value.strip()


def validate(header: Sequence[str], values: Sequence[str]) -> Validation:
    """
    Pair header names with record values and check every value is non-empty.

    Pairing is positional and stops at the shorter of the two sequences: a short
    row simply has fewer keys, extra trailing values are dropped.
    `raw_values` keeps every paired value untrimmed, in header order, even when a
    repeated header name overwrites an earlier key in `data`.
    """
    data: Dict[str, str] = {}
    raw_values: List[str] = []
    is_valid = True

    for name, value in zip(header, values):
        if is_empty(value):
            is_valid = False
        raw_values.append(value)
        data[name] = value

    return Validation(data=data, raw_values=raw_values, is_valid=is_valid)
