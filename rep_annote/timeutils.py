# rep_annote/timeutils.py
from __future__ import annotations

import re

from .domain import TimestampParts


TIMESTAMP_PATTERN = re.compile(r"^([0-5]?[0-9]):([0-5][0-9])$")


# -----------------------------
# "minute:second" codec
# -----------------------------

def is_timestamp(text: str) -> bool:
    if text is None:
        return False
    return TIMESTAMP_PATTERN.fullmatch(str(text)) is not None


def _split(text: str):
    # No bounds check here; validation runs first. Malformed halves raise ValueError.
    minute, second = str(text).split(":")
    return int(minute), int(second)


def parse_timestamp(text: str) -> TimestampParts:
    minute, second = _split(text)
    return TimestampParts(minute=minute, second=second)


def to_seconds(text: str) -> int:
    minute, second = _split(text)
    return minute * 60 + second


def format_timestamp(seconds: float) -> str:
    """Seconds -> "m:ss" (no zero padding on minutes, matching typed input)."""
    if seconds is None:
        seconds = 0.0
    s = max(0, int(float(seconds)))
    return f"{s // 60}:{s % 60:02d}"
