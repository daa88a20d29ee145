"""
Key duration classes.

Maps the `type` field of a key record onto the lifetime granted at first
activation. Known names form a closed enumeration; "<N> days" is parsed as
a custom duration and everything else falls back to one day.
"""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

SECOND_MS = 1000
DAY_MS = 24 * 60 * 60 * SECOND_MS

_CUSTOM_DAYS = re.compile(r"^\s*(\d+)")


class KeyType(str, Enum):
    LIFETIME = "lifetime"
    MONTH = "month"
    WEEK = "week"
    THREE_DAY = "3day"
    DAY = "day"
    SECOND = "second"
    CUSTOM = "custom"    # "<N> days"
    UNKNOWN = "unknown"  # anything else


FIXED_DURATIONS = {
    KeyType.LIFETIME: 10 * 365 * DAY_MS,
    KeyType.MONTH: 30 * DAY_MS,
    KeyType.WEEK: 7 * DAY_MS,
    KeyType.THREE_DAY: 3 * DAY_MS,
    KeyType.DAY: DAY_MS,
    KeyType.SECOND: SECOND_MS,
}

FALLBACK_DURATION = DAY_MS


@dataclass(frozen=True)
class KeyDuration:
    """Parsed key type with the duration it grants (milliseconds)."""
    kind: KeyType
    millis: int


def parse_key_type(raw: Optional[str]) -> KeyDuration:
    """
    Resolve a raw key type string.

    Parameters:
    - raw: value of the record's `type` field (may be None or a non-string)

    Returns:
    - KeyDuration: always defined; unrecognised input yields the 1 day fallback
    """
    if not isinstance(raw, str):
        return KeyDuration(KeyType.UNKNOWN, FALLBACK_DURATION)

    for kind, millis in FIXED_DURATIONS.items():
        if raw == kind.value:
            return KeyDuration(kind, millis)

    if "days" in raw:
        match = _CUSTOM_DAYS.match(raw)
        if match:
            return KeyDuration(KeyType.CUSTOM, int(match.group(1)) * DAY_MS)

    return KeyDuration(KeyType.UNKNOWN, FALLBACK_DURATION)


def duration_millis(raw: Optional[str]) -> int:
    """Duration in milliseconds granted by a key type."""
    return parse_key_type(raw).millis
