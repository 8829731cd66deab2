"""Conversions between stored datetimes and epoch-millisecond wire values"""

import time
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MILLISECOND = timedelta(milliseconds=1)


def now_millis() -> int:
    return time.time_ns() // 1_000_000


def to_millis(value: Optional[datetime]) -> Optional[int]:
    """Datetime to epoch milliseconds. Naive values are treated as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // ONE_MILLISECOND


def to_millis_or_now(value: Optional[datetime]) -> int:
    millis = to_millis(value)
    return millis if millis is not None else now_millis()


def from_millis(value: Optional[Union[int, float]]) -> Optional[datetime]:
    """Epoch milliseconds to an aware UTC datetime; 0 and None mean absent"""
    if not value:
        return None
    return EPOCH + timedelta(milliseconds=value)
