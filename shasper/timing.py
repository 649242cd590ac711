"""Wall-clock time and slot helpers for block production."""

from __future__ import annotations

import time
from datetime import timedelta

RANDAO_INHERENT_IDENTIFIER = b"shasperr"
TIMESTAMP_INHERENT_IDENTIFIER = b"shaspert"

_NANOS_PER_SEC = 1_000_000_000


def timestamp_now() -> timedelta | None:
    """Time since the Unix epoch, or None if the clock is before it."""
    nanos = time.time_ns()
    if nanos < 0:
        return None
    return timedelta(microseconds=nanos // 1000)


def timestamp_and_slot_now(slot_duration: int) -> tuple[int, int] | None:
    """Current whole seconds and the slot they fall in."""
    now = timestamp_now()
    if now is None:
        return None
    secs = now // timedelta(seconds=1)
    return secs, secs // slot_duration


def slot_now(slot_duration: int) -> int | None:
    """The current slot."""
    result = timestamp_and_slot_now(slot_duration)
    return None if result is None else result[1]


def time_until_next(now: timedelta, slot_duration: int) -> timedelta:
    """Time remaining from `now` until the next slot boundary."""
    secs = now // timedelta(seconds=1)
    subsec_nanos = (now - timedelta(seconds=secs)).microseconds * 1000
    remaining_full_secs = slot_duration - (secs % slot_duration) - 1
    remaining_nanos = _NANOS_PER_SEC - subsec_nanos
    total_nanos = remaining_full_secs * _NANOS_PER_SEC + remaining_nanos
    return timedelta(microseconds=total_nanos // 1000)