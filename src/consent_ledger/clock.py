# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation
"""
Timestamp sources.

Ledger records and notifications are stamped by a :class:`Clock`. Timestamps
are timezone-aware UTC and never go backwards for a given clock instance.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Anything callable that returns the current UTC time."""

    def now(self) -> datetime: ...


class SystemClock:
    """
    Wall-clock time, clamped so consecutive readings are non-decreasing.

    A wall clock can step backwards (NTP adjustments); the clamp keeps the
    ledger's timestamps ordered the same way as its sequence ids.
    """

    def __init__(self) -> None:
        self._last: datetime | None = None

    def now(self) -> datetime:
        current = datetime.now(tz=timezone.utc)
        if self._last is not None and current < self._last:
            current = self._last
        self._last = current
        return current


class ManualClock:
    """
    A clock that only moves when told to.

    Useful for deterministic tests and replays.

    Example::

        clock = ManualClock(datetime(2026, 1, 1, tzinfo=timezone.utc))
        clock.advance(seconds=30)
    """

    def __init__(self, start: datetime | None = None) -> None:
        start = start or datetime(2026, 1, 1, tzinfo=timezone.utc)
        if start.tzinfo is None:
            raise ValueError("ManualClock requires a timezone-aware start time.")
        self._current = start

    def now(self) -> datetime:
        return self._current

    def advance(self, seconds: float = 0.0, **kwargs: float) -> datetime:
        """Move the clock forward and return the new time."""
        delta = timedelta(seconds=seconds, **kwargs)
        if delta < timedelta(0):
            raise ValueError("ManualClock cannot move backwards.")
        self._current = self._current + delta
        return self._current

    def set(self, moment: datetime) -> None:
        """Jump to ``moment``. Must not be earlier than the current time."""
        if moment.tzinfo is None:
            raise ValueError("moment must be timezone-aware.")
        if moment < self._current:
            raise ValueError("ManualClock cannot move backwards.")
        self._current = moment
