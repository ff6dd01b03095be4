"""UTC time helpers and the clocks used for expiry checks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Clock(Protocol):
    """Read-only source of the current time."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock."""

    def now(self) -> datetime:
        return utc_now()


@dataclass(frozen=True)
class FixedClock:
    """Clock pinned to one instant, for tests and replaying old cookies."""

    instant: datetime

    def now(self) -> datetime:
        return as_utc(self.instant)
