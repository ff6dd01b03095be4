"""Utility helpers for time handling."""

from .time import Clock, FixedClock, SystemClock, as_utc, utc_now

__all__ = ["Clock", "FixedClock", "SystemClock", "as_utc", "utc_now"]
