"""Timestamped signatures compatible with ``django.core.signing.TimestampSigner``."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Union

from ..encoding.base62 import b62_decode
from ..errors import Expired, InvalidEncoding, InvalidTimestamp, MalformedToken
from ..utils.time import Clock, as_utc
from .signer import SALT, SEP, unsign

MaxAge = Union[timedelta, int, float]


def as_max_age(max_age: MaxAge) -> timedelta:
    """Normalize ``max_age`` (a timedelta or seconds) to a timedelta."""
    if not isinstance(max_age, timedelta):
        max_age = timedelta(seconds=max_age)
    if max_age < timedelta(0):
        raise ValueError("max_age must not be negative")
    return max_age


def split_timestamp(value: str) -> tuple[str, int]:
    """Split ``payload:timestamp`` and decode the base62 timestamp."""
    payload, sep, stamp = value.rpartition(SEP)
    if not sep:
        raise MalformedToken(f"expected {SEP!r} separator before the timestamp")
    try:
        return payload, b62_decode(stamp)
    except InvalidEncoding as exc:
        raise InvalidTimestamp(f"timestamp is not base62: {exc}") from exc


def timestamp_unsign(
    secret: str | bytes,
    token: str,
    max_age: MaxAge,
    clock: Clock,
    salt: str = SALT,
) -> str:
    """Verify the signature, then reject the token if it is older than ``max_age``."""
    age_limit = as_max_age(max_age)
    payload, stamp = split_timestamp(unsign(secret, token, salt))

    try:
        issued_at = datetime.fromtimestamp(stamp, timezone.utc)
        valid_until = issued_at + age_limit
    except (OverflowError, OSError, ValueError) as exc:
        raise InvalidTimestamp(f"timestamp {stamp} is out of range") from exc

    if valid_until < as_utc(clock.now()):
        raise Expired(f"timestamp {stamp} is older than {age_limit}", timestamp=stamp)
    return payload
