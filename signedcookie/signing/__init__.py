"""Signature and timestamp verification."""

from .signer import SALT, signature, unsign
from .timestamp import as_max_age, split_timestamp, timestamp_unsign

__all__ = ["SALT", "signature", "unsign", "as_max_age", "split_timestamp", "timestamp_unsign"]
