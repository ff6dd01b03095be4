"""Decoder configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import timedelta

from .serializers.base import Serializer

DEFAULT_MAX_AGE = timedelta(days=14)


@dataclass(frozen=True)
class DecoderConfig:
    """Settings mirrored from the Django project that issues the cookies."""

    secret: str = field(repr=False)
    serializer: Serializer = Serializer.JSON
    max_age: timedelta = DEFAULT_MAX_AGE

    @classmethod
    def from_env(cls) -> "DecoderConfig":
        """Read ``SIGNEDCOOKIE_*`` variables, falling back to ``DJANGO_SECRET_KEY``."""
        secret = os.getenv("SIGNEDCOOKIE_SECRET") or os.getenv("DJANGO_SECRET_KEY")
        if not secret:
            raise ValueError("Set SIGNEDCOOKIE_SECRET or DJANGO_SECRET_KEY to decode session cookies.")
        serializer = Serializer.parse(os.getenv("SIGNEDCOOKIE_SERIALIZER", Serializer.JSON.value))
        max_age_raw = os.getenv("SIGNEDCOOKIE_MAX_AGE")
        max_age = timedelta(seconds=int(max_age_raw)) if max_age_raw else DEFAULT_MAX_AGE
        return cls(secret=secret, serializer=serializer, max_age=max_age)
