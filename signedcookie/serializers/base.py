"""Serializer kinds and the abstract serializer interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from .types import Session


class Serializer(str, Enum):
    """Session serializer configured on the Django side (``SESSION_SERIALIZER``)."""

    PICKLE = "pickle"
    JSON = "json"

    @classmethod
    def parse(cls, name: "str | Serializer") -> "Serializer":
        """Resolve a serializer from its case-insensitive name."""
        if isinstance(name, Serializer):
            return name
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown serializer '{name}'. Expected one of: {', '.join(s.value for s in cls)}."
            ) from None


class SessionSerializer(ABC):
    """Turns decoded payload bytes into a session mapping."""

    kind: Serializer

    @abstractmethod
    def loads(self, data: bytes) -> Session:
        """Deserialize ``data`` into a fresh session mapping."""
