"""Generic value model shared by every session serializer.

Decoded sessions are plain Python values. ``ValueKind`` names the variants so
callers can tell an ``Integer`` (pickle) from a ``Float`` (JSON) without
caring which serializer produced the session.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Union

from ..errors import DeserializationError, KeyTypeError, TypeMismatch, UnsupportedFormat

GenericValue = Union[str, int, float, bool, None, List["GenericValue"], Dict[str, "GenericValue"]]
Session = Dict[str, GenericValue]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ValueKind(str, Enum):
    """Variant tag of a decoded value."""

    STRING = "String"
    INTEGER = "Integer"
    FLOAT = "Float"
    BOOLEAN = "Boolean"
    NULL = "Null"
    SEQUENCE = "Sequence"
    MAPPING = "Mapping"


def kind_of(value: Any) -> ValueKind:
    """Return the variant tag of ``value``; raise ``UnsupportedFormat`` if it has none."""
    if value is None:
        return ValueKind.NULL
    # bool is an int subclass, so it has to be tested first.
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, dict):
        return ValueKind.MAPPING
    raise UnsupportedFormat(f"values of type {type(value).__name__} are not supported")


def _normalize(value: Any, parents: set[int]) -> GenericValue:
    kind = kind_of(value)
    if kind is ValueKind.INTEGER and not INT64_MIN <= value <= INT64_MAX:
        raise UnsupportedFormat("integer does not fit in 64 bits")
    if kind not in (ValueKind.SEQUENCE, ValueKind.MAPPING):
        return value

    if id(value) in parents:
        raise UnsupportedFormat("self-referencing containers are not supported")
    parents.add(id(value))
    try:
        if kind is ValueKind.SEQUENCE:
            return [_normalize(item, parents) for item in value]
        normalized: Dict[str, GenericValue] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise KeyTypeError(f"non-string key of type {type(key).__name__} in mapping")
            normalized[key] = _normalize(item, parents)
        return normalized
    finally:
        parents.discard(id(value))


def normalize_session(value: Any) -> Session:
    """Validate a decoded object tree and return it as a fresh ``Session``."""
    if not isinstance(value, dict):
        raise TypeMismatch(f"session must be a mapping, got {type(value).__name__}")
    try:
        return _normalize(value, set())  # type: ignore[return-value]
    except RecursionError as exc:
        raise DeserializationError("session is nested too deeply") from exc
