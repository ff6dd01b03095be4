"""Session serializers and the generic value model they share."""

from .base import Serializer, SessionSerializer
from .json_serializer import JSONSessionSerializer
from .pickle_serializer import PickleSessionSerializer, RestrictedUnpickler
from .types import GenericValue, Session, ValueKind, kind_of, normalize_session

_SERIALIZERS = {
    Serializer.JSON: JSONSessionSerializer,
    Serializer.PICKLE: PickleSessionSerializer,
}


def get_serializer(kind: "Serializer | str") -> SessionSerializer:
    """Return a fresh serializer instance for ``kind``."""
    return _SERIALIZERS[Serializer.parse(kind)]()


__all__ = [
    "Serializer",
    "SessionSerializer",
    "JSONSessionSerializer",
    "PickleSessionSerializer",
    "RestrictedUnpickler",
    "GenericValue",
    "Session",
    "ValueKind",
    "kind_of",
    "normalize_session",
    "get_serializer",
]
