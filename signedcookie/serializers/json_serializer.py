"""JSON sessions (``django.core.signing.JSONSerializer``)."""

from __future__ import annotations

import json

from ..errors import DeserializationError, UnsupportedFormat
from .base import Serializer, SessionSerializer
from .types import Session, normalize_session


def _reject_constant(name: str) -> float:
    raise UnsupportedFormat(f"JSON constant {name} is not supported")


class JSONSessionSerializer(SessionSerializer):
    """Decode JSON objects. Every JSON number becomes a ``float``."""

    kind = Serializer.JSON

    def loads(self, data: bytes) -> Session:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DeserializationError("JSON session is not valid UTF-8") from exc

        try:
            value = json.loads(text, parse_int=float, parse_constant=_reject_constant)
        except json.JSONDecodeError as exc:
            raise DeserializationError(f"invalid JSON session: {exc.msg}") from exc
        except RecursionError as exc:
            raise DeserializationError("JSON session is nested too deeply") from exc
        return normalize_session(value)
