"""Payload unwrapping: compression marker, base64 and zlib."""

from __future__ import annotations

import zlib
from dataclasses import dataclass

from .encoding.b64 import b64_decode
from .errors import DecompressionError

COMPRESSION_MARKER = "."


@dataclass(frozen=True)
class RawPayload:
    data: bytes
    compressed: bool


def unwrap_payload(payload: str) -> RawPayload:
    """Strip the compression marker, base64-decode and inflate if needed."""
    compressed = payload.startswith(COMPRESSION_MARKER)
    if compressed:
        payload = payload[len(COMPRESSION_MARKER):]

    data = b64_decode(payload)
    if compressed:
        try:
            data = zlib.decompress(data)
        except zlib.error as exc:
            raise DecompressionError(f"cannot inflate payload: {exc}") from exc
    return RawPayload(data=data, compressed=compressed)


def decode_payload(payload: str) -> bytes:
    """Return the serialized object bytes carried by ``payload``."""
    return unwrap_payload(payload).data
