"""Unpadded URL-safe base64, as produced by ``django.core.signing``."""

from __future__ import annotations

import base64
import binascii
import re

from ..errors import EncodingError

_URLSAFE_RE = re.compile(rb"[A-Za-z0-9_-]*")


def b64_encode(data: bytes) -> str:
    """Return URL-safe base64 text for ``data`` with ``=`` padding stripped."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64_decode(text: str | bytes) -> bytes:
    """Decode unpadded URL-safe base64, restoring the stripped padding first."""
    if isinstance(text, str):
        try:
            raw = text.encode("ascii")
        except UnicodeEncodeError as exc:
            raise EncodingError("base64 input is not ASCII") from exc
    else:
        raw = bytes(text)

    # urlsafe_b64decode silently discards foreign characters.
    if _URLSAFE_RE.fullmatch(raw) is None:
        raise EncodingError("base64 input contains characters outside the URL-safe alphabet")

    padding = b"=" * (-len(raw) % 4)
    try:
        return base64.urlsafe_b64decode(raw + padding)
    except binascii.Error as exc:
        raise EncodingError(f"invalid base64 payload of length {len(raw)}") from exc
