"""Base62 integers, matching ``django.utils.baseconv.base62``."""

from __future__ import annotations

from ..errors import InvalidEncoding

BASE62_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

_INDEX = {ch: i for i, ch in enumerate(BASE62_ALPHABET)}
_UINT64_MAX = 2**64 - 1


def b62_decode(text: str | bytes) -> int:
    """Decode big-endian base62 digits into an unsigned 64-bit integer."""
    if isinstance(text, bytes):
        text = text.decode("latin-1")
    if not text:
        raise InvalidEncoding("empty base62 string")

    n = 0
    for digit in text:
        index = _INDEX.get(digit)
        if index is None:
            raise InvalidEncoding(f"{digit!r} is not a base62 digit")
        n = n * len(BASE62_ALPHABET) + index
    if n > _UINT64_MAX:
        raise InvalidEncoding("base62 value does not fit in 64 bits")
    return n


def b62_encode(n: int) -> str:
    if n < 0:
        raise ValueError("base62 encoding is defined for non-negative integers only")
    if n == 0:
        return BASE62_ALPHABET[0]
    digits = []
    while n:
        n, rem = divmod(n, len(BASE62_ALPHABET))
        digits.append(BASE62_ALPHABET[rem])
    return "".join(reversed(digits))
