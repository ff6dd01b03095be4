"""Text codecs used by the signed cookie wire format."""

from .b64 import b64_decode, b64_encode
from .base62 import BASE62_ALPHABET, b62_decode, b62_encode

__all__ = ["b64_encode", "b64_decode", "BASE62_ALPHABET", "b62_decode", "b62_encode"]
