"""Error types raised while verifying and decoding signed session cookies."""

from __future__ import annotations


class SignedCookieError(ValueError):
    """Base class for every decode failure. All of them mean: reject the token."""

    reason = "invalid"


class MalformedToken(SignedCookieError):
    reason = "malformed_token"


class SignatureMismatch(SignedCookieError):
    reason = "signature_mismatch"


class InvalidTimestamp(SignedCookieError):
    reason = "invalid_timestamp"


class Expired(SignedCookieError):
    """The embedded timestamp plus the max age lies before the current time."""

    reason = "expired"

    def __init__(self, message: str, *, timestamp: int) -> None:
        super().__init__(message)
        self.timestamp = timestamp


class EncodingError(SignedCookieError):
    reason = "encoding_error"


class InvalidEncoding(EncodingError):
    """Input contains symbols outside a codec's alphabet."""

    reason = "invalid_encoding"


class DecompressionError(SignedCookieError):
    reason = "decompression_error"


class DeserializationError(SignedCookieError):
    reason = "deserialization_error"


class UnsupportedFormat(DeserializationError):
    """The payload asks for an opcode or type outside the supported subset."""

    reason = "unsupported_format"


class TypeMismatch(SignedCookieError):
    reason = "type_mismatch"


class KeyTypeError(SignedCookieError):
    reason = "key_type_error"


__all__ = [
    "SignedCookieError",
    "MalformedToken",
    "SignatureMismatch",
    "InvalidTimestamp",
    "Expired",
    "EncodingError",
    "InvalidEncoding",
    "DecompressionError",
    "DeserializationError",
    "UnsupportedFormat",
    "TypeMismatch",
    "KeyTypeError",
]
