"""signedcookie package.

Verify and decode session cookies written by Django's
``django.contrib.sessions.backends.signed_cookies`` backend.
"""

from .config import DEFAULT_MAX_AGE, DecoderConfig
from .decoder import DecodeResult, SessionDecoder, create_decoder_from_env, decode
from .errors import (
    DecompressionError,
    DeserializationError,
    EncodingError,
    Expired,
    InvalidEncoding,
    InvalidTimestamp,
    KeyTypeError,
    MalformedToken,
    SignatureMismatch,
    SignedCookieError,
    TypeMismatch,
    UnsupportedFormat,
)
from .serializers import GenericValue, Serializer, Session, ValueKind, kind_of
from .utils.time import Clock, FixedClock, SystemClock

__all__ = [
    "decode",
    "SessionDecoder",
    "DecodeResult",
    "create_decoder_from_env",
    "DecoderConfig",
    "DEFAULT_MAX_AGE",
    "Serializer",
    "Session",
    "GenericValue",
    "ValueKind",
    "kind_of",
    "Clock",
    "FixedClock",
    "SystemClock",
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
