"""HMAC-SHA1 signatures compatible with ``django.core.signing.Signer``."""

from __future__ import annotations

import hmac
from hashlib import sha1

from ..encoding.b64 import b64_encode
from ..errors import MalformedToken, SignatureMismatch

# Salt used by the signed_cookies SessionStore. Django does not expose a
# setting for it.
SALT = "django.contrib.sessions.backends.signed_cookies"
SEP = ":"


def _to_bytes(value: str | bytes) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def signature(value: str | bytes, secret: str | bytes, salt: str = SALT) -> str:
    """Return the unpadded base64 HMAC-SHA1 of ``value``.

    The key is ``salt + "signer" + secret`` with no delimiter, as Django
    derives it.
    """
    key = _to_bytes(salt) + b"signer" + _to_bytes(secret)
    return b64_encode(hmac.new(key, _to_bytes(value), sha1).digest())


def unsign(secret: str | bytes, token: str, salt: str = SALT) -> str:
    """Return the signed value of ``token`` or raise if the signature is wrong."""
    value, sep, sig = token.rpartition(SEP)
    if not sep:
        raise MalformedToken(f"expected {SEP!r} separator before the signature")

    expected = signature(value, secret, salt)
    if not hmac.compare_digest(_to_bytes(sig), expected.encode("ascii")):
        raise SignatureMismatch("signature does not match")
    return value
