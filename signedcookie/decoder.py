"""Decode Django ``signed_cookies`` sessions.

Pipeline: signature check -> timestamp check -> payload unwrap -> serializer.
Every stage raises a ``SignedCookieError`` subclass and nothing is returned
unless all of them pass.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import DEFAULT_MAX_AGE, DecoderConfig
from .errors import SignedCookieError
from .logging import get_logger
from .payload import unwrap_payload
from .serializers import Serializer, Session, get_serializer
from .signing.timestamp import MaxAge, as_max_age, timestamp_unsign
from .utils.time import Clock, SystemClock

logger = get_logger("signedcookie.decoder")


@dataclass(frozen=True)
class DecodeResult:
    valid: bool
    reason: str
    session: Optional[Session] = None


def decode(
    serializer: "Serializer | str",
    max_age: MaxAge,
    secret: str | bytes,
    token: str,
    *,
    clock: Optional[Clock] = None,
) -> Session:
    """Return the session stored in ``token``.

    Raises a ``SignedCookieError`` subclass if the token is malformed, the
    signature does not match ``secret``, the timestamp is older than
    ``max_age`` according to ``clock``, or the payload cannot be decoded.
    """
    kind = Serializer.parse(serializer)
    session_serializer = get_serializer(kind)
    try:
        payload = timestamp_unsign(secret, token, max_age, clock or SystemClock())
        raw = unwrap_payload(payload)
        session = session_serializer.loads(raw.data)
    except SignedCookieError as exc:
        logger.info("session_rejected", serializer=kind.value, reason=exc.reason)
        raise
    logger.debug("session_decoded", serializer=kind.value, compressed=raw.compressed, keys=len(session))
    return session


class SessionDecoder:
    """Decode session cookies for one Django project."""

    def __init__(
        self,
        *,
        secret: str | bytes,
        serializer: "Serializer | str" = Serializer.JSON,
        max_age: MaxAge = DEFAULT_MAX_AGE,
        clock: Optional[Clock] = None,
    ) -> None:
        self._secret = secret
        self.serializer = Serializer.parse(serializer)
        self.max_age = as_max_age(max_age)
        self.clock = clock or SystemClock()

    @classmethod
    def from_config(cls, config: DecoderConfig, *, clock: Optional[Clock] = None) -> "SessionDecoder":
        return cls(secret=config.secret, serializer=config.serializer, max_age=config.max_age, clock=clock)

    def decode(self, token: str) -> Session:
        return decode(self.serializer, self.max_age, self._secret, token, clock=self.clock)

    def verify(self, token: str) -> DecodeResult:
        """Like ``decode`` but reports failures as a result instead of raising."""
        try:
            session = self.decode(token)
        except SignedCookieError as exc:
            return DecodeResult(False, exc.reason)
        return DecodeResult(True, "ok", session=session)


def create_decoder_from_env(*, clock: Optional[Clock] = None) -> SessionDecoder:
    """Create a decoder from ``SIGNEDCOOKIE_*`` environment variables."""
    return SessionDecoder.from_config(DecoderConfig.from_env(), clock=clock)
