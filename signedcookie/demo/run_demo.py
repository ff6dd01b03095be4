"""Decode sample Django session cookies, then replay one after it expired."""

from __future__ import annotations

from datetime import datetime, timezone

from ..decoder import SessionDecoder
from ..logging import configure_logging
from ..serializers import Serializer
from ..utils.time import FixedClock

SAMPLE_SECRET = "70e97f01975bb59ae8804ca164081c46034042aa913a4dac055cad6a7e188bd1"
SAMPLE_COOKIES = {
    Serializer.PICKLE: ".eJxrYKotZNQI5Y1PLC3JiC8tTi2Kz0wpZPI1Yw0VQhJLSkzOTs1LKWQOFSrOz03VKy5PTS3Rc4KIluoBAEyaGG0:1XeDNx:RIsFaf0wIba2w-wXrFz47me6Zcw",
    Serializer.JSON: ".eJyrVopPLC3JiC8tTi2Kz0xRsjI0NjbRQRZMSkzOTs0DyigV5-em6hWXp6aW6DlBBWsB4AYWwQ:1XeDSa:WrnCueUH3vz5K8cZidNGZSd-zQw",
}
ISSUED_DAY = datetime(2014, 10, 15, tzinfo=timezone.utc)
MONTH_LATER = datetime(2014, 11, 15, tzinfo=timezone.utc)


def main() -> None:
    for kind, cookie in SAMPLE_COOKIES.items():
        decoder = SessionDecoder(secret=SAMPLE_SECRET, serializer=kind, clock=FixedClock(ISSUED_DAY))
        print(f"{kind.value.upper()}:", decoder.verify(cookie))

    late = SessionDecoder(secret=SAMPLE_SECRET, serializer=Serializer.PICKLE, clock=FixedClock(MONTH_LATER))
    print("EXPIRED:", late.verify(SAMPLE_COOKIES[Serializer.PICKLE]))

    forged = SAMPLE_COOKIES[Serializer.JSON][:-1] + "x"
    print("FORGED:", SessionDecoder(secret=SAMPLE_SECRET, clock=FixedClock(ISSUED_DAY)).verify(forged))


if __name__ == "__main__":
    configure_logging(level="DEBUG")
    main()
