import json
import pickle
from datetime import timedelta

import pytest
from cookies import ISSUED_DAY, JSON_COOKIE, MONTH_LATER, PICKLE_COOKIE, SECRET

from signedcookie import (
    DEFAULT_MAX_AGE,
    DecoderConfig,
    DecompressionError,
    Expired,
    FixedClock,
    KeyTypeError,
    MalformedToken,
    Serializer,
    SessionDecoder,
    SignatureMismatch,
    SignedCookieError,
    TypeMismatch,
    UnsupportedFormat,
    ValueKind,
    create_decoder_from_env,
    decode,
    kind_of,
)
from signedcookie.demo.run_demo import main as run_demo
from signedcookie.encoding import b64_encode

EXPECTED = {"_auth_user_backend": "some.sweet.Backend", "_auth_user_id": 1334}


def test_decode_pickle_cookie() -> None:
    session = decode(Serializer.PICKLE, DEFAULT_MAX_AGE, SECRET, PICKLE_COOKIE, clock=FixedClock(ISSUED_DAY))
    assert session == EXPECTED
    assert kind_of(session["_auth_user_id"]) is ValueKind.INTEGER


def test_decode_json_cookie() -> None:
    session = decode(Serializer.JSON, DEFAULT_MAX_AGE, SECRET, JSON_COOKIE, clock=FixedClock(ISSUED_DAY))
    assert session == EXPECTED
    assert kind_of(session["_auth_user_id"]) is ValueKind.FLOAT


def test_decode_accepts_bytes_secret_and_serializer_names() -> None:
    session = decode("pickle", DEFAULT_MAX_AGE, SECRET.encode("ascii"), PICKLE_COOKIE, clock=FixedClock(ISSUED_DAY))
    assert session == EXPECTED


@pytest.mark.parametrize(
    ("kind", "cookie"),
    [(Serializer.PICKLE, PICKLE_COOKIE), (Serializer.JSON, JSON_COOKIE)],
)
def test_decode_expired_cookies(kind: Serializer, cookie: str) -> None:
    with pytest.raises(Expired):
        decode(kind, DEFAULT_MAX_AGE, SECRET, cookie, clock=FixedClock(MONTH_LATER))


def test_decode_is_repeatable() -> None:
    clock = FixedClock(ISSUED_DAY)
    first = decode(Serializer.JSON, DEFAULT_MAX_AGE, SECRET, JSON_COOKIE, clock=clock)
    second = decode(Serializer.JSON, DEFAULT_MAX_AGE, SECRET, JSON_COOKIE, clock=clock)
    assert first == second
    first["_auth_user_id"] = 0.0
    assert second["_auth_user_id"] == 1334.0


def test_decode_without_separator_is_malformed() -> None:
    with pytest.raises(MalformedToken):
        decode(Serializer.JSON, DEFAULT_MAX_AGE, SECRET, "garbage", clock=FixedClock(ISSUED_DAY))


def test_decode_with_wrong_serializer_fails() -> None:
    with pytest.raises(SignedCookieError):
        decode(Serializer.JSON, DEFAULT_MAX_AGE, SECRET, PICKLE_COOKIE, clock=FixedClock(ISSUED_DAY))
    with pytest.raises(SignedCookieError):
        decode(Serializer.PICKLE, DEFAULT_MAX_AGE, SECRET, JSON_COOKIE, clock=FixedClock(ISSUED_DAY))


def test_decode_uncompressed_cookie(make_cookie) -> None:
    cookie = make_cookie(json.dumps({"cart": [1, 2], "user": "ann"}).encode())
    session = decode(Serializer.JSON, DEFAULT_MAX_AGE, SECRET, cookie, clock=FixedClock(ISSUED_DAY))
    assert session == {"cart": [1.0, 2.0], "user": "ann"}


def test_decode_compressed_pickle(make_cookie) -> None:
    cookie = make_cookie(pickle.dumps({"items": list(range(50))}, protocol=2), compress=True)
    assert cookie.startswith(".")
    session = decode(Serializer.PICKLE, DEFAULT_MAX_AGE, SECRET, cookie, clock=FixedClock(ISSUED_DAY))
    assert session == {"items": list(range(50))}


def test_decode_bad_compressed_payload(make_cookie) -> None:
    cookie = make_cookie(payload="." + b64_encode(b"plain bytes"))
    with pytest.raises(DecompressionError):
        decode(Serializer.JSON, DEFAULT_MAX_AGE, SECRET, cookie, clock=FixedClock(ISSUED_DAY))


@pytest.mark.parametrize(
    ("kind", "data", "error"),
    [
        (Serializer.JSON, b"[1, 2]", TypeMismatch),
        (Serializer.PICKLE, pickle.dumps((1, 2), protocol=2), TypeMismatch),
        (Serializer.PICKLE, pickle.dumps({1: "x"}, protocol=2), KeyTypeError),
        (Serializer.PICKLE, pickle.dumps({"s": {1}}, protocol=2), UnsupportedFormat),
    ],
)
def test_decode_payload_errors(make_cookie, kind: Serializer, data: bytes, error: type) -> None:
    with pytest.raises(error):
        decode(kind, DEFAULT_MAX_AGE, SECRET, make_cookie(data), clock=FixedClock(ISSUED_DAY))


def test_forged_payload_is_rejected_before_deserializing(make_cookie) -> None:
    cookie = make_cookie(b"cos\nsystem\n(S'echo pwned'\ntR.", secret="attacker-secret")
    with pytest.raises(SignatureMismatch):
        decode(Serializer.PICKLE, DEFAULT_MAX_AGE, SECRET, cookie, clock=FixedClock(ISSUED_DAY))


def test_session_decoder_verify_reports_reasons() -> None:
    decoder = SessionDecoder(secret=SECRET, serializer="pickle", clock=FixedClock(ISSUED_DAY))

    ok = decoder.verify(PICKLE_COOKIE)
    assert ok.valid is True
    assert ok.reason == "ok"
    assert ok.session == EXPECTED

    tampered = decoder.verify(PICKLE_COOKIE[:-1] + "A")
    assert tampered.valid is False
    assert tampered.reason == "signature_mismatch"
    assert tampered.session is None

    assert decoder.verify("nonsense").reason == "malformed_token"

    late = SessionDecoder(secret=SECRET, serializer=Serializer.PICKLE, clock=FixedClock(MONTH_LATER))
    assert late.verify(PICKLE_COOKIE).reason == "expired"


def test_session_decoder_decode_raises() -> None:
    decoder = SessionDecoder(secret=SECRET, clock=FixedClock(ISSUED_DAY))
    assert decoder.serializer is Serializer.JSON
    assert decoder.max_age == timedelta(days=14)
    with pytest.raises(SignatureMismatch):
        decoder.decode(JSON_COOKIE[:-1] + "A")


def test_decoder_config_from_env(monkeypatch) -> None:
    monkeypatch.delenv("DJANGO_SECRET_KEY", raising=False)
    monkeypatch.setenv("SIGNEDCOOKIE_SECRET", SECRET)
    monkeypatch.setenv("SIGNEDCOOKIE_SERIALIZER", "Pickle")
    monkeypatch.setenv("SIGNEDCOOKIE_MAX_AGE", "3600")

    config = DecoderConfig.from_env()
    assert config.serializer is Serializer.PICKLE
    assert config.max_age == timedelta(hours=1)
    assert SECRET not in repr(config)


def test_decoder_config_falls_back_to_django_secret(monkeypatch) -> None:
    monkeypatch.delenv("SIGNEDCOOKIE_SECRET", raising=False)
    monkeypatch.delenv("SIGNEDCOOKIE_SERIALIZER", raising=False)
    monkeypatch.delenv("SIGNEDCOOKIE_MAX_AGE", raising=False)
    monkeypatch.setenv("DJANGO_SECRET_KEY", SECRET)

    decoder = create_decoder_from_env(clock=FixedClock(ISSUED_DAY))
    assert decoder.max_age == DEFAULT_MAX_AGE
    assert decoder.decode(JSON_COOKIE) == EXPECTED


def test_decoder_config_requires_a_secret(monkeypatch) -> None:
    monkeypatch.delenv("SIGNEDCOOKIE_SECRET", raising=False)
    monkeypatch.delenv("DJANGO_SECRET_KEY", raising=False)
    with pytest.raises(ValueError):
        DecoderConfig.from_env()


def test_run_demo(capsys) -> None:
    run_demo()
    out = capsys.readouterr().out
    assert "PICKLE: DecodeResult(valid=True" in out
    assert "JSON: DecodeResult(valid=True" in out
    assert "EXPIRED: DecodeResult(valid=False, reason='expired'" in out
    assert "FORGED: DecodeResult(valid=False, reason='signature_mismatch'" in out
