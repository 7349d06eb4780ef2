"""Tests for core.totp and core.hotp."""

import hashlib
import hmac

import pyotp
import pytest

from core.errors import GenerationError, InvalidConfig, InvalidKey, OTPError
from core.hotp import Algorithm, hotp_value
from core.totp import (
    TotpConfig,
    TotpResult,
    generate,
    generate_totp,
    remaining_seconds,
    time_counter,
)
from core.utils import decode_secret


# ── RFC 4226 Appendix D test vectors ─────────────────────────────────────────
# Secret: "12345678901234567890" (as bytes)
RFC_SECRET = b"12345678901234567890"
RFC_HOTP_EXPECTED = [
    "755224", "287082", "359152", "969429", "338314",
    "254676", "287922", "162583", "399871", "520489",
]

EXAMPLE_SECRET = "JBSWY3DPEHPK3PXP"


@pytest.mark.parametrize("counter,expected", enumerate(RFC_HOTP_EXPECTED))
def test_hotp_rfc4226_vectors(counter: int, expected: str) -> None:
    code = hotp_value(RFC_SECRET, counter=counter, digits=6, algorithm=Algorithm.SHA1)
    assert code == expected, f"HOTP counter={counter}: got {code}, expected {expected}"


# ── RFC 6238 TOTP test vectors ────────────────────────────────────────────────
# Source: RFC 6238, Appendix B

_SHA1_KEY = b"12345678901234567890"
_SHA256_KEY = b"12345678901234567890123456789012"
_SHA512_KEY = b"1234567890123456789012345678901234567890123456789012345678901234"

_TOTP_VECTORS = [
    # (timestamp, algorithm, secret_bytes, expected)
    (59,          Algorithm.SHA1,   _SHA1_KEY,   "94287082"),
    (59,          Algorithm.SHA256, _SHA256_KEY, "46119246"),
    (59,          Algorithm.SHA512, _SHA512_KEY, "90693936"),
    (1111111109,  Algorithm.SHA1,   _SHA1_KEY,   "07081804"),
    (1111111109,  Algorithm.SHA256, _SHA256_KEY, "68084774"),
    (1111111109,  Algorithm.SHA512, _SHA512_KEY, "25091201"),
    (1111111111,  Algorithm.SHA1,   _SHA1_KEY,   "14050471"),
    (1234567890,  Algorithm.SHA1,   _SHA1_KEY,   "89005924"),
    (2000000000,  Algorithm.SHA1,   _SHA1_KEY,   "69279037"),
    (20000000000, Algorithm.SHA1,   _SHA1_KEY,   "65353130"),
    (20000000000, Algorithm.SHA256, _SHA256_KEY, "77737706"),
    (20000000000, Algorithm.SHA512, _SHA512_KEY, "47863826"),
]


@pytest.mark.parametrize("ts,alg,secret,expected", _TOTP_VECTORS)
def test_totp_rfc6238_vectors(
    ts: int, alg: Algorithm, secret: bytes, expected: str
) -> None:
    config = TotpConfig(digits=8, period=30, algorithm=alg)
    code, _ = generate(secret, config, now=float(ts))
    assert code == expected, f"TOTP ts={ts} {alg}: got {code}, expected {expected}"


def test_generate_totp_wrapper_matches_generate() -> None:
    assert generate_totp(_SHA1_KEY, digits=8, timestamp=59) == "94287082"


# ── Known answer for the example secret ──────────────────────────────────────

def _reference_totp(key: bytes, timestamp: int, digits: int, period: int) -> str:
    """Straight RFC 6238 derivation, written independently of core.hotp."""
    counter = (timestamp // period).to_bytes(8, "big")
    digest = hmac.new(key, counter, hashlib.sha1).digest()
    offset = digest[19] & 0xF
    value = int.from_bytes(digest[offset : offset + 4], "big") & 0x7FFFFFFF
    return f"{value % 10 ** digits:0{digits}d}"


def test_example_secret_decodes_to_known_bytes() -> None:
    assert decode_secret(EXAMPLE_SECRET) == b"Hello!\xde\xad\xbe\xef"


def test_example_secret_matches_pyotp() -> None:
    key = decode_secret(EXAMPLE_SECRET)
    code, remaining = generate(key, TotpConfig(digits=6, period=30), now=59)
    assert code == pyotp.TOTP(EXAMPLE_SECRET, digits=6, interval=30).at(59)
    assert code == _reference_totp(key, 59, 6, 30)
    assert remaining == 1


@pytest.mark.parametrize("ts", [0, 29, 30, 59, 60, 1_700_000_000])
def test_example_secret_matches_reference_over_time(ts: int) -> None:
    key = decode_secret(EXAMPLE_SECRET)
    totp = pyotp.TOTP(EXAMPLE_SECRET)
    assert generate(key, now=ts).code == totp.at(ts)


@pytest.mark.parametrize("digits,period", [(4, 15), (7, 45), (8, 60)])
def test_non_default_settings_match_pyotp(digits: int, period: int) -> None:
    key = decode_secret(EXAMPLE_SECRET)
    ts = 1_234_567_890
    code, _ = generate(key, TotpConfig(digits=digits, period=period), now=ts)
    assert code == pyotp.TOTP(EXAMPLE_SECRET, digits=digits, interval=period).at(ts)


# ── Determinism / window stability ───────────────────────────────────────────

def test_generate_is_deterministic() -> None:
    config = TotpConfig()
    results = {generate(RFC_SECRET, config, now=1_000_000) for _ in range(5)}
    assert len(results) == 1


def test_same_window_same_code() -> None:
    config = TotpConfig(digits=6, period=30)
    assert generate(RFC_SECRET, config, now=31).code == generate(RFC_SECRET, config, now=59).code


def test_next_window_new_code() -> None:
    config = TotpConfig(digits=6, period=30)
    # Counter 1 and 2 of the RFC 4226 vectors
    assert generate(RFC_SECRET, config, now=59).code == "287082"
    assert generate(RFC_SECRET, config, now=60).code == "359152"


def test_fractional_timestamp_floors() -> None:
    config = TotpConfig()
    assert generate(RFC_SECRET, config, now=59.999) == generate(RFC_SECRET, config, now=59)


def test_result_is_a_tuple() -> None:
    result = generate(RFC_SECRET, now=59)
    assert isinstance(result, TotpResult)
    code, remaining = result
    assert code == result.code == "287082"
    assert remaining == result.remaining_seconds == 1


def test_generate_uses_clock_when_now_omitted(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("core.totp.time.time", lambda: 59.0)
    assert generate(RFC_SECRET) == ("287082", 1)


# ── Digits / period bounds ────────────────────────────────────────────────────

@pytest.mark.parametrize("digits", [4, 5, 6, 7, 8])
def test_code_length_matches_digits(digits: int) -> None:
    code, _ = generate(RFC_SECRET, TotpConfig(digits=digits), now=1111111109)
    assert len(code) == digits
    assert code.isdigit()


def test_zero_padding_kept() -> None:
    # 8-digit value at this time starts with a zero
    code, _ = generate(RFC_SECRET, TotpConfig(digits=8), now=1111111109)
    assert code == "07081804"


@pytest.mark.parametrize("digits", [3, 9, 0, -6])
def test_digits_out_of_range(digits: int) -> None:
    with pytest.raises(InvalidConfig):
        TotpConfig(digits=digits)


@pytest.mark.parametrize("period", [15, 60])
def test_period_bounds_accepted(period: int) -> None:
    code, remaining = generate(RFC_SECRET, TotpConfig(period=period), now=0)
    assert len(code) == 6
    assert remaining == period


@pytest.mark.parametrize("period", [14, 61, 0])
def test_period_out_of_range(period: int) -> None:
    with pytest.raises(InvalidConfig):
        TotpConfig(period=period)


@pytest.mark.parametrize("bad", [True, 6.0, "6"])
def test_digits_must_be_int(bad: object) -> None:
    with pytest.raises(InvalidConfig):
        TotpConfig(digits=bad)  # type: ignore[arg-type]


def test_invalid_config_is_generation_error() -> None:
    with pytest.raises(GenerationError):
        TotpConfig(period=61)


# ── Key / time validation ─────────────────────────────────────────────────────

def test_empty_key_rejected() -> None:
    with pytest.raises(InvalidKey):
        generate(b"", now=59)


def test_negative_time_rejected() -> None:
    with pytest.raises(GenerationError):
        generate(RFC_SECRET, now=-1)


def test_errors_are_value_errors() -> None:
    with pytest.raises(ValueError):
        generate(b"", now=59)
    assert issubclass(OTPError, ValueError)


# ── Counter / remaining seconds ───────────────────────────────────────────────

def test_time_counter() -> None:
    assert time_counter(59, 30) == 1
    assert time_counter(60, 30) == 2
    assert time_counter(1111111109, 30) == 0x23523EC


@pytest.mark.parametrize(
    "ts,expected",
    [(0, 30), (29, 1), (30, 30), (31, 29), (59, 1), (60, 30)],
)
def test_remaining_seconds_countdown(ts: int, expected: int) -> None:
    assert remaining_seconds(period=30, timestamp=ts) == expected
    assert generate(RFC_SECRET, TotpConfig(period=30), now=ts).remaining_seconds == expected


def test_remaining_seconds_range() -> None:
    rem = remaining_seconds(period=30)
    assert 0 < rem <= 30


@pytest.mark.parametrize("period", [0, 14, 61])
def test_time_helpers_reject_bad_period(period: int) -> None:
    with pytest.raises(InvalidConfig):
        remaining_seconds(period=period, timestamp=10)
    with pytest.raises(InvalidConfig):
        time_counter(10, period)


# ── 64-bit counter range ──────────────────────────────────────────────────────

def test_largest_counter_accepted() -> None:
    now = (2**64) * 30 - 1
    assert time_counter(now, 30) == 2**64 - 1
    code, remaining = generate(RFC_SECRET, TotpConfig(period=30), now=now)
    assert len(code) == 6
    assert remaining == 1


def test_counter_overflow_rejected() -> None:
    with pytest.raises(GenerationError, match="out of range"):
        generate(b"k", now=2**64 * 30)
