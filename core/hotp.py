"""
HOTP (HMAC-based One-Time Password) derivation following RFC 4226.

TOTP is HOTP with a time-derived counter; see :mod:`core.totp`.
"""

import hmac
import struct
from enum import Enum


class Algorithm(str, Enum):
    """Supported HMAC algorithms."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"


_ALG_MAP: dict[str, str] = {
    Algorithm.SHA1: "sha1",
    Algorithm.SHA256: "sha256",
    Algorithm.SHA512: "sha512",
}


def hotp_value(
    key: bytes,
    counter: int,
    digits: int = 6,
    algorithm: Algorithm = Algorithm.SHA1,
) -> str:
    """
    Core HOTP computation (RFC 4226 §5).

    Args:
        key:       Raw HMAC key bytes.
        counter:   Unsigned 64-bit counter value.
        digits:    Number of OTP digits.
        algorithm: HMAC algorithm.

    Returns:
        Zero-padded OTP string of exactly ``digits`` characters.
    """
    msg = struct.pack(">Q", counter)
    digest = hmac.new(key, msg, _ALG_MAP[algorithm]).digest()

    # Dynamic truncation
    offset = digest[-1] & 0x0F
    (code,) = struct.unpack(">I", digest[offset : offset + 4])
    code &= 0x7FFFFFFF
    return str(code % (10**digits)).zfill(digits)
