"""
Secret decoding and display helpers.
"""

import base64
import binascii
import re

from core.errors import InvalidEncoding

_BASE32_RE = re.compile(r"[A-Z2-7]+")

# Unpadded lengths (mod 8) that cannot hold a whole number of bytes.
_IMPOSSIBLE_REMAINDERS = (1, 3, 6)


# ── Base32 ────────────────────────────────────────────────────────────────────

def normalize_secret(secret: str) -> str:
    """
    Normalise a base32 secret: strip spaces, uppercase, re-pad.

    Any amount of trailing ``=`` is accepted; padding anywhere else is not.

    Args:
        secret: Raw user-supplied secret string.

    Returns:
        Uppercase base32 string padded to a multiple of 8.

    Raises:
        InvalidEncoding: If the secret is empty, contains characters outside
            the base32 alphabet, or has an impossible length.
    """
    secret = "".join(secret.split()).upper()
    body = secret.rstrip("=")
    if not body:
        raise InvalidEncoding("Secret is empty.")
    if not _BASE32_RE.fullmatch(body):
        if "=" in body:
            raise InvalidEncoding("Padding '=' is only allowed at the end.")
        raise InvalidEncoding("Secret contains invalid base32 characters.")
    if len(body) % 8 in _IMPOSSIBLE_REMAINDERS:
        raise InvalidEncoding(f"Invalid base32 length ({len(body)} characters).")
    return body + "=" * ((8 - len(body) % 8) % 8)


def decode_secret(secret: str) -> bytes:
    """
    Decode a base32-encoded secret string to raw bytes.

    Args:
        secret: Base32 secret, case-insensitive, whitespace ignored.

    Returns:
        Raw, non-empty key bytes.

    Raises:
        InvalidEncoding: On invalid base32 input.
    """
    normalized = normalize_secret(secret)
    try:
        return base64.b32decode(normalized)
    except binascii.Error as exc:
        raise InvalidEncoding(f"Invalid base32 secret: {exc}") from exc


# ── Display ───────────────────────────────────────────────────────────────────

def format_otp(code: str) -> str:
    """
    Split an OTP code in two halves for readability.

    Example::

        >>> format_otp("123456")
        '123 456'
        >>> format_otp("12345678")
        '1234 5678'

    Other lengths are returned unchanged.
    """
    if len(code) in (6, 8):
        half = len(code) // 2
        return f"{code[:half]} {code[half:]}"
    return code
