"""
TOTP (Time-based One-Time Password) engine following RFC 6238.

The engine is stateless: every call is a pure function of the key, the
configuration and the reference time.  Keeping codes fresh is the job of
whoever polls it (see :mod:`ui.token_panel`).
"""

import logging
import time
from dataclasses import dataclass
from typing import NamedTuple, Optional

from core.errors import GenerationError, InvalidConfig, InvalidKey
from core.hotp import Algorithm, hotp_value

logger = logging.getLogger(__name__)

# ── Constants ────────────────────────────────────────────────────────────────

DEFAULT_DIGITS = 6
DEFAULT_PERIOD = 30

MIN_DIGITS, MAX_DIGITS = 4, 8
MIN_PERIOD, MAX_PERIOD = 15, 60

# The counter is packed as an unsigned 64-bit big-endian integer
MAX_COUNTER = 2**64 - 1


# ── Configuration ─────────────────────────────────────────────────────────────

def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_period(period: object) -> None:
    if not _is_int(period) or not MIN_PERIOD <= period <= MAX_PERIOD:  # type: ignore[operator]
        raise InvalidConfig(
            f"Period must be between {MIN_PERIOD} and {MAX_PERIOD} seconds, "
            f"got {period!r}."
        )


@dataclass(frozen=True)
class TotpConfig:
    """Digit count, period and HMAC algorithm for code generation."""

    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_PERIOD
    algorithm: Algorithm = Algorithm.SHA1

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Check both bounds.

        Raises:
            InvalidConfig: If ``digits`` is outside [4, 8] or ``period`` is
                outside [15, 60] seconds.
        """
        if not _is_int(self.digits) or not MIN_DIGITS <= self.digits <= MAX_DIGITS:
            raise InvalidConfig(
                f"Digits must be between {MIN_DIGITS} and {MAX_DIGITS}, "
                f"got {self.digits!r}."
            )
        _check_period(self.period)
        if not isinstance(self.algorithm, Algorithm):
            raise InvalidConfig(f"Unsupported algorithm {self.algorithm!r}.")


class TotpResult(NamedTuple):
    """A generated code and the seconds left before it rotates."""

    code: str
    remaining_seconds: int


# ── Time helpers ──────────────────────────────────────────────────────────────

def _resolve_time(timestamp: Optional[float]) -> int:
    t = timestamp if timestamp is not None else time.time()
    if t < 0:
        raise GenerationError(f"Timestamp must be non-negative, got {t!r}.")
    return int(t)


def time_counter(timestamp: Optional[float] = None, period: int = DEFAULT_PERIOD) -> int:
    """
    Return the number of whole ``period`` windows since the Unix epoch.

    Raises:
        InvalidConfig:   If ``period`` is outside [15, 60] seconds.
        GenerationError: If the timestamp is negative or the counter does
            not fit in an unsigned 64-bit integer.
    """
    _check_period(period)
    counter = _resolve_time(timestamp) // period
    if counter > MAX_COUNTER:
        raise GenerationError(f"Timestamp {timestamp!r} is out of range.")
    return counter


def remaining_seconds(period: int = DEFAULT_PERIOD, timestamp: Optional[float] = None) -> int:
    """Return seconds until the current TOTP window expires (1..period)."""
    _check_period(period)
    return period - (_resolve_time(timestamp) % period)


# ── Generation ────────────────────────────────────────────────────────────────

def generate(
    key: bytes,
    config: Optional[TotpConfig] = None,
    now: Optional[float] = None,
) -> TotpResult:
    """
    Generate the TOTP code valid at ``now``.

    Args:
        key:    Raw (already base32-decoded) secret bytes.
        config: Digits, period and algorithm.  Defaults to 6 digits / 30 s /
                SHA1.
        now:    Unix timestamp.  Uses ``time.time()`` if None.

    Returns:
        :class:`TotpResult` with the zero-padded code and the remaining
        seconds in the current window.

    Raises:
        InvalidConfig:   If the configuration is out of range.
        InvalidKey:      If ``key`` is empty.
        GenerationError: If ``now`` is negative or too large for a 64-bit
            counter.
    """
    config = config if config is not None else TotpConfig()
    config.validate()

    if not isinstance(key, (bytes, bytearray)) or not key:
        raise InvalidKey("Secret key is empty.")

    t = _resolve_time(now)
    counter = time_counter(t, config.period)
    code = hotp_value(bytes(key), counter, config.digits, config.algorithm)
    remaining = config.period - (t % config.period)

    logger.debug(
        "Generated %d-digit code for counter %d (%ds left)",
        config.digits,
        counter,
        remaining,
    )
    return TotpResult(code, remaining)


def generate_totp(
    secret_bytes: bytes,
    digits: int = DEFAULT_DIGITS,
    period: int = DEFAULT_PERIOD,
    algorithm: Algorithm = Algorithm.SHA1,
    timestamp: Optional[float] = None,
) -> str:
    """
    Generate a TOTP code and return only the code string.

    Args:
        secret_bytes: Raw (already base32-decoded) secret bytes.
        digits:       Number of digits in the OTP (default 6).
        period:       Time step in seconds (default 30).
        algorithm:    HMAC algorithm (default SHA1 for GA compatibility).
        timestamp:    Override Unix timestamp (uses time.time() if None).

    Returns:
        OTP string, zero-padded to ``digits`` characters.
    """
    config = TotpConfig(digits=digits, period=period, algorithm=algorithm)
    return generate(secret_bytes, config, timestamp).code
