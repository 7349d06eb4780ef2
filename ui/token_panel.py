"""
Presentation state for the token view.

:class:`TokenPanel` holds what the user typed and what the window shows.
It contains no Qt code, so the refresh logic can be driven by a ``QTimer``
in the real window and by plain calls in tests.
"""

import logging
import time
from typing import Optional

from core.errors import OTPError
from core.totp import (
    DEFAULT_DIGITS,
    DEFAULT_PERIOD,
    MAX_DIGITS,
    MAX_PERIOD,
    MIN_DIGITS,
    MIN_PERIOD,
    TotpConfig,
    generate,
    remaining_seconds,
    time_counter,
)
from core.utils import decode_secret, format_otp

logger = logging.getLogger(__name__)

MESSAGE_CLEAR_DELAY_MS = 3_000
COPIED_MESSAGE = "Code copied to clipboard!"
EMPTY_SECRET_MESSAGE = "Please enter a secret key"


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, int(value)))


class TokenPanel:
    """Secret, settings and the currently displayed code."""

    def __init__(self, digits: int = DEFAULT_DIGITS, period: int = DEFAULT_PERIOD) -> None:
        self.secret = ""
        self.digits = _clamp(digits, MIN_DIGITS, MAX_DIGITS)
        self.period = _clamp(period, MIN_PERIOD, MAX_PERIOD)
        self.token = ""
        self.time_remaining = self.period
        self._counter: Optional[int] = None
        self.message: Optional[str] = None
        self.message_is_error = False

    # ── Derived values ────────────────────────────────────────────────

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    @property
    def display_token(self) -> str:
        return format_otp(self.token)

    @property
    def progress(self) -> float:
        """Fraction of the window still left, 0.0 when nothing is shown."""
        if not self.token:
            return 0.0
        return self.time_remaining / self.period

    def copy_text(self) -> Optional[str]:
        """Return the code as it should land on the clipboard."""
        if not self.token:
            return None
        return self.token.replace(" ", "")

    # ── User input ────────────────────────────────────────────────────

    def set_secret(self, text: str, now: Optional[float] = None) -> None:
        self.secret = text
        self.clear_message()
        if text:
            self.generate(now)
        else:
            self.token = ""
            self._counter = None

    def set_digits(self, digits: int, now: Optional[float] = None) -> None:
        self.digits = _clamp(digits, MIN_DIGITS, MAX_DIGITS)
        self._regenerate_if_needed(now)

    def set_period(self, period: int, now: Optional[float] = None) -> None:
        self.period = _clamp(period, MIN_PERIOD, MAX_PERIOD)
        self._regenerate_if_needed(now)

    def _regenerate_if_needed(self, now: Optional[float]) -> None:
        if self.secret:
            self.generate(now)

    # ── Generation ────────────────────────────────────────────────────

    def generate(self, now: Optional[float] = None) -> bool:
        """
        Regenerate the code from the current secret and settings.

        A secret made only of whitespace shows ``EMPTY_SECRET_MESSAGE``.

        Returns:
            True if a code is now displayed.
        """
        if not self.secret.strip():
            self.token = ""
            self._counter = None
            self.show_message(EMPTY_SECRET_MESSAGE, is_error=True)
            return False

        t = time.time() if now is None else now
        try:
            key = decode_secret(self.secret)
            config = TotpConfig(digits=self.digits, period=self.period)
            code, remaining = generate(key, config, t)
            counter = time_counter(t, self.period)
        except OTPError as exc:
            logger.warning("Code generation failed: %s", exc)
            self.token = ""
            self._counter = None
            self.show_message(f"Invalid secret key: {exc}", is_error=True)
            return False

        self.token = code
        self.time_remaining = remaining
        self._counter = counter
        if self.message_is_error:
            self.clear_message()
        return True

    def tick(self, now: Optional[float] = None) -> None:
        """
        Advance the countdown; regenerate once the time window has changed.

        Called once per second by the window's refresh timer.  A late tick
        or a resume from sleep can skip whole seconds or windows, so the
        window counter is compared rather than the remaining seconds.
        """
        if not self.token:
            return
        t = time.time() if now is None else now
        if time_counter(t, self.period) != self._counter:
            logger.debug("Time window rolled over, regenerating")
            self.generate(t)
        else:
            self.time_remaining = remaining_seconds(self.period, t)

    # ── Messages ──────────────────────────────────────────────────────

    def show_message(self, text: str, is_error: bool = False) -> None:
        self.message = text
        self.message_is_error = is_error

    def clear_message(self) -> None:
        self.message = None
        self.message_is_error = False
