"""
Exception hierarchy for the TOTP core.

All errors derive from :class:`ValueError`, so callers that already guard
user input with ``except ValueError`` keep working.
"""


class OTPError(ValueError):
    """Base class for every error raised by the core."""


# ── Secret decoding ───────────────────────────────────────────────────────────

class DecodeError(OTPError):
    """The secret text could not be turned into key bytes."""


class InvalidEncoding(DecodeError):
    """Empty secret, character outside the Base32 alphabet, or bad length."""


# ── Code generation ───────────────────────────────────────────────────────────

class GenerationError(OTPError):
    """A code could not be generated from the given inputs."""


class InvalidConfig(GenerationError):
    """Digits or period outside the supported range."""


class InvalidKey(GenerationError):
    """The decoded key is empty."""
