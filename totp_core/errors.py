"""
errors.py: Exceptions raised by the TOTP engine.

A wrong code is never an error: ``verify`` simply returns False. The classes
below cover conditions where the engine cannot produce a trustworthy answer
at all, so they must reach the caller.
"""


class OTPError(Exception):
    """Base class for every engine failure."""


class RandomSourceUnavailable(OTPError):
    """The platform offers no cryptographically secure random source."""


class CryptoUnavailable(OTPError):
    """HMAC-SHA1 could not be constructed on this platform."""


class InvalidSecretLength(OTPError, ValueError):
    """Secret bytes do not match the configured key length."""

    def __init__(self, actual: int, expected: int) -> None:
        super().__init__(f"secret must be {expected} bytes, got {actual}")
        self.actual = actual
        self.expected = expected


class InvalidEncodedSecret(OTPError, ValueError):
    """A Base32 secret string could not be decoded."""
