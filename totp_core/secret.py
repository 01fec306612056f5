"""
secret.py: Per-principal TOTP key.

A TOTPSecret owns a fixed-length byte string drawn from os.urandom. The host
stores it (encrypted at rest, ideally) and hands it back at verification
time; the engine itself keeps nothing.

encode() gives the Base32 form for manual entry into an authenticator app.
It is a display format only: compare secrets by their bytes, never by text.
"""

import base64
import logging
import os
from typing import Optional

from .counter import STEP_MILLIS, Instant
from .errors import InvalidEncodedSecret, RandomSourceUnavailable
from .otp_core import SECRET_BYTES, check_secret_length, generate_code
from .validator import verify

logger = logging.getLogger(__name__)


class TOTPSecret:
    """
    Immutable TOTP key.

    Arguments:
        key_bytes: raw key material
        length: expected key length; SECRET_BYTES (10) unless the host
            needs another size, e.g. 20 bytes for authenticators that expect it

    Raises:
        InvalidSecretLength: key_bytes does not have `length` bytes
    """

    __slots__ = ("_key", "_length")

    def __init__(self, key_bytes: bytes, length: int = SECRET_BYTES) -> None:
        key = bytes(key_bytes)
        check_secret_length(key, length)
        self._key = key
        self._length = length

    @classmethod
    def generate(cls, length: int = SECRET_BYTES) -> "TOTPSecret":
        """
        Create a new secret from the OS CSPRNG.

        Raises:
            RandomSourceUnavailable: no secure randomness on this platform.
                There is no fallback to the random module.
        """
        if length <= 0:
            raise ValueError("length must be positive")
        try:
            raw = os.urandom(length)
        except NotImplementedError as e:
            logger.error("No secure random source available")
            raise RandomSourceUnavailable("os.urandom is not available on this platform") from e
        logger.debug("Generated %d-bit secret", length * 8)
        return cls(raw, length)

    @classmethod
    def from_encoded(cls, secret_b32: str, length: int = SECRET_BYTES) -> "TOTPSecret":
        """
        Rebuild a secret from its Base32 form.

        Case, whitespace and missing '=' padding are tolerated.

        Raises:
            InvalidEncodedSecret: text is not valid Base32
            InvalidSecretLength: decoded key has the wrong length
        """
        text = "".join(secret_b32.split()).rstrip("=")
        text += "=" * (-len(text) % 8)
        try:
            raw = base64.b32decode(text, casefold=True)
        except ValueError as e:
            # binascii.Error, or non-ASCII text
            raise InvalidEncodedSecret("Invalid Base32 secret") from e
        return cls(raw, length)

    @property
    def key_bytes(self) -> bytes:
        return self._key

    @property
    def length(self) -> int:
        return self._length

    def encode(self) -> str:
        """Base32 (RFC 4648), upper-case, without '=' padding."""
        return base64.b32encode(self._key).decode("ascii").rstrip("=").upper()

    def code_at(self, step_index: int) -> int:
        """Code for a given step index."""
        return generate_code(self._key, step_index, self._length)

    def matches(self, code: int, now: Optional[Instant] = None, step_millis: int = STEP_MILLIS) -> bool:
        """Verify a submitted code at `now` (the wall clock when None)."""
        return verify(self._key, code, now, step_millis, self._length)

    def __setattr__(self, name, value):
        if hasattr(self, name):
            raise AttributeError(f"{type(self).__name__} is immutable")
        object.__setattr__(self, name, value)

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"<TOTPSecret {self._length * 8}-bit>"
