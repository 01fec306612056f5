"""
totp_core package
=================

Time-windowed one-time passwords over a shared secret (RFC 4226 truncation,
RFC 6238 time steps), for an authentication layer that has already resolved
the current principal and only asks: "does this 6-digit code prove
possession of the secret right now?"

──────────────────────────────────────────────
Core algorithm
──────────────────────────────────────────────
- Step index:
  step = floor(instant_ms / step_millis), step_millis = 30 000 by default.

- Code:
  code = Truncate(HMAC-SHA1(key=secret, msg=step as 8-byte big-endian)) mod 10^6

- Dynamic truncation:
  offset = last byte & 0x0F, take 4 bytes from offset, clear the top bit.

- Verification:
  accept if the code matches step - 1, step or step + 1.

──────────────────────────────────────────────
Quick example
──────────────────────────────────────────────
>>> from totp_core import TOTPSecret, step_index, format_code
>>> secret = TOTPSecret.generate()
>>> stored = secret.encode()                  # host persists this
>>> secret = TOTPSecret.from_encoded(stored)
>>> now = 1_700_000_000_000                   # ms since epoch, host clock
>>> code = secret.code_at(step_index(now))
>>> secret.matches(code, now)
True

Persistence, provisioning (QR / otpauth URIs), replay protection and rate
limiting are the host's job.
"""

from .counter import STEP_MILLIS, millis_until_next_step, now_millis, step_index
from .errors import (
    CryptoUnavailable,
    InvalidEncodedSecret,
    InvalidSecretLength,
    OTPError,
    RandomSourceUnavailable,
)
from .otp_core import DIGITS, SECRET_BYTES, format_code, generate_code
from .secret import TOTPSecret
from .validator import verify

__all__ = [
    "DIGITS",
    "SECRET_BYTES",
    "STEP_MILLIS",
    "CryptoUnavailable",
    "InvalidEncodedSecret",
    "InvalidSecretLength",
    "OTPError",
    "RandomSourceUnavailable",
    "TOTPSecret",
    "format_code",
    "generate_code",
    "millis_until_next_step",
    "now_millis",
    "step_index",
    "verify",
]
