"""
otp_core.py: HMAC-SHA1 code generator (RFC 4226 dynamic truncation).

    code = Truncate(HMAC-SHA1(key=secret, msg=step_index)) mod 10^6

Pure functions only: no clock, no I/O, no state. The same (secret, step)
pair always yields the same integer code.

Security notes:
- A failure to build the HMAC propagates as CryptoUnavailable; no
  placeholder code is ever returned.
- Codes are ints. Zero-padding happens in format_code() for display only.
"""

import hashlib
import hmac
import logging
import struct

from .errors import CryptoUnavailable, InvalidSecretLength

logger = logging.getLogger(__name__)

# --- Config / constants ----------------------------------------------------
DIGITS = 6                  # codes are always 6 digits
CODE_MODULUS = 10 ** DIGITS
SECRET_BYTES = 10           # 80-bit key
_MAX_STEP = 2 ** 64 - 1     # message is an unsigned 8-byte counter


# --- RFC helpers -----------------------------------------------------------
def int_to_bytes(i: int) -> bytes:
    """
    Serialize the step index as the 8-byte big-endian HMAC message.

    Example: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'

    Raises:
        ValueError: if i is negative or needs more than 64 bits
    """
    if not 0 <= i <= _MAX_STEP:
        raise ValueError(f"step index out of range: {i}")
    return struct.pack(">Q", i)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    RFC 4226 dynamic truncation.

    - offset = low nibble of the last byte (0..15)
    - read 4 bytes from offset, big-endian, clear the sign bit
    - return the resulting 31-bit integer

    For a SHA-1 digest (20 bytes) offset + 4 never exceeds the length.
    """
    offset = hmac_digest[-1] & 0x0F
    code = (
        ((hmac_digest[offset] & 0x7F) << 24)
        | ((hmac_digest[offset + 1] & 0xFF) << 16)
        | ((hmac_digest[offset + 2] & 0xFF) << 8)
        | (hmac_digest[offset + 3] & 0xFF)
    )
    return code


def check_secret_length(secret_bytes: bytes, length: int = SECRET_BYTES) -> None:
    """Reject secrets whose length differs from the configured key length."""
    if len(secret_bytes) != length:
        logger.warning("Rejected secret of %d bytes (expected %d)", len(secret_bytes), length)
        raise InvalidSecretLength(len(secret_bytes), length)


def _hmac_sha1(key: bytes, msg: bytes) -> bytes:
    try:
        return hmac.new(key, msg, hashlib.sha1).digest()
    except ValueError as e:
        # e.g. SHA-1 disabled by an OpenSSL FIPS policy
        logger.error("HMAC-SHA1 unavailable: %s", e)
        raise CryptoUnavailable("HMAC-SHA1 is not available on this platform") from e


def generate_code(secret_bytes: bytes, step_index: int, length: int = SECRET_BYTES) -> int:
    """
    Derive the code for one step index.

    Steps:
    1. Check the key length (before any hashing)
    2. Message = 8-byte big-endian step index
    3. HMAC-SHA1(key, message) -> 20 bytes
    4. Dynamic truncation -> 31-bit integer
    5. code = value mod 10^6

    Arguments:
        secret_bytes: raw key bytes
        step_index: non-negative step index (see counter.step_index)
        length: expected key length in bytes

    Returns:
        int in [0, 1_000_000)

    Raises:
        InvalidSecretLength: key length mismatch
        ValueError: step index negative or wider than 64 bits
        CryptoUnavailable: HMAC-SHA1 could not be constructed
    """
    check_secret_length(secret_bytes, length)
    msg = int_to_bytes(step_index)
    digest = _hmac_sha1(bytes(secret_bytes), msg)
    return dynamic_truncate(digest) % CODE_MODULUS


def format_code(code: int) -> str:
    """Zero-pad a code for display. Never compare codes in this form."""
    return str(code).zfill(DIGITS)
