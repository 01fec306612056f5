"""
validator.py: Accept a submitted code within +/-1 step of "now".

The window is fixed at one step either side: enough to absorb client/server
clock drift, while each extra step would raise the odds of guessing a live
code. Replay blocking and attempt throttling are left to the caller.
"""

import hmac
import logging
from typing import Optional

from .counter import STEP_MILLIS, Instant, check_step, now_millis, step_index, to_millis
from .otp_core import CODE_MODULUS, SECRET_BYTES, check_secret_length, generate_code

logger = logging.getLogger(__name__)


def _code_bytes(code: int) -> bytes:
    return code.to_bytes(4, "big")


def window_steps(now: Instant, step_millis: int = STEP_MILLIS) -> list:
    """Step indices for now - step, now and now + step, skipping any below 0."""
    check_step(step_millis)
    instant = to_millis(now)
    steps = [
        step_index(instant - step_millis, step_millis),
        step_index(instant, step_millis),
        step_index(instant + step_millis, step_millis),
    ]
    return [s for s in steps if s >= 0]


def verify(
    secret_bytes: bytes,
    submitted_code: int,
    now: Optional[Instant] = None,
    step_millis: int = STEP_MILLIS,
    length: int = SECRET_BYTES,
) -> bool:
    """
    Check a submitted code against the previous, current and next step.

    Arguments:
        secret_bytes: raw key bytes
        submitted_code: code as an integer (parsed by the caller)
        now: instant to verify at; the wall clock when None
        step_millis: step duration in milliseconds
        length: expected key length in bytes

    Returns:
        True if the code matches any of the three steps. A mismatch, an
        out-of-range value or a non-integer code all give False.

    Raises:
        InvalidSecretLength, CryptoUnavailable: from the generator
    """
    check_secret_length(secret_bytes, length)
    if now is None:
        now = now_millis()

    steps = window_steps(now, step_millis)
    expected = [generate_code(secret_bytes, s, length) for s in steps]

    if isinstance(submitted_code, bool) or not isinstance(submitted_code, int):
        logger.debug("Rejected non-integer code of type %s", type(submitted_code).__name__)
        return False
    if not 0 <= submitted_code < CODE_MODULUS:
        logger.debug("Rejected out-of-range code")
        return False

    submitted = _code_bytes(submitted_code)
    # no early exit: every candidate is compared
    matches = [hmac.compare_digest(submitted, _code_bytes(code)) for code in expected]
    accepted = any(matches)
    logger.debug("Verified code over steps %s: %s", steps, "accepted" if accepted else "rejected")
    return accepted
