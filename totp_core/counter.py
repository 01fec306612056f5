"""
counter.py: Map a point in time onto a TOTP step index.

The step index is the HMAC message for the code generator:

    step = floor(instant_ms / step_millis)

Two instants share a code iff they fall in the same step_millis bucket.
The default step is 30 seconds (RFC 6238). Instants are milliseconds since
the Unix epoch, or datetime objects.
"""

import math
import time
from datetime import datetime, timedelta, timezone
from typing import Union

# --- Config / constants ----------------------------------------------------
STEP_MILLIS = 30_000        # 30 s, RFC 6238 default period

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MILLI = timedelta(milliseconds=1)

Instant = Union[int, float, datetime]


def now_millis() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def to_millis(instant: Instant) -> int:
    """
    Normalize an instant to integer milliseconds since the epoch.

    - int: returned unchanged
    - float: floored (sub-millisecond fractions never move a step boundary)
    - datetime: aware values are converted exactly; naive values are read as
      local time, the same way datetime.timestamp() reads them
    """
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            instant = instant.astimezone()
        return (instant - _EPOCH) // _ONE_MILLI
    if isinstance(instant, float):
        return math.floor(instant)
    if isinstance(instant, int):
        return instant
    raise TypeError(f"unsupported instant type: {type(instant).__name__}")


def check_step(step_millis: int) -> None:
    """Raise ValueError unless step_millis is a positive integer."""
    if not isinstance(step_millis, int) or step_millis <= 0:
        raise ValueError("step_millis must be a positive integer")


def step_index(instant: Instant, step_millis: int = STEP_MILLIS) -> int:
    """
    Compute floor(instant_ms / step_millis).

    Floor division keeps instants before the epoch in the bucket below zero;
    callers that feed the result to the generator must reject those.
    """
    check_step(step_millis)
    return to_millis(instant) // step_millis


def millis_until_next_step(instant: Instant, step_millis: int = STEP_MILLIS) -> int:
    """Milliseconds left before the current code rolls over, in (0, step_millis]."""
    check_step(step_millis)
    return step_millis - (to_millis(instant) % step_millis)
