from datetime import datetime, timedelta, timezone

import pytest

from totp_core.counter import STEP_MILLIS, millis_until_next_step, now_millis, step_index, to_millis


def test_default_step_is_thirty_seconds() -> None:
    assert STEP_MILLIS == 30_000


def test_step_boundaries() -> None:
    assert step_index(0) == 0
    assert step_index(29_999) == 0
    assert step_index(30_000) == 1
    assert step_index(59_999) == 1
    assert step_index(60_000) == 2


def test_instants_milliseconds_apart_share_a_step() -> None:
    # 30 ms buckets would put these in different steps
    assert step_index(1_000) == step_index(1_030) == step_index(29_000)


def test_custom_step_duration() -> None:
    assert step_index(59_000, 60_000) == 0
    assert step_index(60_000, 60_000) == 1
    assert step_index(90, 30) == 3


def test_negative_instant_floors_below_zero() -> None:
    assert step_index(-1) == -1
    assert step_index(-30_000) == -1
    assert step_index(-30_001) == -2


def test_float_instant_is_floored() -> None:
    assert step_index(29_999.9) == 0
    assert to_millis(1234.99) == 1234


def test_aware_datetime() -> None:
    dt = datetime(2009, 2, 13, 23, 31, 30, tzinfo=timezone.utc)  # 1234567890 s
    assert to_millis(dt) == 1_234_567_890_000
    assert step_index(dt) == 41152263


def test_aware_datetime_in_other_zone() -> None:
    utc = datetime(2009, 2, 13, 23, 31, 30, tzinfo=timezone.utc)
    shifted = utc.astimezone(timezone(timedelta(hours=7)))
    assert to_millis(shifted) == to_millis(utc)


def test_naive_datetime_matches_timestamp() -> None:
    dt = datetime(2024, 5, 1, 12, 0, 0)
    assert to_millis(dt) == int(dt.timestamp()) * 1000


def test_unsupported_instant_type() -> None:
    with pytest.raises(TypeError):
        step_index("1700000000000")


@pytest.mark.parametrize("bad_step", [0, -30_000, 1.5, None])
def test_invalid_step_duration(bad_step) -> None:
    with pytest.raises(ValueError):
        step_index(1_000, bad_step)
    with pytest.raises(ValueError):
        millis_until_next_step(1_000, bad_step)


def test_millis_until_next_step() -> None:
    assert millis_until_next_step(0) == 30_000
    assert millis_until_next_step(29_999) == 1
    assert millis_until_next_step(45_000) == 15_000
    assert millis_until_next_step(45_000, 60_000) == 15_000


def test_now_millis_tracks_wall_clock() -> None:
    before = int(datetime.now(timezone.utc).timestamp() * 1000)
    now = now_millis()
    after = int(datetime.now(timezone.utc).timestamp() * 1000)
    assert before - 1 <= now <= after + 1
