from datetime import datetime

import pytest

from utils.exceptions import FormatError
from utils.time_window import in_date_range, in_time_range, split_instant, time_to_minutes


def _all_minutes():
    for hour in range(24):
        for minute in range(60):
            yield f"{hour:02d}:{minute:02d}"


@pytest.mark.parametrize("start,end", [("11:00", "21:00"), ("00:00", "23:59"), ("06:30", "06:31")])
def test_same_day_window_matches_plain_comparison(start, end):
    for current in _all_minutes():
        assert in_time_range(start, end, current) == (start <= current <= end)


@pytest.mark.parametrize("start,end", [("22:00", "06:00"), ("23:59", "00:00"), ("12:01", "12:00")])
def test_overnight_window_wraps_past_midnight(start, end):
    for current in _all_minutes():
        assert in_time_range(start, end, current) == (current >= start or current <= end)


def test_late_night_menu_boundaries():
    assert in_time_range("22:00", "06:00", "23:30")
    assert in_time_range("22:00", "06:00", "22:00")
    assert in_time_range("22:00", "06:00", "06:00")
    assert in_time_range("22:00", "06:00", "00:00")
    assert not in_time_range("22:00", "06:00", "12:00")
    assert not in_time_range("22:00", "06:00", "06:01")
    assert not in_time_range("22:00", "06:00", "21:59")


def test_zero_width_window_is_never_active():
    assert not in_time_range("10:00", "10:00", "10:00")
    assert not in_time_range("10:00", "10:00", "10:01")


@pytest.mark.parametrize("bad", ["9:00", "24:00", "12:60", "ab:cd", "", None, "12:00:00"])
def test_malformed_time_raises(bad):
    with pytest.raises(FormatError):
        in_time_range(bad, "21:00", "12:00")
    with pytest.raises(FormatError):
        in_time_range("11:00", "21:00", bad)


def test_date_range_is_inclusive():
    assert in_date_range("2024-06-01", "2024-08-31", "2024-06-01")
    assert in_date_range("2024-06-01", "2024-08-31", "2024-08-31")
    assert in_date_range("2024-06-01", "2024-08-31", "2024-07-04")
    assert not in_date_range("2024-06-01", "2024-08-31", "2024-05-31")
    assert not in_date_range("2024-06-01", "2024-08-31", "2024-09-01")


@pytest.mark.parametrize("bad", ["2024-02-30", "2024/06/01", "24-06-01", "2024-6-1", None])
def test_malformed_date_raises(bad):
    with pytest.raises(FormatError):
        in_date_range(bad, "2024-08-31", "2024-07-04")


def test_split_instant_uses_wall_clock_of_the_instant():
    assert split_instant(datetime(2024, 7, 4, 15, 0, 42)) == ("2024-07-04", "15:00")
    assert split_instant("2024-07-04T23:30") == ("2024-07-04", "23:30")


def test_split_instant_rejects_garbage():
    with pytest.raises(FormatError):
        split_instant("yesterday")


def test_time_to_minutes():
    assert time_to_minutes("00:00") == 0
    assert time_to_minutes("06:30") == 390
    assert time_to_minutes("23:59") == 1439
