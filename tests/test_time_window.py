from datetime import datetime, timedelta
import pytz

from reminder_worker.time_window import (
    NO_MATCH,
    WindowMatch,
    get_time_in_timezone,
    is_in_notification_window,
)

HOURS = list(range(8, 21))


def at(hour, minute, day=15):
    return datetime(2026, 1, day, hour, minute, tzinfo=pytz.utc)


def test_tail_of_preceding_hour_matches_next_target():
    assert is_in_notification_window("UTC", at(7, 46), HOURS, 15) == WindowMatch(True, 8)


def test_just_past_head_cutoff_is_outside():
    assert is_in_notification_window("UTC", at(8, 16), HOURS, 15) == NO_MATCH


def test_window_bounds_are_inclusive():
    assert is_in_notification_window("UTC", at(7, 45), HOURS, 15) == WindowMatch(True, 8)
    assert is_in_notification_window("UTC", at(8, 15), HOURS, 15) == WindowMatch(True, 8)
    assert is_in_notification_window("UTC", at(8, 0), HOURS, 15) == WindowMatch(True, 8)
    assert not is_in_notification_window("UTC", at(7, 44), HOURS, 15).in_window


def test_outside_configured_hours():
    assert is_in_notification_window("UTC", at(20, 10), HOURS, 15) == WindowMatch(True, 20)
    assert not is_in_notification_window("UTC", at(20, 45), HOURS, 15).in_window
    assert not is_in_notification_window("UTC", at(3, 0), HOURS, 15).in_window
    assert not is_in_notification_window("UTC", at(6, 50), HOURS, 15).in_window


def test_local_time_follows_subscriber_timezone():
    # Prague is UTC+1 in January: 06:50 UTC is 07:50 local
    assert is_in_notification_window("Europe/Prague", at(6, 50), HOURS, 15) == WindowMatch(True, 8)
    # ...and UTC+2 in July: 05:55 UTC is 07:55 local
    july = datetime(2026, 7, 15, 5, 55, tzinfo=pytz.utc)
    assert is_in_notification_window("Europe/Prague", july, HOURS, 15) == WindowMatch(True, 8)


def test_half_hour_offset_timezone():
    # Kolkata is UTC+5:30: 02:20 UTC is 07:50 local
    assert get_time_in_timezone("Asia/Kolkata", at(2, 20)) == (7, 50)
    assert is_in_notification_window("Asia/Kolkata", at(2, 20), HOURS, 15) == WindowMatch(True, 8)


def test_unresolvable_timezone_never_matches():
    assert get_time_in_timezone("Mars/Olympus_Mons", at(7, 50)) is None
    assert is_in_notification_window("Mars/Olympus_Mons", at(7, 50), HOURS, 15) == NO_MATCH
    assert is_in_notification_window("", at(7, 50), HOURS, 15) == NO_MATCH
    assert is_in_notification_window(None, at(7, 50), HOURS, 15) == NO_MATCH


def test_midnight_target_wraps_to_previous_day():
    assert is_in_notification_window("UTC", at(23, 50), [0], 15) == WindowMatch(True, 0)
    assert is_in_notification_window("UTC", at(0, 10), [0], 15) == WindowMatch(True, 0)
    assert not is_in_notification_window("UTC", at(23, 40), [0], 15).in_window


def test_naive_datetime_is_treated_as_utc():
    naive = datetime(2026, 1, 15, 7, 46)
    assert is_in_notification_window("UTC", naive, HOURS, 15) == WindowMatch(True, 8)


def test_unsorted_hours_still_pick_the_right_target():
    assert is_in_notification_window("UTC", at(9, 5), [20, 9, 8], 15) == WindowMatch(True, 9)


def test_at_most_one_target_hour_matches_any_minute():
    start = at(0, 0)
    for window in (0, 15, 29):
        for offset in range(24 * 60):
            now = start + timedelta(minutes=offset)
            matches = [
                hour for hour in range(24)
                if is_in_notification_window("UTC", now, [hour], window).in_window
            ]
            assert len(matches) <= 1, (now, window, matches)
