"""
Trip-day derivation, pin grouping and 12-hour time formatting
"""

from datetime import date, datetime, timedelta

import pytest

from mappr.core.timeline import (
    build_timeline,
    compute_trip_days,
    day_option_label,
    format_time_12_hour,
    group_pins_by_day,
    to_calendar_date,
    unscheduled_pins,
)


def test_trip_days_cover_range_inclusive():
    days = compute_trip_days(date(2025, 1, 5), date(2025, 1, 8))

    assert [d["day"] for d in days] == [1, 2, 3, 4]
    assert [d["date"] for d in days] == [date(2025, 1, 5) + timedelta(days=i) for i in range(4)]
    assert days[0]["label"] == "Jan 5"
    assert days[-1]["label"] == "Jan 8"


def test_single_day_trip():
    days = compute_trip_days(date(2025, 3, 1), date(2025, 3, 1))
    assert days == [{"day": 1, "date": date(2025, 3, 1), "label": "Mar 1"}]


@pytest.mark.parametrize(
    "start,end",
    [(None, date(2025, 1, 1)), (date(2025, 1, 1), None), (None, None), ("", "2025-01-02")],
)
def test_missing_dates_give_no_timeline(start, end):
    assert compute_trip_days(start, end) == []


def test_inverted_range_is_silently_empty():
    assert compute_trip_days(date(2025, 1, 10), date(2025, 1, 9)) == []


def test_range_spans_month_and_year_boundaries():
    days = compute_trip_days("2024-12-30", "2025-01-02")
    assert [d["label"] for d in days] == ["Dec 30", "Dec 31", "Jan 1", "Jan 2"]


def test_time_of_day_does_not_shift_numbering():
    plain = compute_trip_days(date(2025, 6, 1), date(2025, 6, 3))
    timed = compute_trip_days(datetime(2025, 6, 1, 23, 59), datetime(2025, 6, 3, 0, 1))
    iso = compute_trip_days("2025-06-01T18:00:00", "2025-06-03T06:00:00")
    assert plain == timed == iso


def test_day_option_label():
    day = compute_trip_days("2025-01-05", "2025-01-06")[1]
    assert day_option_label(day) == "Day 2 - Jan 6"


def test_group_pins_orders_by_time_and_skips_unscheduled():
    pins = [
        {"name": "dinner", "day": 1, "time": "19:30"},
        {"name": "floating", "day": None, "time": None},
        {"name": "museum", "day": 2, "time": "10:00"},
        {"name": "breakfast", "day": 1, "time": "08:05"},
        {"name": "lunch", "day": 1, "time": "12:00"},
    ]

    grouped = group_pins_by_day(pins)

    assert list(grouped) == [1, 2]
    assert [p["name"] for p in grouped[1]] == ["breakfast", "lunch", "dinner"]
    assert [p["name"] for p in grouped[2]] == ["museum"]
    assert all(p["name"] != "floating" for bucket in grouped.values() for p in bucket)


def test_untimed_pins_sort_after_timed_and_keep_input_order():
    pins = [
        {"name": "a", "day": 3, "time": None},
        {"name": "b", "day": 3, "time": "23:00"},
        {"name": "c", "day": 3, "time": ""},
        {"name": "d", "day": 3, "time": "06:00"},
    ]
    grouped = group_pins_by_day(pins)
    assert [p["name"] for p in grouped[3]] == ["d", "b", "a", "c"]


def test_grouping_is_pure_and_repeatable():
    pins = [{"name": "x", "day": 1, "time": "10:00"}, {"name": "y", "day": 1, "time": "09:00"}]
    snapshot = [dict(p) for p in pins]

    assert group_pins_by_day(pins) == group_pins_by_day(pins)
    assert pins == snapshot


def test_grouping_accepts_model_instances():
    class P:
        def __init__(self, name, day, time):
            self.name, self.day, self.time = name, day, time

    grouped = group_pins_by_day([P("late", 1, "18:00"), P("early", 1, "07:00")])
    assert [p.name for p in grouped[1]] == ["early", "late"]


def test_unscheduled_pins():
    pins = [{"name": "a", "day": None}, {"name": "b", "day": 1}, {"name": "c"}]
    assert [p["name"] for p in unscheduled_pins(pins)] == ["a", "c"]


@pytest.mark.parametrize(
    "value,expected",
    [
        ("00:00", "12:00 AM"),
        ("00:45", "12:45 AM"),
        ("09:05", "9:05 AM"),
        ("11:59", "11:59 AM"),
        ("12:30", "12:30 PM"),
        ("13:00", "1:00 PM"),
        ("23:59", "11:59 PM"),
        ("07:15:00", "7:15 AM"),
    ],
)
def test_format_time_12_hour(value, expected):
    assert format_time_12_hour(value) == expected


@pytest.mark.parametrize("value", ["", None])
def test_format_time_12_hour_empty(value):
    assert format_time_12_hour(value) == ""


def test_build_timeline_places_every_pin():
    trip = {"start_date": "2025-01-05", "end_date": "2025-01-06"}
    pins = [
        {"name": "museum", "day": 1, "time": "14:00"},
        {"name": "cafe", "day": 1, "time": "09:00"},
        {"name": "somewhere", "day": None, "time": None},
        {"name": "stale", "day": 5, "time": "10:00"},
    ]

    timeline = build_timeline(trip, pins)

    assert [d["label"] for d in timeline["days"]] == ["Jan 5", "Jan 6"]
    assert timeline["days"][0]["date"] == "2025-01-05"
    assert [p["name"] for p in timeline["days"][0]["pins"]] == ["cafe", "museum"]
    assert timeline["days"][0]["pins"][0]["time_display"] == "9:00 AM"
    assert timeline["days"][1]["pins"] == []
    assert [p["name"] for p in timeline["unscheduled"]] == ["somewhere"]
    assert [p["name"] for p in timeline["other_days"]["5"]] == ["stale"]


def test_build_timeline_without_dates_keeps_scheduled_pins_visible():
    timeline = build_timeline({"start_date": None, "end_date": None}, [{"name": "x", "day": 2}])
    assert timeline["days"] == []
    assert [p["name"] for p in timeline["other_days"]["2"]] == ["x"]


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, None),
        ("", None),
        ("2025-04-01", date(2025, 4, 1)),
        ("2025-04-01T23:30:00", date(2025, 4, 1)),
        (datetime(2025, 4, 1, 8, 0), date(2025, 4, 1)),
        (date(2025, 4, 1), date(2025, 4, 1)),
    ],
)
def test_to_calendar_date(value, expected):
    assert to_calendar_date(value) == expected
