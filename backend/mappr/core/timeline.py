"""
Trip timeline derivation

Turns a trip's date range into numbered trip-days and buckets pins into a
day-by-day itinerary. Everything here is pure: inputs are snapshots handed
over by the routers and are never mutated.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Iterable, Mapping

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def to_calendar_date(value: date | datetime | str | None) -> date | None:
    """Truncate a date-like value to its calendar day."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    # Accept "YYYY-MM-DD" as well as full ISO timestamps
    return date.fromisoformat(text[:10])


def format_day_label(day: date) -> str:
    """Short month + day, e.g. "Jan 5"."""
    return f"{_MONTHS[day.month - 1]} {day.day}"


def compute_trip_days(
    start_date: date | datetime | str | None,
    end_date: date | datetime | str | None,
) -> list[dict[str, Any]]:
    """
    List the trip-days between start_date and end_date (inclusive).

    Returns [{"day": 1, "date": date(...), "label": "Jan 5"}, ...].
    A missing date, or an end_date before start_date, yields [].
    """
    start = to_calendar_date(start_date)
    end = to_calendar_date(end_date)
    if start is None or end is None:
        return []

    days = []
    current = start
    day_number = 1
    while current <= end:
        days.append({"day": day_number, "date": current, "label": format_day_label(current)})
        current += timedelta(days=1)
        day_number += 1
    return days


def day_option_label(day: Mapping[str, Any]) -> str:
    """Label used by the pin form's day picker: "Day 2 - Jan 6"."""
    return f"Day {day['day']} - {day['label']}"


def _field(pin: Any, name: str) -> Any:
    if isinstance(pin, Mapping):
        return pin.get(name)
    return getattr(pin, name, None)


def group_pins_by_day(pins: Iterable[Any]) -> dict[int, list[Any]]:
    """
    Bucket pins by their day number, each bucket ordered by time.

    Pins without a day are left out. Timed pins come first in ascending
    "HH:MM" order; untimed pins follow in their input order.
    """
    buckets: dict[int, list[Any]] = {}
    for pin in pins:
        day = _field(pin, "day")
        if day is None:
            continue
        buckets.setdefault(day, []).append(pin)

    # sorted() is stable, so untimed pins keep their relative order
    return {
        day: sorted(bucket, key=lambda p: (not _field(p, "time"), _field(p, "time") or ""))
        for day, bucket in sorted(buckets.items())
    }


def unscheduled_pins(pins: Iterable[Any]) -> list[Any]:
    return [pin for pin in pins if _field(pin, "day") is None]


def format_time_12_hour(time24: str | None) -> str:
    """
    "HH:MM" (24-hour) -> "H:MM AM/PM". Empty input gives "".
    Seconds, if present, are dropped.
    """
    if not time24:
        return ""
    parts = str(time24).split(":")
    hours = int(parts[0])
    minutes = parts[1] if len(parts) > 1 else "00"
    suffix = "AM" if hours < 12 else "PM"
    hour12 = hours % 12 or 12
    return f"{hour12}:{minutes} {suffix}"


def build_timeline(trip: Mapping[str, Any], pins: Iterable[Any]) -> dict[str, Any]:
    """
    Assemble the itinerary view for a trip.

    Pins whose day lies outside the trip's range end up in `other_days`
    so a shortened trip never hides them.
    """
    pins = list(pins)
    trip_days = compute_trip_days(trip.get("start_date"), trip.get("end_date"))
    grouped = group_pins_by_day(pins)

    days = []
    for entry in trip_days:
        day_pins = grouped.pop(entry["day"], [])
        days.append(
            {
                "day": entry["day"],
                "date": entry["date"].isoformat(),
                "label": entry["label"],
                "pins": [
                    {**_as_dict(p), "time_display": format_time_12_hour(_field(p, "time"))}
                    for p in day_pins
                ],
            }
        )

    return {
        "days": days,
        "unscheduled": [_as_dict(p) for p in unscheduled_pins(pins)],
        "other_days": {str(day): [_as_dict(p) for p in bucket] for day, bucket in grouped.items()},
    }


def _as_dict(pin: Any) -> dict[str, Any]:
    if isinstance(pin, Mapping):
        return dict(pin)
    return pin.model_dump()
