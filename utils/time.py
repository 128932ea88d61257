"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Time primitives: unit truncation and UTC/timezone conversion.

Local wall-clock values that are ambiguous or skipped by a DST change are
resolved the way ``zoneinfo`` does for ``fold=0`` (PEP 495): a repeated
time takes the earlier offset, a skipped time takes the offset in force
before the transition.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum, IntEnum
from typing import Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

UTC = dt.timezone.utc
TICK = dt.timedelta(microseconds=1)
DAYS_PER_WEEK = 7

TimezoneRef = Union[str, dt.tzinfo]


class InvalidTimezone(ValueError):
    """Timezone reference is missing or unknown."""


class OutOfRange(OverflowError):
    """Date arithmetic left the representable datetime range."""


class WeekStartDay(IntEnum):
    # Same numbering as datetime.weekday() and babel's first_week_day
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


class UnitOfTime(Enum):
    DAY = "day"
    WEEK = "week"


def resolve_timezone(tz: TimezoneRef | None) -> dt.tzinfo:
    if tz is None:
        raise InvalidTimezone("A timezone is required")
    if isinstance(tz, dt.tzinfo):
        return tz
    if not isinstance(tz, str) or not tz.strip():
        raise InvalidTimezone(f"Invalid timezone reference: {tz!r}")
    try:
        return ZoneInfo(tz.strip())
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise InvalidTimezone(f"Unknown timezone: {tz!r}") from exc


def add_days(value: dt.datetime, days: int) -> dt.datetime:
    try:
        return value + dt.timedelta(days=days)
    except OverflowError as exc:
        raise OutOfRange(f"{value.isoformat()} shifted by {days} days is out of range") from exc


def to_start_of(
    value: dt.datetime,
    unit: UnitOfTime,
    week_start: WeekStartDay = WeekStartDay.MONDAY,
) -> dt.datetime:
    """Return the first moment of the day or week containing ``value``.

    The result keeps the ``tzinfo`` of ``value``; arithmetic is done on the
    wall clock so aware values land on local midnight.
    """
    day = value.replace(hour=0, minute=0, second=0, microsecond=0, fold=0)
    if unit is UnitOfTime.DAY:
        return day
    if unit is UnitOfTime.WEEK:
        offset = (day.weekday() - int(week_start)) % DAYS_PER_WEEK
        return add_days(day, -offset)
    raise ValueError(f"Unsupported unit: {unit!r}")


def to_end_of(
    value: dt.datetime,
    unit: UnitOfTime,
    week_start: WeekStartDay = WeekStartDay.MONDAY,
) -> dt.datetime:
    """Return the last tick of the day or week containing ``value``."""
    start = to_start_of(value, unit, week_start)
    span = DAYS_PER_WEEK if unit is UnitOfTime.WEEK else 1
    return add_days(start, span) - TICK


def _as_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def to_tz(value: dt.datetime, tz: TimezoneRef) -> dt.datetime:
    """Convert a UTC instant to the wall clock of ``tz`` (naive means UTC)."""
    zone = resolve_timezone(tz)
    try:
        return _as_utc(value).astimezone(zone)
    except OverflowError as exc:
        raise OutOfRange(f"{value.isoformat()} cannot be expressed in {zone}") from exc


def to_utc(value: dt.datetime, tz: TimezoneRef) -> dt.datetime:
    """Interpret the wall clock of ``value`` in ``tz`` and return it in UTC."""
    zone = resolve_timezone(tz)
    local = value.replace(tzinfo=zone)
    try:
        return local.astimezone(UTC)
    except OverflowError as exc:
        raise OutOfRange(f"{value.isoformat()} in {zone} cannot be expressed in UTC") from exc
