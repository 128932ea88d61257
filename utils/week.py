"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Week boundaries for datetimes, in their own representation or in a timezone.

Functions without a timezone keep the ``tzinfo`` of their input. The ``*_tz_*``
functions take a UTC instant (naive values are read as UTC), work on the wall
clock of the timezone and return an aware UTC datetime.

The first day of the week comes from the ambient locale (see ``utils.culture``)
unless ``week_start`` is passed. Week numbers always follow ISO 8601.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from utils.culture import first_day_of_week
from utils.time import (
    DAYS_PER_WEEK,
    TimezoneRef,
    UnitOfTime,
    WeekStartDay,
    add_days,
    to_end_of,
    to_start_of,
    to_tz,
    to_utc,
)


def _week_start(week_start: Optional[WeekStartDay]) -> WeekStartDay:
    if week_start is None:
        return first_day_of_week()
    return WeekStartDay(week_start)


# --- Current culture -------------------------------------------------
def to_start_of_week(value: dt.datetime, week_start: Optional[WeekStartDay] = None) -> dt.datetime:
    """Return 00:00:00 of the first day of the week containing ``value``.

    No timezone conversion is done.
    """
    return to_start_of(value, UnitOfTime.WEEK, _week_start(week_start))


def to_end_of_week(value: dt.datetime, week_start: Optional[WeekStartDay] = None) -> dt.datetime:
    """Return the last tick of the week, one microsecond before the next week starts."""
    return to_end_of(value, UnitOfTime.WEEK, _week_start(week_start))


def to_start_of_next_week(value: dt.datetime, week_start: Optional[WeekStartDay] = None) -> dt.datetime:
    return add_days(to_start_of_week(value, week_start), DAYS_PER_WEEK)


def to_start_of_previous_week(value: dt.datetime, week_start: Optional[WeekStartDay] = None) -> dt.datetime:
    return add_days(to_start_of_week(value, week_start), -DAYS_PER_WEEK)


def to_end_of_next_week(value: dt.datetime, week_start: Optional[WeekStartDay] = None) -> dt.datetime:
    return add_days(to_end_of_week(value, week_start), DAYS_PER_WEEK)


def to_end_of_previous_week(value: dt.datetime, week_start: Optional[WeekStartDay] = None) -> dt.datetime:
    return add_days(to_end_of_week(value, week_start), -DAYS_PER_WEEK)


# --- Timezone aware --------------------------------------------------
def to_start_of_tz_week(
    utc_now: dt.datetime, tz: TimezoneRef, week_start: Optional[WeekStartDay] = None
) -> dt.datetime:
    """Start of the current week in ``tz``, expressed in UTC.

    Args:
        utc_now: Instant in UTC (naive values are read as UTC).
        tz: IANA name or tzinfo of the timezone defining the week.
        week_start: First day of the week, ambient locale when omitted.

    Returns:
        datetime: Aware UTC datetime of local midnight on the first day of the week.

    Raises:
        InvalidTimezone: ``tz`` cannot be resolved.
        OutOfRange: the boundary falls outside the datetime range.
    """
    local = to_tz(utc_now, tz)
    return to_utc(to_start_of_week(local, week_start), tz)


def to_start_of_next_tz_week(
    utc_now: dt.datetime, tz: TimezoneRef, week_start: Optional[WeekStartDay] = None
) -> dt.datetime:
    """Start of the tz week plus exactly 168 hours.

    The shift is applied to the UTC instant, so across a DST change the result
    is not local midnight.
    """
    return add_days(to_start_of_tz_week(utc_now, tz, week_start), DAYS_PER_WEEK)


def to_start_of_previous_tz_week(
    utc_now: dt.datetime, tz: TimezoneRef, week_start: Optional[WeekStartDay] = None
) -> dt.datetime:
    return add_days(to_start_of_tz_week(utc_now, tz, week_start), -DAYS_PER_WEEK)


def to_end_of_tz_week(
    utc_now: dt.datetime, tz: TimezoneRef, week_start: Optional[WeekStartDay] = None
) -> dt.datetime:
    """Last tick of the current week in ``tz``, expressed in UTC."""
    local = to_tz(utc_now, tz)
    return to_utc(to_end_of_week(local, week_start), tz)


def to_end_of_previous_tz_week(
    utc_now: dt.datetime, tz: TimezoneRef, week_start: Optional[WeekStartDay] = None
) -> dt.datetime:
    return add_days(to_end_of_tz_week(utc_now, tz, week_start), -DAYS_PER_WEEK)


def to_end_of_next_tz_week(
    utc_now: dt.datetime, tz: TimezoneRef, week_start: Optional[WeekStartDay] = None
) -> dt.datetime:
    return add_days(to_end_of_tz_week(utc_now, tz, week_start), DAYS_PER_WEEK)


# --- Week numbers ----------------------------------------------------
def to_tz_week_number(utc_now: dt.datetime, tz: TimezoneRef) -> int:
    """ISO week number of the local date of ``utc_now`` in ``tz``."""
    return to_utc_week_number(to_tz(utc_now, tz))


def to_utc_week_number(value: dt.datetime) -> int:
    # Monday start, week 1 holds the year's first Thursday
    return value.isocalendar()[1]
