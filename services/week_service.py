"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Week windows and week annotations for a configured timezone.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple, Union

import pandas as pd
from streamlit.logger import get_logger

from utils.config import Config
from utils.culture import first_day_of_week
from utils.time import TICK, UTC, resolve_timezone, to_tz
from utils.week import (
    to_end_of_next_tz_week,
    to_end_of_previous_tz_week,
    to_end_of_tz_week,
    to_start_of_next_tz_week,
    to_start_of_previous_tz_week,
    to_start_of_tz_week,
    to_tz_week_number,
)

logger = get_logger(__name__)

WEEK_COLUMNS = ["weekStart", "weekEnd", "isoYear", "isoWeek"]


@dataclass
class WeekService:
    config: Config
    now_fn: Callable[[], dt.datetime] = field(
        default_factory=lambda: (lambda: dt.datetime.now(dt.timezone.utc))
    )

    def __post_init__(self) -> None:
        self.tz = resolve_timezone(self.config.timezone)
        self.week_start = self.config.week_start
        if self.week_start is None:
            self.week_start = first_day_of_week(self.config.locale)
        logger.debug("WeekService tz=%s week_start=%s", self.config.timezone, self.week_start.name)

    # --- Windows around now -----------------------------------------
    def current_week(self) -> Tuple[dt.datetime, dt.datetime]:
        now = self.now_fn()
        return (
            to_start_of_tz_week(now, self.tz, self.week_start),
            to_end_of_tz_week(now, self.tz, self.week_start),
        )

    def previous_week(self) -> Tuple[dt.datetime, dt.datetime]:
        now = self.now_fn()
        return (
            to_start_of_previous_tz_week(now, self.tz, self.week_start),
            to_end_of_previous_tz_week(now, self.tz, self.week_start),
        )

    def next_week(self) -> Tuple[dt.datetime, dt.datetime]:
        now = self.now_fn()
        return (
            to_start_of_next_tz_week(now, self.tz, self.week_start),
            to_end_of_next_tz_week(now, self.tz, self.week_start),
        )

    def week_number(self, value: Optional[dt.datetime] = None) -> int:
        return to_tz_week_number(value if value is not None else self.now_fn(), self.tz)

    # --- Tables -----------------------------------------------------
    def weeks_between(self, start_utc: dt.datetime, end_utc: dt.datetime) -> pd.DataFrame:
        """Build the grid of local weeks overlapping ``[start_utc, end_utc]``.

        - Each row starts at local midnight of the first day of the week, in UTC.
        - Rows follow each other through end of week + one tick, so weeks that
          contain a DST change are 167 or 169 hours long.
        - Returns DataFrame with columns: weekStart, weekEnd, isoYear, isoWeek.
        """
        bound = to_tz(end_utc, UTC)
        rows: List[Dict[str, object]] = []
        cur = to_start_of_tz_week(start_utc, self.tz, self.week_start)
        while cur <= bound:
            week_end = to_end_of_tz_week(cur, self.tz, self.week_start)
            iso_year, iso_week, _ = to_tz(cur, self.tz).isocalendar()
            rows.append(
                {
                    "weekStart": cur,
                    "weekEnd": week_end,
                    "isoYear": int(iso_year),
                    "isoWeek": int(iso_week),
                }
            )
            cur = to_start_of_tz_week(week_end + TICK, self.tz, self.week_start)
        logger.debug("weeks_between %s..%s -> %d weeks", start_utc, end_utc, len(rows))
        if not rows:
            return pd.DataFrame(columns=WEEK_COLUMNS)
        out = pd.DataFrame(rows, columns=WEEK_COLUMNS)
        out["weekStart"] = pd.to_datetime(out["weekStart"], utc=True)
        out["weekEnd"] = pd.to_datetime(out["weekEnd"], utc=True)
        return out

    def annotate(self, df: pd.DataFrame, column: str = "startTime") -> pd.DataFrame:
        """Add weekStart, weekEnd and isoWeek for the timestamps in ``column``.

        Timestamps are parsed as UTC; unparseable or missing values give missing
        week columns.
        """
        out = df.copy()
        stamps = pd.to_datetime(out[column], utc=True, errors="coerce")
        out["weekStart"] = pd.to_datetime(
            stamps.map(lambda ts: self._boundary(ts, to_start_of_tz_week)), utc=True
        )
        out["weekEnd"] = pd.to_datetime(
            stamps.map(lambda ts: self._boundary(ts, to_end_of_tz_week)), utc=True
        )
        out["isoWeek"] = stamps.map(
            lambda ts: pd.NA if pd.isna(ts) else to_tz_week_number(ts.to_pydatetime(), self.tz)
        ).astype("Int64")
        return out

    def _boundary(
        self, ts: pd.Timestamp, fn: Callable[..., dt.datetime]
    ) -> Union[dt.datetime, pd.Timestamp]:
        if pd.isna(ts):
            return pd.NaT
        return fn(ts.to_pydatetime(), self.tz, self.week_start)
