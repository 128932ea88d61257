import datetime as dt

import pandas as pd

from services.week_service import WEEK_COLUMNS, WeekService
from utils.config import Config
from utils.time import TICK, UTC, WeekStartDay


def _service(config, now=dt.datetime(2024, 3, 6, 12, 0, tzinfo=UTC)):
    return WeekService(config, now_fn=lambda: now)


def test_current_previous_next_week(ny_config):
    service = _service(ny_config)
    assert service.current_week() == (
        dt.datetime(2024, 3, 4, 5, 0, tzinfo=UTC),
        dt.datetime(2024, 3, 11, 3, 59, 59, 999999, tzinfo=UTC),
    )
    assert service.previous_week() == (
        dt.datetime(2024, 2, 26, 5, 0, tzinfo=UTC),
        dt.datetime(2024, 3, 4, 3, 59, 59, 999999, tzinfo=UTC),
    )
    assert service.next_week() == (
        dt.datetime(2024, 3, 11, 5, 0, tzinfo=UTC),
        dt.datetime(2024, 3, 18, 3, 59, 59, 999999, tzinfo=UTC),
    )


def test_week_number_defaults_to_now(ny_config):
    service = _service(ny_config)
    assert service.week_number() == 10
    assert service.week_number(dt.datetime(2024, 1, 1, 3, 0, tzinfo=UTC)) == 52


def test_week_start_comes_from_locale_without_override():
    service = _service(Config(locale="en_US", timezone="UTC", week_start=None))
    assert service.week_start is WeekStartDay.SUNDAY
    assert service.current_week()[0] == dt.datetime(2024, 3, 3, tzinfo=UTC)


def test_weeks_between_follows_local_midnight_across_dst(ny_config):
    service = _service(ny_config)
    weeks = service.weeks_between(
        dt.datetime(2024, 2, 28, tzinfo=UTC), dt.datetime(2024, 3, 20, tzinfo=UTC)
    )
    assert list(weeks.columns) == WEEK_COLUMNS
    assert weeks["weekStart"].tolist() == [
        pd.Timestamp("2024-02-26 05:00", tz="UTC"),
        pd.Timestamp("2024-03-04 05:00", tz="UTC"),
        pd.Timestamp("2024-03-11 04:00", tz="UTC"),
        pd.Timestamp("2024-03-18 04:00", tz="UTC"),
    ]
    assert weeks["isoWeek"].tolist() == [9, 10, 11, 12]
    assert weeks["isoYear"].tolist() == [2024] * 4
    dst_week = weeks.iloc[1]
    assert dst_week["weekEnd"] - dst_week["weekStart"] + TICK == pd.Timedelta(hours=167)


def test_weeks_between_empty_range(ny_config):
    service = _service(ny_config)
    weeks = service.weeks_between(
        dt.datetime(2024, 3, 20, tzinfo=UTC), dt.datetime(2024, 3, 1, tzinfo=UTC)
    )
    assert weeks.empty
    assert list(weeks.columns) == WEEK_COLUMNS


def test_annotate_adds_week_columns(ny_config):
    service = _service(ny_config)
    df = pd.DataFrame(
        {
            "activityId": ["a", "b", "c"],
            "startTime": ["2024-03-11T00:30:00Z", None, "2024-03-13T12:00:00Z"],
        }
    )
    out = service.annotate(df)
    assert "weekStart" not in df.columns
    assert out.loc[0, "weekStart"] == pd.Timestamp("2024-03-04 05:00", tz="UTC")
    assert out.loc[2, "weekStart"] == pd.Timestamp("2024-03-11 04:00", tz="UTC")
    assert out.loc[2, "weekEnd"] == pd.Timestamp("2024-03-18 03:59:59.999999", tz="UTC")
    assert pd.isna(out.loc[1, "weekStart"])
    assert out["isoWeek"].isna().tolist() == [False, True, False]
    assert out.loc[0, "isoWeek"] == 10
    assert out.loc[2, "isoWeek"] == 11
