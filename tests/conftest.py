import datetime as dt
import sys
from pathlib import Path

import pytest


# Ensure project root is importable for tests
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


from utils import culture
from utils.config import Config
from utils.time import UTC, WeekStartDay


@pytest.fixture(autouse=True)
def ambient_locale():
    previous = culture.get_locale()
    culture.set_locale("fr_FR")
    yield
    culture.set_locale(previous)


@pytest.fixture
def thursday():
    # 2024-03-14 is a Thursday
    return dt.datetime(2024, 3, 14, 15, 30, tzinfo=UTC)


@pytest.fixture
def sample_instants():
    start = dt.datetime(2023, 12, 20, 0, 0, tzinfo=UTC)
    return [start + dt.timedelta(hours=7 * i, minutes=13 * i) for i in range(120)]


@pytest.fixture
def ny_config():
    return Config(locale="en_US", timezone="America/New_York", week_start=WeekStartDay.MONDAY)
