"""
Configuration loading utilities.

Loads environment variables from `.env` and validates the locale, timezone
and optional week start used by the week service.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv, find_dotenv
from streamlit.logger import get_logger

from utils.culture import DEFAULT_LOCALE, is_known_locale
from utils.time import WeekStartDay, resolve_timezone

logger = get_logger(__name__)

DEFAULT_TIMEZONE = "UTC"


@dataclass(frozen=True)
class Config:
    """Settings for `WeekService`.

    `locale` only picks the service's first day of week; the ambient locale
    read by `utils.week` is set through `utils.culture.set_locale`.
    """

    locale: str
    timezone: str
    week_start: Optional[WeekStartDay]


def _parse_week_start(value: Optional[str]) -> Optional[WeekStartDay]:
    if not value or not value.strip():
        return None
    try:
        return WeekStartDay[value.strip().upper()]
    except KeyError:
        logger.warning("Unknown WEEK_START_DAY %r, using the locale's first day", value)
        return None


def load_config() -> Config:
    """Load configuration from environment."""
    load_dotenv(find_dotenv(), override=True)

    locale = os.getenv("WEEK_LOCALE") or DEFAULT_LOCALE
    if not is_known_locale(locale):
        logger.warning("Unknown WEEK_LOCALE %r, falling back to %s", locale, DEFAULT_LOCALE)
        locale = DEFAULT_LOCALE
    timezone = os.getenv("WEEK_TIMEZONE") or DEFAULT_TIMEZONE
    resolve_timezone(timezone)  # raises InvalidTimezone
    week_start = _parse_week_start(os.getenv("WEEK_START_DAY"))
    logger.debug("WEEK_LOCALE: %s, WEEK_TIMEZONE: %s, WEEK_START_DAY: %s", locale, timezone, week_start)

    return Config(
        locale=locale,
        timezone=timezone,
        week_start=week_start,
    )
