"""
Ambient locale used to pick the first day of the week.

The locale is process-wide, like the display locale of the UI layer.
Week functions read it at call time unless an explicit week start is given.
"""

from __future__ import annotations

from typing import Optional

from babel import Locale, UnknownLocaleError
from streamlit.logger import get_logger

from utils.time import WeekStartDay

logger = get_logger(__name__)

DEFAULT_LOCALE = "fr_FR"
LOCALE = DEFAULT_LOCALE


def _parse(locale_str: str) -> Locale:
    return Locale.parse(locale_str)


def is_known_locale(locale_str: object) -> bool:
    try:
        _parse(locale_str)
    except (UnknownLocaleError, ValueError, TypeError):
        return False
    return True


def set_locale(locale_str: str = DEFAULT_LOCALE) -> None:
    global LOCALE
    if is_known_locale(locale_str):
        LOCALE = locale_str
    else:
        logger.warning("Unknown locale %r, falling back to %s", locale_str, DEFAULT_LOCALE)
        LOCALE = DEFAULT_LOCALE


def get_locale() -> str:
    return LOCALE


def first_day_of_week(locale_str: Optional[str] = None) -> WeekStartDay:
    """First day of the week for ``locale_str`` or the ambient locale.

    ``fr_FR`` gives Monday, ``en_US`` gives Sunday.
    """
    locale = _parse(locale_str or LOCALE)
    return WeekStartDay(locale.first_week_day)
