"""Calendar arithmetic and option lists for the dropdown panels."""

from calendar import monthrange
from datetime import date
from typing import List, Optional, Tuple

from django.utils import timezone

from apps.pickers.conf import picker_setting
from apps.pickers.constants import (
    MONTH_LABELS,
    MONTH_LABELS_SHORT,
    PickerVariant,
)
from .exceptions import InvalidTimeIntervalError


def days_in_month(year: int, month: int) -> int:
    """
    Return the number of days in a month.

    Args:
        year: Calendar year
        month: Zero-based month (0 = January, 11 = December)

    Returns:
        Day count, with February following the Gregorian leap-year rule
    """
    return monthrange(year, month + 1)[1]


def time_slots(interval_minutes: int = None) -> List[str]:
    """
    Enumerate the "HH:MM" slots of a day.

    Slots step through each hour by ``interval_minutes`` starting at minute
    zero, so an interval that does not divide 60 restarts at the top of every
    hour (45 gives 00:00, 00:45, 01:00, 01:45, ...).

    Args:
        interval_minutes: Slot granularity, defaults to PICKERS['TIME_INTERVAL']

    Returns:
        Ordered list of slots from "00:00" up to, not including, "24:00"

    Raises:
        InvalidTimeIntervalError: If the interval is not a positive integer
    """
    if interval_minutes is None:
        interval_minutes = picker_setting('TIME_INTERVAL')

    if isinstance(interval_minutes, bool) or not isinstance(interval_minutes, int):
        raise InvalidTimeIntervalError("Time interval must be a whole number of minutes")
    if interval_minutes <= 0:
        raise InvalidTimeIntervalError("Time interval must be positive")

    return [
        f"{hour:02d}:{minute:02d}"
        for hour in range(24)
        for minute in range(0, 60, interval_minutes)
    ]


def year_options(variant: str = PickerVariant.DATE, today: Optional[date] = None) -> List[int]:
    """
    Years listed in the year column.

    The date picker (and the range picker) shows a wide window around the
    current year for back-dated receipts; the date-time picker shows a short
    window since it records drop-off and pickup times.
    """
    if today is None:
        today = timezone.localdate()

    if variant == PickerVariant.DATETIME:
        back = picker_setting('DATETIME_YEARS_BACK')
        span = picker_setting('DATETIME_YEAR_SPAN')
    else:
        back = picker_setting('DATE_YEARS_BACK')
        span = picker_setting('DATE_YEAR_SPAN')

    first = today.year - back
    return list(range(first, first + span))


def month_options(variant: str = PickerVariant.DATE) -> List[Tuple[int, str]]:
    """Zero-based month values with long labels, or short ones for date-time."""
    labels = MONTH_LABELS_SHORT if variant == PickerVariant.DATETIME else MONTH_LABELS
    return list(enumerate(labels))


def day_options(year: Optional[int], month: Optional[int]) -> List[int]:
    """Days of the selected month; empty until both year and month are chosen."""
    if year is None or month is None:
        return []
    return list(range(1, days_in_month(year, month) + 1))
