"""
Display strings for committed picker values.

Everything here derives from the external (committed) value only. The
in-progress selection of an open panel never leaks into the trigger label.
"""

import logging
from datetime import date, datetime, time
from typing import Optional, Union

from django.utils import timezone
from django.utils.dateformat import format as date_format
from django.utils.dateparse import parse_date, parse_datetime

from apps.pickers.constants import PickerVariant


logger = logging.getLogger(__name__)

DATE_DISPLAY_FORMAT = 'F j, Y'
SHORT_DATE_DISPLAY_FORMAT = 'M j, Y'
DATETIME_DISPLAY_FORMAT = 'M j, Y, h:i A'


def parse_value(value: Optional[str]) -> Optional[Union[date, datetime]]:
    """
    Parse an external picker value.

    Args:
        value: ISO-8601 date ("2024-03-05") or date-time
            ("2024-03-05T09:30:00.000Z"), or an empty string

    Returns:
        - date for date-only strings
        - aware datetime converted to the current time zone for date-times
          (naive date-times are read as local time)
        - None for empty or malformed input
    """
    if not value:
        return None

    value = value.strip()

    try:
        parsed_date = parse_date(value)
    except ValueError:
        parsed_date = None
    if parsed_date is not None:
        return parsed_date

    try:
        parsed = parse_datetime(value)
    except ValueError:
        parsed = None

    if parsed is None:
        logger.warning("Ignoring malformed picker value %r", value)
        return None

    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    try:
        return timezone.localtime(parsed)
    except OverflowError:
        logger.warning("Ignoring picker value %r outside the supported date range", value)
        return None


def as_local_datetime(parsed: Union[date, datetime]) -> datetime:
    """Widen a parsed value to an aware datetime; bare dates mean local midnight."""
    if isinstance(parsed, datetime):
        return parsed
    return timezone.make_aware(datetime.combine(parsed, time.min))


def as_calendar_date(parsed: Union[date, datetime]) -> date:
    if isinstance(parsed, datetime):
        return parsed.date()
    return parsed


def format_value(value: Optional[str], variant: str = PickerVariant.DATE) -> str:
    """
    Render a committed value for the trigger button.

    Empty or malformed values give an empty string; the caller shows its
    placeholder instead.

    Examples:
        format_value('2024-03-05')                          -> 'March 5, 2024'
        format_value('2024-03-05T14:30:00.000Z', 'datetime') -> 'Mar 5, 2024, 02:30 PM'
            (with TIME_ZONE = 'UTC')
    """
    parsed = parse_value(value)
    if parsed is None:
        return ''

    if variant == PickerVariant.DATETIME:
        return date_format(as_local_datetime(parsed), DATETIME_DISPLAY_FORMAT)
    return date_format(as_calendar_date(parsed), DATE_DISPLAY_FORMAT)


def format_short_date(value: Optional[str]) -> str:
    parsed = parse_value(value)
    if parsed is None:
        return ''
    return date_format(as_calendar_date(parsed), SHORT_DATE_DISPLAY_FORMAT)


def format_range(start_value: Optional[str], end_value: Optional[str], placeholder: str = '') -> str:
    """
    Render a committed date range.

    Returns the placeholder when neither end is set, "From <start>" or
    "To <end>" when only one is, and "<start> - <end>" otherwise.
    """
    start = format_short_date(start_value)
    end = format_short_date(end_value)

    if not start and not end:
        return placeholder
    if start and not end:
        return f"From {start}"
    if end and not start:
        return f"To {end}"
    return f"{start} - {end}"
