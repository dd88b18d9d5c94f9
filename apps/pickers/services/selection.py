"""
Selection state machine for the dropdown date and date-time pickers.

A picker keeps a partial selection (year, month, day and, for the date-time
variant, a time slot) that the user fills in column by column. Each click is
an event; ``transition`` applies it and, whenever the result is complete,
computes the normalized value the caller should store.

Phases:
    empty    - nothing selected
    partial  - some, not all, participating fields selected
    complete - every participating field selected; a value was emitted

Policy:
    - Selecting a month always clears the day, even if the day would still
      fit the new month.
    - Out-of-order events (a day before a month, a time before a day) are
      ignored: the same selection comes back and nothing is emitted.
    - Every event that leaves the selection complete emits again.

Example:
    Walking a date-time picker to completion::

        from apps.pickers.services import PartialSelection, PickerEvent, transition

        selection = PartialSelection()
        for event in (
            PickerEvent('select_year', 2024),
            PickerEvent('select_month', 2),
            PickerEvent('select_day', 5),
            PickerEvent('select_time', '14:30'),
        ):
            result = transition(selection, event, variant='datetime')
            selection = result.selection

        result.emitted  # '2024-03-05T14:30:00.000Z' with TIME_ZONE = 'UTC'
"""

import logging
import re
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone as dt_timezone
from typing import Any, Optional

from django.utils import timezone

from apps.pickers.constants import PickerEventType, PickerVariant, SelectionPhase
from .calendar_arithmetic import days_in_month
from .exceptions import InvalidEventError, InvalidSelectionError
from .formatting import as_calendar_date, as_local_datetime, parse_value


logger = logging.getLogger(__name__)

TIME_RE = re.compile(r'^([01]\d|2[0-3]):([0-5]\d)$')

MIN_YEAR = 1
MAX_YEAR = 9999


@dataclass(frozen=True)
class PartialSelection:
    """The picker's private, possibly incomplete working selection."""

    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    time: Optional[str] = None

    def is_complete(self, variant: str = PickerVariant.DATE) -> bool:
        if self.year is None or self.month is None or self.day is None:
            return False
        if variant == PickerVariant.DATETIME:
            return self.time is not None
        return True

    def is_empty(self, variant: str = PickerVariant.DATE) -> bool:
        fields = [self.year, self.month, self.day]
        if variant == PickerVariant.DATETIME:
            fields.append(self.time)
        return all(field is None for field in fields)

    def phase(self, variant: str = PickerVariant.DATE) -> SelectionPhase:
        if self.is_complete(variant):
            return SelectionPhase.COMPLETE
        if self.is_empty(variant):
            return SelectionPhase.EMPTY
        return SelectionPhase.PARTIAL

    def as_dict(self) -> dict:
        return {
            'year': self.year,
            'month': self.month,
            'day': self.day,
            'time': self.time,
        }


@dataclass(frozen=True)
class PickerEvent:
    type: str
    value: Any = None


@dataclass(frozen=True)
class Transition:
    """
    Result of applying one event.

    ``emitted`` is None when nothing should be reported to the caller, the
    empty string when the picker was cleared, and the normalized ISO value
    when the selection is complete.
    """

    selection: PartialSelection
    emitted: Optional[str] = None

    @property
    def did_emit(self) -> bool:
        return self.emitted is not None


# =============================================================================
# Validation
# =============================================================================

def _require_int(value, label):
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidSelectionError(f"{label} must be an integer")
    return value


def validate_year(year) -> int:
    _require_int(year, 'Year')
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidSelectionError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}")
    return year


def validate_month(month) -> int:
    _require_int(month, 'Month')
    if not 0 <= month <= 11:
        raise InvalidSelectionError("Month must be between 0 and 11")
    return month


def validate_day(year: int, month: int, day) -> int:
    _require_int(day, 'Day')
    last_day = days_in_month(year, month)
    if not 1 <= day <= last_day:
        raise InvalidSelectionError(f"Day must be between 1 and {last_day}")
    return day


def validate_time(value) -> str:
    if not isinstance(value, str) or not TIME_RE.match(value):
        raise InvalidSelectionError("Time must be in HH:MM format")
    return value


# =============================================================================
# Field transitions
# =============================================================================

def select_year(selection: PartialSelection, year: int, variant: str = PickerVariant.DATE) -> PartialSelection:
    """
    Set the year, keeping month, day and time.

    The day is dropped only when it no longer exists in the new year
    (February 29th after switching to a common year).
    """
    validate_year(year)
    day = selection.day
    if day is not None and selection.month is not None and day > days_in_month(year, selection.month):
        day = None
    return replace(selection, year=year, day=day)


def select_month(selection: PartialSelection, month: int, variant: str = PickerVariant.DATE) -> PartialSelection:
    """Set the month and clear the day. Ignored until a year is chosen."""
    if selection.year is None:
        logger.debug("Ignoring month %s selected before a year", month)
        return selection
    validate_month(month)
    return replace(selection, month=month, day=None)


def select_day(selection: PartialSelection, day: int, variant: str = PickerVariant.DATE) -> PartialSelection:
    """Set the day. Ignored until both year and month are chosen."""
    if selection.year is None or selection.month is None:
        logger.debug("Ignoring day %s selected before year and month", day)
        return selection
    validate_day(selection.year, selection.month, day)
    return replace(selection, day=day)


def select_time(selection: PartialSelection, value: str, variant: str = PickerVariant.DATETIME) -> PartialSelection:
    """Set the time slot. Date-time variant only; ignored until a day is chosen."""
    if variant != PickerVariant.DATETIME:
        logger.debug("Ignoring time %s on a date-only picker", value)
        return selection
    if selection.day is None:
        logger.debug("Ignoring time %s selected before a day", value)
        return selection
    validate_time(value)
    return replace(selection, time=value)


_FIELD_HANDLERS = {
    PickerEventType.SELECT_YEAR.value: select_year,
    PickerEventType.SELECT_MONTH.value: select_month,
    PickerEventType.SELECT_DAY.value: select_day,
    PickerEventType.SELECT_TIME.value: select_time,
}


# =============================================================================
# Normalized values
# =============================================================================

def normalize_value(selection: PartialSelection, variant: str = PickerVariant.DATE) -> str:
    """
    Serialize a complete selection.

    Date pickers emit the calendar date ("2024-03-05"). Date-time pickers
    read the selection as local civil time in the current time zone and emit
    the UTC instant with millisecond precision ("2024-03-05T09:00:00.000Z").

    Raises:
        InvalidSelectionError: If the selection is not complete, or its UTC
            instant falls outside years 1-9999
    """
    if not selection.is_complete(variant):
        raise InvalidSelectionError("Selection is not complete")

    if variant != PickerVariant.DATETIME:
        return date(selection.year, selection.month + 1, selection.day).isoformat()

    hours, minutes = (int(part) for part in selection.time.split(':'))
    local = timezone.make_aware(
        datetime(selection.year, selection.month + 1, selection.day, hours, minutes)
    )
    try:
        instant = local.astimezone(dt_timezone.utc).replace(tzinfo=None)
    except OverflowError as e:
        raise InvalidSelectionError("Date and time fall outside the supported range") from e
    return instant.isoformat(timespec='milliseconds') + 'Z'


def seed_selection(value: Optional[str], variant: str = PickerVariant.DATE) -> PartialSelection:
    """
    Rebuild a partial selection from a committed value.

    Used when a picker is (re)initialized so reopening the panel shows the
    previously committed choice. Empty or malformed values give an empty
    selection.
    """
    parsed = parse_value(value)
    if parsed is None:
        return PartialSelection()

    if variant == PickerVariant.DATETIME:
        moment = as_local_datetime(parsed)
        return PartialSelection(
            year=moment.year,
            month=moment.month - 1,
            day=moment.day,
            time=f"{moment.hour:02d}:{moment.minute:02d}",
        )

    day = as_calendar_date(parsed)
    return PartialSelection(year=day.year, month=day.month - 1, day=day.day)


# =============================================================================
# Transition function
# =============================================================================

def transition(
    selection: PartialSelection,
    event: PickerEvent,
    *,
    variant: str = PickerVariant.DATE,
) -> Transition:
    """
    Apply one event to a selection.

    Args:
        selection: Current partial selection
        event: The user's gesture
        variant: 'date' or 'datetime'

    Returns:
        Transition with the new selection and the value to report, if any

    Raises:
        InvalidEventError: If the event type is unknown
        InvalidSelectionError: If the event carries a value the panel never offers
    """
    if event.type == PickerEventType.CLEAR:
        return Transition(selection=PartialSelection(), emitted='')

    handler = _FIELD_HANDLERS.get(str(event.type))
    if handler is None:
        raise InvalidEventError(f"Unknown picker event: {event.type!r}")

    updated = handler(selection, event.value, variant)
    if updated is selection:
        return Transition(selection=selection)

    if updated.is_complete(variant):
        return Transition(selection=updated, emitted=normalize_value(updated, variant))
    return Transition(selection=updated)
