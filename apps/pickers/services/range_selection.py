"""
Date range selection for report and stock filters.

A range picker holds two independent date selections. Completing either side
commits it straight away, provided the range stays ordered; "Apply" commits
whichever sides are complete and closes the panel.

Rules:
    - Selecting a year resets that side's month and day.
    - Selecting a month resets that side's day (and needs a year first).
    - Selecting a day needs a year and a month first.
    - A start after the committed end (or an end before the committed start)
      is rejected with an error message and nothing is emitted.
    - A side whose value did not change is not emitted again.
    - Clearing emits ('', '') and closes the panel.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, List, Optional, Tuple

from apps.pickers.conf import picker_setting
from apps.pickers.constants import (
    END_BEFORE_START_ERROR,
    START_AFTER_END_ERROR,
    PickerVariant,
    RangeEventType,
    RangeSide,
)
from .calendar_arithmetic import day_options, month_options, year_options
from .controller import PanelController
from .exceptions import InvalidEventError
from .formatting import as_calendar_date, format_range, parse_value
from .selection import (
    PartialSelection,
    normalize_value,
    seed_selection,
    validate_day,
    validate_month,
    validate_year,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RangeSelection:
    """Both sides of a range plus the committed values they are checked against."""

    start: PartialSelection = field(default_factory=PartialSelection)
    end: PartialSelection = field(default_factory=PartialSelection)
    start_value: str = ''
    end_value: str = ''
    error: str = ''

    def side(self, side: str) -> PartialSelection:
        return self.start if side == RangeSide.START else self.end

    @property
    def is_applicable(self) -> bool:
        return self.start.is_complete() or self.end.is_complete()


@dataclass(frozen=True)
class RangeEvent:
    type: str
    side: Optional[str] = None
    value: Any = None


@dataclass(frozen=True)
class RangeTransition:
    """
    Result of one range event.

    ``emitted`` is the (start, end) pair to report, or None. ``close`` tells
    the controller to close the panel.
    """

    state: RangeSelection
    emitted: Optional[Tuple[str, str]] = None
    close: bool = False

    @property
    def did_emit(self) -> bool:
        return self.emitted is not None


def seed_range(start_value: str = '', end_value: str = '') -> RangeSelection:
    """Rebuild both sides from committed values."""
    return RangeSelection(
        start=seed_selection(start_value, PickerVariant.DATE),
        end=seed_selection(end_value, PickerVariant.DATE),
        start_value=start_value or '',
        end_value=end_value or '',
    )


def _with_side(state: RangeSelection, side: str, selection: PartialSelection) -> RangeSelection:
    if side == RangeSide.START:
        return replace(state, start=selection)
    return replace(state, end=selection)


def _violates_order(side: str, candidate: str, state: RangeSelection) -> bool:
    candidate_day = as_calendar_date(parse_value(candidate))
    if side == RangeSide.START:
        other = parse_value(state.end_value)
        return other is not None and candidate_day > as_calendar_date(other)
    other = parse_value(state.start_value)
    return other is not None and candidate_day < as_calendar_date(other)


def commit_side(state: RangeSelection, side: str) -> Tuple[RangeSelection, bool, bool]:
    """
    Commit one complete side against the other committed value.

    Returns:
        (new state, changed, rejected) where ``changed`` means the committed
        value moved and ``rejected`` means the ordering check failed
    """
    selection = state.side(side)
    if not selection.is_complete():
        return state, False, False

    candidate = normalize_value(selection, PickerVariant.DATE)

    if _violates_order(side, candidate, state):
        message = START_AFTER_END_ERROR if side == RangeSide.START else END_BEFORE_START_ERROR
        logger.debug("Rejected %s date %s: %s", side, candidate, message)
        return replace(state, error=message), False, True

    current = state.start_value if side == RangeSide.START else state.end_value
    if candidate == current:
        return replace(state, error=''), False, False

    if side == RangeSide.START:
        return replace(state, start_value=candidate, error=''), True, False
    return replace(state, end_value=candidate, error=''), True, False


def _select_year(state, side, year):
    validate_year(year)
    return _with_side(state, side, PartialSelection(year=year))


def _select_month(state, side, month):
    selection = state.side(side)
    if selection.year is None:
        logger.debug("Ignoring %s month %s selected before a year", side, month)
        return state
    validate_month(month)
    return _with_side(state, side, replace(selection, month=month, day=None))


def _select_day(state, side, day):
    selection = state.side(side)
    if selection.year is None or selection.month is None:
        logger.debug("Ignoring %s day %s selected before year and month", side, day)
        return state
    validate_day(selection.year, selection.month, day)
    return _with_side(state, side, replace(selection, day=day))


_SIDE_HANDLERS = {
    RangeEventType.SELECT_YEAR.value: _select_year,
    RangeEventType.SELECT_MONTH.value: _select_month,
    RangeEventType.SELECT_DAY.value: _select_day,
}


def range_transition(state: RangeSelection, event: RangeEvent) -> RangeTransition:
    """
    Apply one range picker gesture.

    Raises:
        InvalidEventError: For unknown event types or a missing side
        InvalidSelectionError: For values outside the offered options
    """
    if event.type == RangeEventType.CLEAR:
        return RangeTransition(state=RangeSelection(), emitted=('', ''), close=True)

    if event.type == RangeEventType.APPLY:
        changed = False
        for side in (RangeSide.START, RangeSide.END):
            state, side_changed, rejected = commit_side(state, side)
            changed = changed or side_changed
            if rejected:
                emitted = (state.start_value, state.end_value) if changed else None
                return RangeTransition(state=state, emitted=emitted)
        emitted = (state.start_value, state.end_value) if changed else None
        return RangeTransition(state=state, emitted=emitted, close=True)

    handler = _SIDE_HANDLERS.get(str(event.type))
    if handler is None:
        raise InvalidEventError(f"Unknown range event: {event.type!r}")
    if event.side not in RangeSide.values:
        raise InvalidEventError(f"Range side must be one of {', '.join(RangeSide.values)}")

    updated = handler(state, event.side, event.value)
    if updated is state:
        return RangeTransition(state=state)

    if event.type == RangeEventType.SELECT_DAY:
        updated, changed, _ = commit_side(updated, event.side)
        if changed:
            return RangeTransition(state=updated, emitted=(updated.start_value, updated.end_value))
    return RangeTransition(state=updated)


class RangePickerController(PanelController):
    """
    A dropdown date range picker instance.

    Args:
        start_value: Committed start date ('YYYY-MM-DD') or ''
        end_value: Committed end date or ''
        on_change: Called with (start, end) whenever a side is committed
        placeholder: Trigger text while neither side is set
        disabled: Suppress all interaction
        pointer_source: Outside-click event source
        contains: Containment test for pointer targets
    """

    def __init__(
        self,
        *,
        start_value: str = '',
        end_value: str = '',
        on_change: Optional[Callable[[str, str], None]] = None,
        placeholder: Optional[str] = None,
        disabled: bool = False,
        pointer_source=None,
        contains: Optional[Callable[[Any], bool]] = None,
    ):
        super().__init__(disabled=disabled, pointer_source=pointer_source, contains=contains)
        self.on_change = on_change or (lambda start, end: None)
        self.placeholder = placeholder if placeholder is not None else picker_setting('RANGE_PLACEHOLDER')
        self.state = seed_range(start_value, end_value)

    @property
    def start_value(self) -> str:
        return self.state.start_value

    @property
    def end_value(self) -> str:
        return self.state.end_value

    @property
    def error(self) -> str:
        return self.state.error

    @property
    def is_applicable(self) -> bool:
        return self.state.is_applicable

    def dispatch(self, event: RangeEvent) -> Optional[RangeTransition]:
        if self.disabled:
            logger.debug("Ignoring %s on a disabled range picker", event.type)
            return None

        result = range_transition(self.state, event)
        self.state = result.state

        if result.close:
            self.close()
        if result.did_emit:
            self.on_change(*result.emitted)

        return result

    def select_year(self, side: str, year: int) -> Optional[RangeTransition]:
        return self.dispatch(RangeEvent(RangeEventType.SELECT_YEAR, side, year))

    def select_month(self, side: str, month: int) -> Optional[RangeTransition]:
        return self.dispatch(RangeEvent(RangeEventType.SELECT_MONTH, side, month))

    def select_day(self, side: str, day: int) -> Optional[RangeTransition]:
        return self.dispatch(RangeEvent(RangeEventType.SELECT_DAY, side, day))

    def select_start_year(self, year: int) -> Optional[RangeTransition]:
        return self.select_year(RangeSide.START, year)

    def select_end_year(self, year: int) -> Optional[RangeTransition]:
        return self.select_year(RangeSide.END, year)

    def select_start_month(self, month: int) -> Optional[RangeTransition]:
        return self.select_month(RangeSide.START, month)

    def select_end_month(self, month: int) -> Optional[RangeTransition]:
        return self.select_month(RangeSide.END, month)

    def select_start_day(self, day: int) -> Optional[RangeTransition]:
        return self.select_day(RangeSide.START, day)

    def select_end_day(self, day: int) -> Optional[RangeTransition]:
        return self.select_day(RangeSide.END, day)

    def apply(self) -> Optional[RangeTransition]:
        return self.dispatch(RangeEvent(RangeEventType.APPLY))

    def clear(self) -> Optional[RangeTransition]:
        return self.dispatch(RangeEvent(RangeEventType.CLEAR))

    def set_values(self, start_value: str, end_value: str) -> None:
        """Accept committed values from the caller; foreign changes re-seed both sides."""
        start_value = start_value or ''
        end_value = end_value or ''
        if (start_value, end_value) == (self.state.start_value, self.state.end_value):
            return
        self.state = seed_range(start_value, end_value)

    @property
    def display_text(self) -> str:
        return format_range(self.state.start_value, self.state.end_value, self.placeholder)

    @property
    def years(self) -> List[int]:
        return year_options(PickerVariant.DATE)

    @property
    def months(self) -> List[Tuple[int, str]]:
        return month_options(PickerVariant.DATE)

    def days(self, side: str) -> List[int]:
        selection = self.state.side(side)
        return day_options(selection.year, selection.month)
