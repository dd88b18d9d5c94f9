"""
Panel lifecycle controllers.

PanelController owns the open/closed state of a dropdown panel and its
outside-click subscription. PickerController adds the single-value date and
date-time selection on top of it and keeps the partial selection in step with
the externally owned value.

Example:
    Driving a date picker from server-side code::

        source = InMemoryPointerSource()
        received = []

        with PickerController(
            variant='date',
            value='',
            on_change=received.append,
            pointer_source=source,
            contains=lambda target: target == 'panel',
        ) as picker:
            picker.toggle()
            picker.select_year(2024)
            picker.select_month(1)
            picker.select_day(29)
            source.dispatch('page')     # outside click closes the panel

        received  # ['2024-02-29']
"""

import logging
from typing import Any, Callable, List, Optional, Tuple

from apps.pickers.conf import picker_setting
from apps.pickers.constants import PickerEventType, PickerVariant, SelectionPhase
from .calendar_arithmetic import day_options, month_options, time_slots, year_options
from .formatting import format_value
from .selection import PickerEvent, Transition, seed_selection, transition


logger = logging.getLogger(__name__)


class PanelController:
    """
    Open/closed state plus outside-click dismissal for one dropdown.

    The pointer subscription is taken in ``mount`` and released in
    ``unmount``. Using the controller as a context manager releases it on
    every exit path, including exceptions.

    Args:
        disabled: When True the panel never opens and selections are ignored
        pointer_source: Object with ``subscribe(listener) -> subscription``
        contains: Callable telling whether a pointer target lies inside the
            component; without it every dispatched target counts as outside
    """

    def __init__(
        self,
        *,
        disabled: bool = False,
        pointer_source=None,
        contains: Optional[Callable[[Any], bool]] = None,
    ):
        self.disabled = disabled
        self.is_open = False
        self._pointer_source = pointer_source
        self._contains = contains or (lambda target: False)
        self._subscription = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def is_mounted(self) -> bool:
        return self._subscription is not None

    def mount(self):
        if self._subscription is None and self._pointer_source is not None:
            self._subscription = self._pointer_source.subscribe(self._handle_pointer_down)
        return self

    def unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        self.is_open = False

    def __enter__(self):
        return self.mount()

    def __exit__(self, exc_type, exc, tb):
        self.unmount()
        return False

    def _handle_pointer_down(self, target) -> None:
        if self.is_open and not self._contains(target):
            self.close()

    # -------------------------------------------------------------------------
    # Open state
    # -------------------------------------------------------------------------

    def toggle(self) -> bool:
        """Flip the panel open state from the trigger button; ignored when disabled."""
        if self.disabled:
            return self.is_open
        self.is_open = not self.is_open
        return self.is_open

    def open(self) -> None:
        if not self.disabled:
            self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def set_disabled(self, disabled: bool) -> None:
        self.disabled = disabled
        if disabled:
            self.close()


class PickerController(PanelController):
    """
    A dropdown date or date-time picker instance.

    The caller owns ``value`` and receives proposals through ``on_change``;
    the controller never changes ``value`` itself. Feed the caller's value
    back with ``set_value`` after storing it.

    Args:
        variant: 'date' or 'datetime'
        value: Committed ISO value or ''
        on_change: Called with every complete or cleared value
        placeholder: Trigger text while no value is committed
        disabled: Suppress all interaction
        time_interval: Minutes between time slots (date-time only)
        pointer_source: Outside-click event source
        contains: Containment test for pointer targets
    """

    def __init__(
        self,
        *,
        variant: str = PickerVariant.DATE,
        value: str = '',
        on_change: Optional[Callable[[str], None]] = None,
        placeholder: Optional[str] = None,
        disabled: bool = False,
        time_interval: Optional[int] = None,
        pointer_source=None,
        contains: Optional[Callable[[Any], bool]] = None,
    ):
        super().__init__(disabled=disabled, pointer_source=pointer_source, contains=contains)
        self.variant = PickerVariant(variant)
        self.value = value or ''
        self.on_change = on_change or (lambda new_value: None)

        if placeholder is None:
            placeholder = picker_setting(
                'DATETIME_PLACEHOLDER' if self.variant == PickerVariant.DATETIME else 'DATE_PLACEHOLDER'
            )
        self.placeholder = placeholder

        if time_interval is None:
            time_interval = picker_setting('TIME_INTERVAL')
        self.time_interval = time_interval

        self.selection = seed_selection(self.value, self.variant)
        self._last_emitted: Optional[str] = None

    def mount(self):
        if self.value:
            self.selection = seed_selection(self.value, self.variant)
        return super().mount()

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    @property
    def phase(self) -> SelectionPhase:
        return self.selection.phase(self.variant)

    def dispatch(self, event: PickerEvent) -> Optional[Transition]:
        """
        Apply one panel gesture.

        Returns:
            The Transition, or None when the picker is disabled
        """
        if self.disabled:
            logger.debug("Ignoring %s on a disabled picker", event.type)
            return None

        result = transition(self.selection, event, variant=self.variant)
        self.selection = result.selection

        if event.type == PickerEventType.CLEAR:
            self.close()

        if result.did_emit:
            self._last_emitted = result.emitted
            self.on_change(result.emitted)

        return result

    def select_year(self, year: int) -> Optional[Transition]:
        return self.dispatch(PickerEvent(PickerEventType.SELECT_YEAR, year))

    def select_month(self, month: int) -> Optional[Transition]:
        return self.dispatch(PickerEvent(PickerEventType.SELECT_MONTH, month))

    def select_day(self, day: int) -> Optional[Transition]:
        return self.dispatch(PickerEvent(PickerEventType.SELECT_DAY, day))

    def select_time(self, value: str) -> Optional[Transition]:
        return self.dispatch(PickerEvent(PickerEventType.SELECT_TIME, value))

    def clear(self) -> Optional[Transition]:
        return self.dispatch(PickerEvent(PickerEventType.CLEAR))

    def set_value(self, value: str) -> None:
        """
        Accept a new committed value from the caller.

        Echoes of our own emissions are recorded without touching the
        selection; any other change re-seeds it so the panel reflects what
        is actually stored.
        """
        value = value or ''
        if value == self.value:
            return
        self.value = value
        if value == self._last_emitted:
            return
        self.selection = seed_selection(value, self.variant)

    # -------------------------------------------------------------------------
    # Projection
    # -------------------------------------------------------------------------

    @property
    def display_text(self) -> str:
        return format_value(self.value, self.variant) or self.placeholder

    @property
    def years(self) -> List[int]:
        return year_options(self.variant)

    @property
    def months(self) -> List[Tuple[int, str]]:
        return month_options(self.variant)

    @property
    def days(self) -> List[int]:
        return day_options(self.selection.year, self.selection.month)

    @property
    def time_slots(self) -> List[str]:
        if self.variant != PickerVariant.DATETIME:
            return []
        return time_slots(self.time_interval)
