"""
Pickers services - Business logic layer.

This package contains the selection logic behind the dropdown pickers:
- Calendar arithmetic and panel option lists
- Date / date-time selection state machine
- Display formatting of committed values
- Panel lifecycle controllers with outside-click dismissal
- Date range selection
"""

from .calendar_arithmetic import (
    days_in_month,
    time_slots,
    year_options,
    month_options,
    day_options,
)

from .selection import (
    PartialSelection,
    PickerEvent,
    Transition,
    transition,
    normalize_value,
    seed_selection,
)

from .formatting import (
    parse_value,
    format_value,
    format_range,
)

from .pointer_events import (
    InMemoryPointerSource,
    Subscription,
)

from .controller import (
    PanelController,
    PickerController,
)

from .range_selection import (
    RangeSelection,
    RangeEvent,
    RangeTransition,
    range_transition,
    seed_range,
    RangePickerController,
)

from .exceptions import (
    PickerServiceError,
    InvalidSelectionError,
    InvalidTimeIntervalError,
    InvalidEventError,
)

__all__ = [
    # Calendar Arithmetic
    'days_in_month',
    'time_slots',
    'year_options',
    'month_options',
    'day_options',
    # Selection State Machine
    'PartialSelection',
    'PickerEvent',
    'Transition',
    'transition',
    'normalize_value',
    'seed_selection',
    # Formatting
    'parse_value',
    'format_value',
    'format_range',
    # Controllers
    'InMemoryPointerSource',
    'Subscription',
    'PanelController',
    'PickerController',
    # Range Selection
    'RangeSelection',
    'RangeEvent',
    'RangeTransition',
    'range_transition',
    'seed_range',
    'RangePickerController',
    # Exceptions
    'PickerServiceError',
    'InvalidSelectionError',
    'InvalidTimeIntervalError',
    'InvalidEventError',
]
