"""Picker defaults, overridable through the PICKERS dict in settings."""

from django.conf import settings

from .constants import DEFAULT_TIME_INTERVAL


DEFAULTS = {
    'TIME_INTERVAL': DEFAULT_TIME_INTERVAL,
    'DATE_YEARS_BACK': 10,
    'DATE_YEAR_SPAN': 20,
    'DATETIME_YEARS_BACK': 2,
    'DATETIME_YEAR_SPAN': 10,
    'DATE_PLACEHOLDER': 'Select a date',
    'DATETIME_PLACEHOLDER': 'Select date and time',
    'RANGE_PLACEHOLDER': 'Select date range',
}


def picker_setting(name):
    """Return a picker setting, falling back to the built-in default."""
    overrides = getattr(settings, 'PICKERS', {})
    return overrides.get(name, DEFAULTS[name])
