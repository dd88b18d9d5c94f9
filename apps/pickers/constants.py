from django.db import models


class PickerVariant(models.TextChoices):
    DATE = 'date', 'Date'
    DATETIME = 'datetime', 'Date and time'


class SelectionPhase(models.TextChoices):
    EMPTY = 'empty', 'Empty'
    PARTIAL = 'partial', 'Partially selected'
    COMPLETE = 'complete', 'Complete'


class PickerEventType(models.TextChoices):
    SELECT_YEAR = 'select_year', 'Select year'
    SELECT_MONTH = 'select_month', 'Select month'
    SELECT_DAY = 'select_day', 'Select day'
    SELECT_TIME = 'select_time', 'Select time'
    CLEAR = 'clear', 'Clear'


class RangeSide(models.TextChoices):
    START = 'start', 'Start date'
    END = 'end', 'End date'


class RangeEventType(models.TextChoices):
    SELECT_YEAR = 'select_year', 'Select year'
    SELECT_MONTH = 'select_month', 'Select month'
    SELECT_DAY = 'select_day', 'Select day'
    APPLY = 'apply', 'Apply'
    CLEAR = 'clear', 'Clear'


MONTH_LABELS = [
    'January', 'February', 'March', 'April', 'May', 'June',
    'July', 'August', 'September', 'October', 'November', 'December',
]

MONTH_LABELS_SHORT = [label[:3] for label in MONTH_LABELS]

DEFAULT_TIME_INTERVAL = 30

START_AFTER_END_ERROR = 'Start date cannot be after end date'
END_BEFORE_START_ERROR = 'End date cannot be before start date'
