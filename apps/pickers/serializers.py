"""
Serializers for pickers app.

This module contains:
1. Input serializers - Query parameter and request body validation
2. Response serializers - API documentation and output formatting

Input Serializers:
    DaysQuerySerializer - Year and zero-based month for a day count
    TimeSlotsQuerySerializer - Slot interval in minutes
    OptionsQuerySerializer - Variant plus optional year/month for panel options
    FormatQuerySerializer - Variant and committed value to render
    SelectionSerializer - A partial selection (shared by the bodies below)
    SeedRequestSerializer - Committed value to re-seed a selection from
    TransitionRequestSerializer - Selection + event for the pure transition
    RangeTransitionRequestSerializer - Range state + event

Response Serializers:
    DaysResponseSerializer, TimeSlotsResponseSerializer,
    OptionsResponseSerializer, FormatResponseSerializer,
    SelectionResponseSerializer, TransitionResponseSerializer,
    RangeTransitionResponseSerializer, ErrorSerializer
"""

from rest_framework import serializers

from .conf import picker_setting
from .constants import PickerEventType, PickerVariant, RangeEventType, RangeSide
from .services import PartialSelection, RangeSelection, days_in_month
from .services.selection import TIME_RE, MAX_YEAR, MIN_YEAR


# =============================================================================
# Input Serializers
# =============================================================================

class DaysQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for the day count endpoint.

    Query Parameters:
        year (int): Calendar year
        month (int): Zero-based month (0 = January)
    """

    year = serializers.IntegerField(min_value=MIN_YEAR, max_value=MAX_YEAR)
    month = serializers.IntegerField(min_value=0, max_value=11)


class TimeSlotsQuerySerializer(serializers.Serializer):
    """Validate the slot interval (minutes, 1-1440)."""

    interval = serializers.IntegerField(
        min_value=1,
        max_value=1440,
        required=False,
        help_text='Minutes between slots (defaults to PICKERS["TIME_INTERVAL"])'
    )

    def validate(self, attrs):
        attrs.setdefault('interval', picker_setting('TIME_INTERVAL'))
        return attrs


class OptionsQuerySerializer(TimeSlotsQuerySerializer):
    """
    Validate query parameters for the panel options endpoint.

    Query Parameters:
        variant (str): 'date' or 'datetime'
        year (int): Selected year, enables the day list together with month
        month (int): Selected zero-based month
        interval (int): Slot interval for the date-time variant
    """

    variant = serializers.ChoiceField(choices=PickerVariant.choices, default=PickerVariant.DATE)
    year = serializers.IntegerField(min_value=MIN_YEAR, max_value=MAX_YEAR, required=False)
    month = serializers.IntegerField(min_value=0, max_value=11, required=False)


class FormatQuerySerializer(serializers.Serializer):
    """Validate query parameters for the display string endpoint."""

    variant = serializers.ChoiceField(choices=PickerVariant.choices, default=PickerVariant.DATE)
    value = serializers.CharField(required=False, allow_blank=True, default='', trim_whitespace=True)


class SelectionSerializer(serializers.Serializer):
    """
    A partial selection.

    The same invariants the state machine keeps are checked here, so a
    request cannot smuggle in a day without a month or February 30th.
    """

    year = serializers.IntegerField(min_value=MIN_YEAR, max_value=MAX_YEAR, required=False, allow_null=True, default=None)
    month = serializers.IntegerField(min_value=0, max_value=11, required=False, allow_null=True, default=None)
    day = serializers.IntegerField(min_value=1, max_value=31, required=False, allow_null=True, default=None)
    time = serializers.CharField(required=False, allow_null=True, default=None)

    def validate_time(self, value):
        if value is not None and not TIME_RE.match(value):
            raise serializers.ValidationError('Time must be in HH:MM format')
        return value

    def validate(self, attrs):
        year = attrs.get('year')
        month = attrs.get('month')
        day = attrs.get('day')

        if month is not None and year is None:
            raise serializers.ValidationError({'month': 'Month requires a year'})
        if day is not None:
            if year is None or month is None:
                raise serializers.ValidationError({'day': 'Day requires a year and a month'})
            if day > days_in_month(year, month):
                raise serializers.ValidationError({
                    'day': f'Day must be between 1 and {days_in_month(year, month)}'
                })
        if attrs.get('time') is not None and day is None:
            raise serializers.ValidationError({'time': 'Time requires a day'})

        return attrs

    def to_selection(self) -> PartialSelection:
        return selection_from_data(self.validated_data)


def selection_from_data(data) -> PartialSelection:
    data = data or {}
    return PartialSelection(
        year=data.get('year'),
        month=data.get('month'),
        day=data.get('day'),
        time=data.get('time'),
    )


class SeedRequestSerializer(serializers.Serializer):
    """Body of the seed endpoint: which picker and which committed value."""

    variant = serializers.ChoiceField(choices=PickerVariant.choices, default=PickerVariant.DATE)
    value = serializers.CharField(required=False, allow_blank=True, default='')


class EventSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=PickerEventType.choices)
    value = serializers.JSONField(required=False, allow_null=True, default=None)


class TransitionRequestSerializer(serializers.Serializer):
    """
    Body of the transition endpoint.

    Example:
        {
            "variant": "datetime",
            "selection": {"year": 2024, "month": 2, "day": 5, "time": null},
            "event": {"type": "select_time", "value": "14:30"}
        }
    """

    variant = serializers.ChoiceField(choices=PickerVariant.choices, default=PickerVariant.DATE)
    selection = SelectionSerializer(required=False, default=dict)
    event = EventSerializer()


class RangeStateSerializer(serializers.Serializer):
    start = SelectionSerializer(required=False, default=dict)
    end = SelectionSerializer(required=False, default=dict)
    start_value = serializers.CharField(required=False, allow_blank=True, default='')
    end_value = serializers.CharField(required=False, allow_blank=True, default='')
    error = serializers.CharField(required=False, allow_blank=True, default='')

    def validate(self, attrs):
        for name in ('start', 'end'):
            if attrs.get(name, {}).get('time') is not None:
                raise serializers.ValidationError({name: 'Range dates do not take a time'})
        return attrs


def range_state_from_data(data) -> RangeSelection:
    return RangeSelection(
        start=selection_from_data(data.get('start')),
        end=selection_from_data(data.get('end')),
        start_value=data.get('start_value', ''),
        end_value=data.get('end_value', ''),
        error=data.get('error', ''),
    )


class RangeEventSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=RangeEventType.choices)
    side = serializers.ChoiceField(choices=RangeSide.choices, required=False, allow_null=True, default=None)
    value = serializers.JSONField(required=False, allow_null=True, default=None)

    def validate(self, attrs):
        needs_side = attrs['type'] not in (RangeEventType.APPLY, RangeEventType.CLEAR)
        if needs_side and not attrs.get('side'):
            raise serializers.ValidationError({'side': 'Side is required for selection events'})
        return attrs


class RangeTransitionRequestSerializer(serializers.Serializer):
    state = RangeStateSerializer(required=False, default=dict)
    event = RangeEventSerializer()


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class DaysResponseSerializer(serializers.Serializer):
    year = serializers.IntegerField()
    month = serializers.IntegerField()
    days = serializers.IntegerField()


class TimeSlotsResponseSerializer(serializers.Serializer):
    interval = serializers.IntegerField()
    slots = serializers.ListField(child=serializers.CharField())


class MonthOptionSerializer(serializers.Serializer):
    value = serializers.IntegerField()
    label = serializers.CharField()


class OptionsResponseSerializer(serializers.Serializer):
    """Everything a panel needs to draw its columns."""
    variant = serializers.CharField()
    years = serializers.ListField(child=serializers.IntegerField())
    months = MonthOptionSerializer(many=True)
    days = serializers.ListField(child=serializers.IntegerField())
    time_slots = serializers.ListField(child=serializers.CharField())
    placeholder = serializers.CharField()


class FormatResponseSerializer(serializers.Serializer):
    value = serializers.CharField(allow_blank=True)
    display = serializers.CharField(allow_blank=True)


class SelectionResponseSerializer(serializers.Serializer):
    selection = SelectionSerializer()
    phase = serializers.CharField()


class TransitionResponseSerializer(SelectionResponseSerializer):
    emitted = serializers.CharField(allow_null=True, allow_blank=True)
    did_emit = serializers.BooleanField()


class RangeTransitionResponseSerializer(serializers.Serializer):
    state = RangeStateSerializer()
    emitted = serializers.ListField(child=serializers.CharField(allow_blank=True), allow_null=True)
    did_emit = serializers.BooleanField()
    close = serializers.BooleanField()
    is_applicable = serializers.BooleanField()
    display = serializers.CharField()


class ErrorSerializer(serializers.Serializer):
    """Error response."""
    error = serializers.CharField()
