from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework import status
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from .conf import picker_setting
from .constants import PickerVariant
from .services import (
    PickerEvent,
    RangeEvent,
    days_in_month,
    day_options,
    format_range,
    format_value,
    month_options,
    range_transition,
    seed_selection,
    time_slots,
    transition,
    year_options,
)
from .services.exceptions import PickerServiceError
from .serializers import (
    # Input serializers
    DaysQuerySerializer,
    TimeSlotsQuerySerializer,
    OptionsQuerySerializer,
    FormatQuerySerializer,
    SeedRequestSerializer,
    TransitionRequestSerializer,
    RangeTransitionRequestSerializer,
    selection_from_data,
    range_state_from_data,
    # Response serializers
    DaysResponseSerializer,
    TimeSlotsResponseSerializer,
    OptionsResponseSerializer,
    FormatResponseSerializer,
    SelectionResponseSerializer,
    TransitionResponseSerializer,
    RangeTransitionResponseSerializer,
    ErrorSerializer,
)


def _selection_payload(selection, variant):
    return {
        'selection': selection.as_dict(),
        'phase': selection.phase(variant),
    }


def _error_response(error):
    return Response({'error': str(error)}, status=status.HTTP_400_BAD_REQUEST)


@extend_schema(
    parameters=[
        OpenApiParameter('year', OpenApiTypes.INT, description='Calendar year'),
        OpenApiParameter('month', OpenApiTypes.INT, description='Zero-based month (0 = January)'),
    ],
    responses={200: DaysResponseSerializer},
    description="Number of days in a month, leap years included.",
    tags=['pickers'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def month_days(request):
    """Day count for a month - thin HTTP handler."""
    query_serializer = DaysQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    return Response({
        'year': params['year'],
        'month': params['month'],
        'days': days_in_month(params['year'], params['month']),
    })


@extend_schema(
    parameters=[
        OpenApiParameter('interval', OpenApiTypes.INT, description='Minutes between slots', default=30),
    ],
    responses={200: TimeSlotsResponseSerializer},
    description="Time-of-day slots offered by the date-time picker.",
    tags=['pickers'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def day_time_slots(request):
    """Time slots for one day - thin HTTP handler."""
    query_serializer = TimeSlotsQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    interval = query_serializer.validated_data['interval']

    try:
        slots = time_slots(interval)
    except PickerServiceError as e:
        return _error_response(e)

    return Response({'interval': interval, 'slots': slots})


@extend_schema(
    parameters=[
        OpenApiParameter('variant', OpenApiTypes.STR, description="'date' or 'datetime'", default='date'),
        OpenApiParameter('year', OpenApiTypes.INT, description='Selected year'),
        OpenApiParameter('month', OpenApiTypes.INT, description='Selected zero-based month'),
        OpenApiParameter('interval', OpenApiTypes.INT, description='Minutes between time slots'),
    ],
    responses={200: OptionsResponseSerializer, 400: ErrorSerializer},
    description="Years, months, days and time slots to draw the picker panel.",
    tags=['pickers'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def panel_options(request):
    """Panel column options - thin HTTP handler."""
    query_serializer = OptionsQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data
    variant = params['variant']

    try:
        slots = time_slots(params['interval']) if variant == PickerVariant.DATETIME else []
    except PickerServiceError as e:
        return _error_response(e)

    placeholder_key = 'DATETIME_PLACEHOLDER' if variant == PickerVariant.DATETIME else 'DATE_PLACEHOLDER'

    return Response({
        'variant': variant,
        'years': year_options(variant),
        'months': [
            {'value': value, 'label': label}
            for value, label in month_options(variant)
        ],
        'days': day_options(params.get('year'), params.get('month')),
        'time_slots': slots,
        'placeholder': picker_setting(placeholder_key),
    })


@extend_schema(
    parameters=[
        OpenApiParameter('variant', OpenApiTypes.STR, description="'date' or 'datetime'", default='date'),
        OpenApiParameter('value', OpenApiTypes.STR, description='Committed ISO-8601 value'),
    ],
    responses={200: FormatResponseSerializer},
    description="Human-readable display string for a committed value. Malformed values render as empty.",
    tags=['pickers'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def display_value(request):
    """Display string for a committed value - thin HTTP handler."""
    query_serializer = FormatQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    return Response({
        'value': params['value'],
        'display': format_value(params['value'], params['variant']),
    })


@extend_schema(
    request=SeedRequestSerializer,
    responses={200: SelectionResponseSerializer},
    description="Rebuild the partial selection a picker shows for a committed value.",
    tags=['pickers'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def seed(request):
    """Seed a selection from a committed value - thin HTTP handler."""
    serializer = SeedRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    params = serializer.validated_data

    selection = seed_selection(params['value'], params['variant'])
    return Response(_selection_payload(selection, params['variant']))


@extend_schema(
    request=TransitionRequestSerializer,
    responses={200: TransitionResponseSerializer, 400: ErrorSerializer},
    description=(
        "Apply one picker event to a selection. Returns the new selection and, "
        "when the selection is complete or cleared, the value to store."
    ),
    tags=['pickers'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def apply_transition(request):
    """Pure selection transition - thin HTTP handler."""
    serializer = TransitionRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    params = serializer.validated_data
    variant = params['variant']

    event = PickerEvent(params['event']['type'], params['event'].get('value'))
    try:
        result = transition(selection_from_data(params['selection']), event, variant=variant)
    except PickerServiceError as e:
        return _error_response(e)

    payload = _selection_payload(result.selection, variant)
    payload['emitted'] = result.emitted
    payload['did_emit'] = result.did_emit
    return Response(payload)


@extend_schema(
    request=RangeTransitionRequestSerializer,
    responses={200: RangeTransitionResponseSerializer, 400: ErrorSerializer},
    description="Apply one range picker event (select, apply or clear).",
    tags=['pickers'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def apply_range_transition(request):
    """Pure range transition - thin HTTP handler."""
    serializer = RangeTransitionRequestSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    params = serializer.validated_data
    event_data = params['event']

    event = RangeEvent(event_data['type'], event_data.get('side'), event_data.get('value'))
    try:
        result = range_transition(range_state_from_data(params['state']), event)
    except PickerServiceError as e:
        return _error_response(e)

    state = result.state
    return Response({
        'state': {
            'start': state.start.as_dict(),
            'end': state.end.as_dict(),
            'start_value': state.start_value,
            'end_value': state.end_value,
            'error': state.error,
        },
        'emitted': list(result.emitted) if result.did_emit else None,
        'did_emit': result.did_emit,
        'close': result.close,
        'is_applicable': state.is_applicable,
        'display': format_range(state.start_value, state.end_value, picker_setting('RANGE_PLACEHOLDER')),
    })
