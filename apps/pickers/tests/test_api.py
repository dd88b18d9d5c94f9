import pytest
from django.urls import reverse
from rest_framework import status

from apps.pickers.constants import END_BEFORE_START_ERROR


# =============================================================================
# Calendar Endpoint Tests
# =============================================================================

class TestCalendarEndpoints:
    """Tests for GET /api/pickers/days/, /time-slots/ and /options/"""

    @pytest.mark.parametrize('year, month, days', [
        (2024, 1, 29),
        (2023, 1, 28),
        (2000, 1, 29),
        (1900, 1, 28),
    ])
    def test_days_in_month(self, api_client, year, month, days):
        url = reverse('pickers:days')
        response = api_client.get(url, {'year': year, 'month': month})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['days'] == days

    def test_days_invalid_month(self, api_client):
        """Month is zero-based, so 12 is out of range."""
        url = reverse('pickers:days')
        response = api_client.get(url, {'year': 2024, 'month': 12})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'month' in response.data

    def test_days_missing_year(self, api_client):
        url = reverse('pickers:days')
        response = api_client.get(url, {'month': 1})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'year' in response.data

    def test_time_slots_default(self, api_client):
        url = reverse('pickers:time-slots')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['interval'] == 30
        assert len(response.data['slots']) == 48
        assert response.data['slots'][-1] == '23:30'

    def test_time_slots_custom_interval(self, api_client):
        url = reverse('pickers:time-slots')
        response = api_client.get(url, {'interval': 45})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['slots'][:3] == ['00:00', '00:45', '01:00']

    def test_time_slots_invalid_interval(self, api_client):
        url = reverse('pickers:time-slots')
        response = api_client.get(url, {'interval': 0})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'interval' in response.data

    def test_date_options(self, api_client):
        """Date panel: long month labels, days for the chosen month, no times."""
        url = reverse('pickers:options')
        response = api_client.get(url, {'variant': 'date', 'year': 2024, 'month': 1})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['years']) == 20
        assert response.data['months'][0] == {'value': 0, 'label': 'January'}
        assert response.data['days'] == list(range(1, 30))
        assert response.data['time_slots'] == []
        assert response.data['placeholder'] == 'Select a date'

    def test_datetime_options(self, api_client):
        url = reverse('pickers:options')
        response = api_client.get(url, {'variant': 'datetime'})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['years']) == 10
        assert response.data['months'][11] == {'value': 11, 'label': 'Dec'}
        assert response.data['days'] == []
        assert len(response.data['time_slots']) == 48
        assert response.data['placeholder'] == 'Select date and time'


# =============================================================================
# Display Endpoint Tests
# =============================================================================

class TestDisplayEndpoint:
    """Tests for GET /api/pickers/format/"""

    def test_format_date(self, api_client):
        url = reverse('pickers:format')
        response = api_client.get(url, {'value': '2024-03-05'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['display'] == 'March 5, 2024'

    def test_format_datetime(self, api_client):
        url = reverse('pickers:format')
        response = api_client.get(url, {'variant': 'datetime', 'value': '2024-03-05T14:30:00.000Z'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['display'] == 'Mar 5, 2024, 02:30 PM'

    def test_format_malformed_is_empty(self, api_client):
        url = reverse('pickers:format')
        response = api_client.get(url, {'value': 'next tuesday'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['display'] == ''

    def test_format_outside_supported_years(self, api_client):
        url = reverse('pickers:format')
        response = api_client.get(url, {'variant': 'datetime', 'value': '9999-12-31T23:00:00-05:00'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['display'] == ''


# =============================================================================
# Selection Endpoint Tests
# =============================================================================

class TestSelectionEndpoints:
    """Tests for POST /api/pickers/seed/ and /transition/"""

    def test_seed(self, api_client):
        url = reverse('pickers:seed')
        response = api_client.post(url, {
            'variant': 'datetime',
            'value': '2024-01-01T00:00:00.000Z',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['selection'] == {'year': 2024, 'month': 0, 'day': 1, 'time': '00:00'}
        assert response.data['phase'] == 'complete'

    def test_seed_empty(self, api_client):
        url = reverse('pickers:seed')
        response = api_client.post(url, {}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['phase'] == 'empty'

    def test_seed_outside_supported_years(self, api_client):
        url = reverse('pickers:seed')
        response = api_client.post(url, {
            'variant': 'datetime',
            'value': '9999-12-31T23:00:00-05:00',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['phase'] == 'empty'

    def test_transition_completes(self, api_client):
        url = reverse('pickers:transition')
        response = api_client.post(url, {
            'variant': 'datetime',
            'selection': {'year': 2024, 'month': 2, 'day': 5},
            'event': {'type': 'select_time', 'value': '14:30'},
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['did_emit'] is True
        assert response.data['emitted'] == '2024-03-05T14:30:00.000Z'
        assert response.data['phase'] == 'complete'

    def test_transition_month_clears_day(self, api_client):
        url = reverse('pickers:transition')
        response = api_client.post(url, {
            'selection': {'year': 2024, 'month': 2, 'day': 5},
            'event': {'type': 'select_month', 'value': 3},
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['selection']['day'] is None
        assert response.data['did_emit'] is False
        assert response.data['emitted'] is None

    def test_transition_out_of_order_is_noop(self, api_client):
        url = reverse('pickers:transition')
        response = api_client.post(url, {
            'event': {'type': 'select_day', 'value': 5},
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['phase'] == 'empty'
        assert response.data['did_emit'] is False

    def test_transition_clear(self, api_client):
        url = reverse('pickers:transition')
        response = api_client.post(url, {
            'selection': {'year': 2024},
            'event': {'type': 'clear'},
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['emitted'] == ''
        assert response.data['did_emit'] is True

    def test_transition_value_out_of_range(self, api_client):
        """Domain errors come back as {'error': ...}."""
        url = reverse('pickers:transition')
        response = api_client.post(url, {
            'selection': {'year': 2024},
            'event': {'type': 'select_month', 'value': 12},
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Month must be between 0 and 11'

    def test_transition_before_year_one_in_utc(self, api_client, kolkata_time_zone):
        url = reverse('pickers:transition')
        response = api_client.post(url, {
            'variant': 'datetime',
            'selection': {'year': 1, 'month': 0, 'day': 1},
            'event': {'type': 'select_time', 'value': '00:00'},
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'error' in response.data

    def test_transition_invalid_selection(self, api_client):
        url = reverse('pickers:transition')
        response = api_client.post(url, {
            'selection': {'year': 2024, 'day': 5},
            'event': {'type': 'select_month', 'value': 1},
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'selection' in response.data

    def test_transition_is_get_not_allowed(self, api_client):
        url = reverse('pickers:transition')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED


# =============================================================================
# Range Endpoint Tests
# =============================================================================

class TestRangeEndpoint:
    """Tests for POST /api/pickers/range/transition/"""

    def test_completing_start(self, api_client):
        url = reverse('pickers:range-transition')
        response = api_client.post(url, {
            'state': {'start': {'year': 2024, 'month': 2}},
            'event': {'type': 'select_day', 'side': 'start', 'value': 5},
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['emitted'] == ['2024-03-05', '']
        assert response.data['state']['start_value'] == '2024-03-05'
        assert response.data['display'] == 'From Mar 5, 2024'
        assert response.data['is_applicable'] is True

    def test_end_before_start(self, api_client):
        url = reverse('pickers:range-transition')
        response = api_client.post(url, {
            'state': {
                'start': {'year': 2024, 'month': 2, 'day': 10},
                'end': {'year': 2024, 'month': 2},
                'start_value': '2024-03-10',
            },
            'event': {'type': 'select_day', 'side': 'end', 'value': 5},
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['did_emit'] is False
        assert response.data['emitted'] is None
        assert response.data['state']['error'] == END_BEFORE_START_ERROR

    def test_clear(self, api_client):
        url = reverse('pickers:range-transition')
        response = api_client.post(url, {
            'state': {'start_value': '2024-03-10'},
            'event': {'type': 'clear'},
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['emitted'] == ['', '']
        assert response.data['close'] is True
        assert response.data['display'] == 'Select date range'

    def test_missing_side(self, api_client):
        url = reverse('pickers:range-transition')
        response = api_client.post(url, {
            'event': {'type': 'select_year', 'value': 2024},
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'event' in response.data


# =============================================================================
# Project Endpoint Tests
# =============================================================================

class TestProjectEndpoints:
    """Tests for health check and API schema."""

    def test_health_check(self, api_client):
        response = api_client.get(reverse('health-check'))

        assert response.status_code == status.HTTP_200_OK
        assert response.json()['status'] == 'ok'

    def test_schema(self, api_client):
        response = api_client.get(reverse('api-schema'))

        assert response.status_code == status.HTTP_200_OK

    def test_unknown_route_is_json_404(self, api_client):
        response = api_client.get('/api/pickers/nowhere/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
