import pytest
from datetime import date, datetime
from unittest.mock import patch
from django.utils import timezone

from apps.pickers.constants import PickerVariant
from apps.pickers.services import format_range, format_value, parse_value


# =============================================================================
# parse_value Tests
# =============================================================================

class TestParseValue:
    """Tests for reading committed values."""

    def test_date_string(self):
        assert parse_value('2024-03-05') == date(2024, 3, 5)

    def test_utc_datetime_string(self):
        parsed = parse_value('2024-03-05T14:30:00.000Z')

        assert isinstance(parsed, datetime)
        assert timezone.is_aware(parsed)
        assert (parsed.year, parsed.month, parsed.day, parsed.hour, parsed.minute) == (2024, 3, 5, 14, 30)

    def test_converts_to_local_time(self, kolkata_time_zone):
        parsed = parse_value('2024-03-05T09:00:00.000Z')

        assert (parsed.hour, parsed.minute) == (14, 30)

    def test_naive_datetime_is_local(self, kolkata_time_zone):
        """A date-time without offset is read as local time."""
        parsed = parse_value('2024-03-05T14:30:00')

        assert timezone.is_aware(parsed)
        assert (parsed.hour, parsed.minute) == (14, 30)

    def test_surrounding_whitespace(self):
        assert parse_value('  2024-03-05 ') == date(2024, 3, 5)

    @pytest.mark.parametrize('value', ['', None])
    def test_empty(self, value):
        assert parse_value(value) is None

    @pytest.mark.parametrize('value', ['garbage', '2024-02-30', '05/03/2024'])
    def test_malformed(self, value):
        """Malformed strings read as empty and log a warning."""
        with patch('apps.pickers.services.formatting.logger') as mock_logger:
            assert parse_value(value) is None

        mock_logger.warning.assert_called_once()

    @pytest.mark.parametrize('value', [
        '9999-12-31T23:00:00-05:00',
        '0001-01-01T01:00:00+05:00',
    ])
    def test_outside_supported_years(self, value):
        """An offset that moves the instant past year 9999 or before year 1 reads as empty."""
        with patch('apps.pickers.services.formatting.logger') as mock_logger:
            assert parse_value(value) is None

        mock_logger.warning.assert_called_once()


# =============================================================================
# format_value Tests
# =============================================================================

class TestFormatValue:
    """Tests for the trigger button label."""

    def test_date(self):
        assert format_value('2024-03-05', PickerVariant.DATE) == 'March 5, 2024'

    def test_date_is_default_variant(self):
        assert format_value('2024-12-25') == 'December 25, 2024'

    def test_datetime(self):
        assert format_value('2024-03-05T14:30:00.000Z', PickerVariant.DATETIME) == 'Mar 5, 2024, 02:30 PM'

    def test_datetime_midnight(self):
        assert format_value('2024-01-01T00:00:00.000Z', PickerVariant.DATETIME) == 'Jan 1, 2024, 12:00 AM'

    def test_datetime_in_local_zone(self, kolkata_time_zone):
        """The stored UTC instant renders in local time."""
        assert format_value('2024-03-05T09:00:00.000Z', PickerVariant.DATETIME) == 'Mar 5, 2024, 02:30 PM'

    def test_date_from_datetime_value(self):
        assert format_value('2024-03-05T14:30:00.000Z', PickerVariant.DATE) == 'March 5, 2024'

    @pytest.mark.parametrize('variant', [PickerVariant.DATE, PickerVariant.DATETIME])
    def test_empty(self, variant):
        assert format_value('', variant) == ''

    def test_malformed(self):
        assert format_value('tomorrow', PickerVariant.DATE) == ''

    def test_outside_supported_years(self):
        assert format_value('9999-12-31T23:00:00-05:00', PickerVariant.DATETIME) == ''
        assert format_value('0001-01-01T01:00:00+05:00', PickerVariant.DATE) == ''


# =============================================================================
# format_range Tests
# =============================================================================

class TestFormatRange:
    """Tests for the range picker label."""

    def test_placeholder_when_empty(self):
        assert format_range('', '', 'Select date range') == 'Select date range'

    def test_start_only(self):
        assert format_range('2024-03-05', '', 'Select date range') == 'From Mar 5, 2024'

    def test_end_only(self):
        assert format_range('', '2024-03-09', 'Select date range') == 'To Mar 9, 2024'

    def test_both(self):
        assert format_range('2024-03-05', '2024-03-09') == 'Mar 5, 2024 - Mar 9, 2024'

    def test_malformed_side_counts_as_empty(self):
        assert format_range('2024-03-05', 'nope', '') == 'From Mar 5, 2024'
