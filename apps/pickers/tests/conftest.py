import pytest
from rest_framework.test import APIClient

from apps.pickers.services import (
    InMemoryPointerSource,
    PickerController,
    RangePickerController,
)


PANEL = 'panel'


def inside_panel(target):
    """Containment test used by controller fixtures: only PANEL is inside."""
    return target == PANEL


@pytest.fixture(autouse=True)
def utc_time_zone(settings):
    """Run every test in UTC unless a test switches zones itself."""
    settings.TIME_ZONE = 'UTC'


@pytest.fixture
def kolkata_time_zone(settings):
    """Switch to a zone with a half-hour UTC offset (+05:30)."""
    settings.TIME_ZONE = 'Asia/Kolkata'


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def pointer_source():
    """Return a fresh in-process pointer event source."""
    return InMemoryPointerSource()


@pytest.fixture
def received():
    """Collect values passed to on_change callbacks."""
    return []


@pytest.fixture
def date_picker(pointer_source, received):
    """Mounted, empty date picker that records its emissions."""
    picker = PickerController(
        variant='date',
        on_change=received.append,
        pointer_source=pointer_source,
        contains=inside_panel,
    )
    picker.mount()
    yield picker
    picker.unmount()


@pytest.fixture
def datetime_picker(pointer_source, received):
    """Mounted, empty date-time picker that records its emissions."""
    picker = PickerController(
        variant='datetime',
        on_change=received.append,
        pointer_source=pointer_source,
        contains=inside_panel,
    )
    picker.mount()
    yield picker
    picker.unmount()


@pytest.fixture
def range_picker(pointer_source, received):
    """Mounted, empty range picker that records (start, end) emissions."""
    picker = RangePickerController(
        on_change=lambda start, end: received.append((start, end)),
        pointer_source=pointer_source,
        contains=inside_panel,
    )
    picker.mount()
    yield picker
    picker.unmount()
