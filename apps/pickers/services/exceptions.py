"""
Domain exceptions for pickers app.

These exceptions are raised by the pickers services layer and are kept
separate from HTTP concerns. Views translate them into 400 responses.

Exception Hierarchy:
    PickerServiceError (base)
    ├── InvalidSelectionError
    ├── InvalidTimeIntervalError
    └── InvalidEventError

Out-of-order interaction (picking a day before a month, a time before a
day) is not an error: those calls are ignored and the selection is returned
unchanged.
"""


class PickerServiceError(Exception):
    """
    Base exception for all picker service errors.

    Catch this in views to turn any picker failure into a 400:

        try:
            result = transition(selection, event, variant=variant)
        except PickerServiceError as e:
            return Response({'error': str(e)}, status=400)
    """

    pass


class InvalidSelectionError(PickerServiceError):
    """
    Raised when a selected value lies outside the options the panel offers.

    Example:
        raise InvalidSelectionError("Month must be between 0 and 11")
    """

    pass


class InvalidTimeIntervalError(PickerServiceError):
    """
    Raised when the time-slot interval is not a positive number of minutes.

    Example:
        raise InvalidTimeIntervalError("Time interval must be positive")
    """

    pass


class InvalidEventError(PickerServiceError):
    """Raised when an event type is unknown to the picker."""

    pass
