"""
Pickers App - Dropdown Date, Date-Time and Date-Range Selection

This app holds the selection logic behind the admin panel's dropdown pickers
(receipt dates, stock report ranges, repair drop-off times). The browser panel
is a projection of the state computed here: it forwards the user's clicks as
events and renders whatever selection comes back.

Key Features:
- Year / month / day / time-slot option lists
- Partial-selection state machine with normalized ISO emission
- Human-readable display strings for committed values
- Panel open/close controller with outside-click dismissal
- Date range selection with start/end ordering validation

Architecture:
- Services: calendar arithmetic, selection, formatting, controller, range
- Serializers: input validation and response shapes for the picker API
- Views: thin, stateless JSON handlers
- Exceptions: domain exception hierarchy (services/exceptions.py)
"""

__version__ = '1.0.0'
