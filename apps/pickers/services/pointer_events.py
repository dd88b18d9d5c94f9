"""
Pointer event sources for outside-click dismissal.

A picker panel closes when the user presses anywhere outside of it. Instead of
a process-wide document listener, every controller is handed an event source
and holds its own subscription for as long as it is mounted.
"""

from functools import partial
from typing import Any, Callable, List


PointerListener = Callable[[Any], None]


class Subscription:
    """
    Handle returned by ``subscribe``; ``unsubscribe`` is idempotent.

    Args:
        release: Called once, on the first ``unsubscribe``, to detach the
            listener from its source
    """

    def __init__(self, release: Callable[[], None]):
        self._release = release
        self.active = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self._release()


class InMemoryPointerSource:
    """
    In-process pointer event source.

    ``dispatch(target)`` delivers a pointer-down on ``target`` to every
    current listener. Targets are opaque: controllers decide containment
    through the ``contains`` callable they were built with.

    Example:
        source = InMemoryPointerSource()
        with PickerController(pointer_source=source, contains=panel.contains):
            source.dispatch('page-background')   # closes the panel
    """

    def __init__(self):
        self._listeners: List[PointerListener] = []

    def subscribe(self, listener: PointerListener) -> Subscription:
        self._listeners.append(listener)
        return Subscription(partial(self._listeners.remove, listener))

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def dispatch(self, target: Any) -> None:
        # Copy so listeners may unsubscribe while being notified.
        for listener in list(self._listeners):
            listener(target)
