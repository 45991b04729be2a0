"""Property change notification."""

from __future__ import annotations

from typing import Callable, List

PropertyChangedCallback = Callable[[str], None]


class PropertyChangedEvent:
    """Ordered list of subscribers notified when a property value changes.

    Delivery is synchronous: ``fire`` calls every subscriber, in subscription
    order, before it returns. A subscriber that raises stops delivery and the
    exception reaches whoever triggered the change.

    The same callback may be subscribed more than once and is then called
    once per subscription.
    """

    def __init__(self) -> None:
        self._callbacks: List[PropertyChangedCallback] = []

    def subscribe(self, callback: PropertyChangedCallback) -> Callable[[], None]:
        """Subscribe to property changes.

        Args:
            callback: Called with the name of the changed property.

        Returns:
            Unsubscribe function for this subscription.

        Example:
            >>> unsub = vm.property_changed.subscribe(lambda name: print(name))
            >>> # Later...
            >>> unsub()
        """
        if not callable(callback):
            raise TypeError(f"callback must be callable, got {type(callback).__name__}")
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            self.unsubscribe(callback)

        return unsubscribe

    def unsubscribe(self, callback: PropertyChangedCallback) -> None:
        """Remove one subscription of ``callback``. Unknown callbacks are ignored."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def fire(self, property_name: str) -> None:
        """Notify current subscribers that ``property_name`` changed."""
        # subscribers may (un)subscribe while being notified
        for callback in list(self._callbacks):
            callback(property_name)

    def clear(self) -> None:
        """Remove all subscribers."""
        self._callbacks.clear()

    def __len__(self) -> int:
        return len(self._callbacks)
