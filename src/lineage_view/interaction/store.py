"""
Selection store.

Holds the view state other collaborators observe: the selected node and
the fullscreen flag. Each field has its own subscribers, so setting one
never notifies the other's.

Notification is synchronous. A subscriber may set the field again from
inside its callback: the nested value is delivered to everyone, and the
outer delivery of the now stale value stops there.
"""

import logging
from typing import Callable, Dict, Generic, Optional, TypeVar, Union

from ..core.types import Node

logger = logging.getLogger(__name__)

T = TypeVar("T")

Subscriber = Callable[[T], None]


class ObservableValue(Generic[T]):
    """A single value with synchronous change notification."""

    def __init__(self, initial: T):
        self._initial = initial
        self._value = initial
        self._subscribers: Dict[Subscriber, None] = {}
        self._version = 0

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        self._version += 1
        version = self._version
        for subscriber in tuple(self._subscribers):
            if self._version != version:
                break
            subscriber(value)

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a callback for future changes. Returns the unsubscribe callable."""
        self._subscribers[subscriber] = None

        def unsubscribe() -> None:
            self._subscribers.pop(subscriber, None)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def reset(self) -> None:
        self._subscribers.clear()
        self._value = self._initial
        self._version += 1


class SelectionStore:
    """
    State of one mounted lineage view.

    Usage:
        store = SelectionStore()
        unsubscribe = store.subscribe(lambda node: print(node and node.name))
        store.set_node(node)
        store.set_fullscreen(lambda fs: not fs)
    """

    def __init__(self, fullscreen: bool = False):
        self._node: ObservableValue[Optional[Node]] = ObservableValue(None)
        self._fullscreen: ObservableValue[bool] = ObservableValue(fullscreen)

    # Selected node

    def get_node(self) -> Optional[Node]:
        return self._node.get()

    def set_node(self, node: Optional[Node]) -> None:
        logger.debug(f"Selected node: {node.name if node else None}")
        self._node.set(node)

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        return self._node.subscribe(subscriber)

    # Fullscreen flag

    def get_fullscreen(self) -> bool:
        return self._fullscreen.get()

    def set_fullscreen(self, value: Union[bool, Callable[[bool], bool]]) -> None:
        """Set the flag, or pass a function of the current value (e.g. to toggle)."""
        if callable(value):
            value = value(self._fullscreen.get())
        self._fullscreen.set(bool(value))

    def subscribe_fullscreen(self, subscriber: Subscriber) -> Callable[[], None]:
        return self._fullscreen.subscribe(subscriber)

    @property
    def subscriber_count(self) -> int:
        return self._node.subscriber_count + self._fullscreen.subscriber_count

    def close(self) -> None:
        """Drop every subscriber and return to the initial state."""
        self._node.reset()
        self._fullscreen.reset()
