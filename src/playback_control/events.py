"""Per-session lifecycle event channel."""

from __future__ import annotations

import enum
import logging
from typing import Callable, List


logger = logging.getLogger(__name__)


class TrimmerEvent(enum.Enum):
    INITIALIZED = "initialized"


Listener = Callable[[TrimmerEvent], None]


class ChannelClosedError(RuntimeError):
    pass


class Subscription:
    """Handle returned by :meth:`EventChannel.subscribe`."""

    def __init__(self, channel: "EventChannel", listener: Listener) -> None:
        self._channel = channel
        self.listener = listener

    def cancel(self) -> None:
        self._channel.unsubscribe(self.listener)


class EventChannel:
    """Multicast channel: listeners only see events published after they subscribe."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: Listener) -> Subscription:
        if self._closed:
            raise ChannelClosedError("Cannot subscribe to a closed event channel")
        self._listeners.append(listener)
        return Subscription(self, listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def publish(self, event: TrimmerEvent) -> None:
        if self._closed:
            raise ChannelClosedError(f"Cannot publish {event.name} on a closed event channel")
        logger.debug("Publishing %s to %d listener(s)", event.name, len(self._listeners))
        # Copy so listeners may unsubscribe while being notified.
        for listener in list(self._listeners):
            listener(event)

    def close(self) -> None:
        self._closed = True
        self._listeners.clear()
