"""
Event intake wiring.

The engine never attaches to a platform event system itself. The hosting
layer hands a session one EventSource per interaction kind; the session
subscribes on start() and unsubscribes on stop().
"""

from typing import Any, Callable, List, Protocol

Handler = Callable[..., None]
Unsubscribe = Callable[[], None]


class EventSource(Protocol):
    """Anything that can deliver events to a handler until unsubscribed."""

    def subscribe(self, handler: Handler) -> Unsubscribe:
        ...


class EventChannel:
    """
    Minimal in-process publisher.

    emit() forwards its arguments to every current subscriber in
    subscription order.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.listeners: List[Handler] = []

    def subscribe(self, handler: Handler) -> Unsubscribe:
        self.listeners.append(handler)

        def unsubscribe() -> None:
            if handler in self.listeners:
                self.listeners.remove(handler)

        return unsubscribe

    def emit(self, *args: Any, **kwargs: Any) -> None:
        for listener in list(self.listeners):
            listener(*args, **kwargs)

    def __len__(self) -> int:
        return len(self.listeners)
