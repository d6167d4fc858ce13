"""
Event Bus

Typed publish/subscribe registry shared by the parse engine and the
launch orchestrator. Handlers are keyed by event class and called
synchronously, in subscription order, from ``publish``.
"""

from collections import defaultdict
from typing import Any, Callable

from buildwatch.core.logger.logger import get_logger

logger = get_logger(__name__)

Handler = Callable[[Any], None]


class EventBus:
    """
    Registry of handlers per event type.

    A handler that raises is logged and skipped; the remaining handlers
    still receive the event and the publisher carries on.
    """

    def __init__(self):
        self._handlers: dict[type, list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: type, handler: Handler) -> None:
        """Register a handler for an event type."""
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: type, handler: Handler) -> None:
        """Remove a previously registered handler, if present."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def has_subscribers(self, event_type: type) -> bool:
        """Check whether anything listens to an event type."""
        return bool(self._handlers.get(event_type))

    def publish(self, event: Any) -> None:
        """
        Deliver an event to every handler registered for its exact type.

        Args:
            event: Event instance.
        """
        for handler in list(self._handlers.get(type(event), ())):
            try:
                handler(event)
            except Exception:
                logger.exception(
                    f"Handler {getattr(handler, '__qualname__', handler)!r} "
                    f"failed on {type(event).__name__}"
                )
