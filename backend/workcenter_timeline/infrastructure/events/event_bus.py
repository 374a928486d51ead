"""
Event bus implementation for domain event publishing and subscription.

The event bus provides a central mechanism for publishing domain events
and routing them to registered event handlers. Delivery is synchronous and
in publish order; the board never runs more than one logical thread.
"""

from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Callable

from workcenter_timeline.core.observability import get_logger
from workcenter_timeline.domain.scheduling.events import DomainEvent

logger = get_logger(__name__)

EventHandler = Callable[[DomainEvent], None]


class EventBusInterface(ABC):
    """
    Abstract interface for event bus implementations.

    Defines the contract for publishing events and subscribing to event types.
    """

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event to all registered handlers.

        Args:
            event: Domain event to publish
        """
        pass

    @abstractmethod
    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe a handler to a specific event type.

        Args:
            event_type: Type of event to subscribe to
            handler: Handler function to call when event is published
        """
        pass

    @abstractmethod
    def unsubscribe(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> None:
        """
        Unsubscribe a handler from a specific event type.

        Args:
            event_type: Type of event to unsubscribe from
            handler: Handler function to remove
        """
        pass

    @abstractmethod
    def clear_handlers(self, event_type: type[DomainEvent] | None = None) -> None:
        """
        Clear event handlers.

        Args:
            event_type: Optional event type to clear handlers for. If None, clears all.
        """
        pass


class InMemoryEventBus(EventBusInterface):
    """
    In-memory implementation of event bus.

    Supports multiple handlers per event type. A handler subscribed to
    ``DomainEvent`` receives every event. A failing handler is logged and
    does not prevent delivery to the remaining handlers.
    """

    def __init__(self, max_history_size: int = 1000):
        self._handlers: dict[type[DomainEvent], list[EventHandler]] = defaultdict(list)
        self._event_history: list[DomainEvent] = []
        self._max_history_size = max_history_size

    def publish(self, event: DomainEvent) -> None:
        self._add_to_history(event)

        for event_type in type(event).__mro__:
            for handler in list(self._handlers.get(event_type, [])):
                try:
                    handler(event)
                except Exception as e:
                    logger.error(
                        "Event handler failed",
                        event_type=type(event).__name__,
                        event_id=str(event.event_id),
                        handler=getattr(handler, "__name__", repr(handler)),
                        error=str(e),
                    )
            if event_type is DomainEvent:
                break

    def subscribe(self, event_type: type[DomainEvent], handler: EventHandler) -> None:
        if handler not in self._handlers[event_type]:
            self._handlers[event_type].append(handler)
            logger.debug(
                "Subscribed handler", event_type=event_type.__name__
            )

    def unsubscribe(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> None:
        if handler in self._handlers.get(event_type, []):
            self._handlers[event_type].remove(handler)

    def clear_handlers(self, event_type: type[DomainEvent] | None = None) -> None:
        if event_type is None:
            self._handlers.clear()
        else:
            self._handlers.pop(event_type, None)

    def get_event_history(
        self, event_type: type[DomainEvent] | None = None
    ) -> list[DomainEvent]:
        """
        Get published events, oldest first.

        Args:
            event_type: Optional event type filter
        """
        if event_type is None:
            return list(self._event_history)
        return [e for e in self._event_history if isinstance(e, event_type)]

    def _add_to_history(self, event: DomainEvent) -> None:
        self._event_history.append(event)
        if len(self._event_history) > self._max_history_size:
            del self._event_history[: -self._max_history_size]
