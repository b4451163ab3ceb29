"""
In-memory event bus implementation.

Handlers run in-process; a failing handler is logged and never
propagates into the operation that published the event.
"""

import asyncio
import logging
from typing import Dict, List, Type

from core.domain.events import DomainEvent, EventBus, EventHandler

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """
    In-memory event bus implementation.

    This implementation stores handlers in memory and runs them
    concurrently for each published event.
    """

    def __init__(self):
        """Initialize the event bus."""
        self._handlers: Dict[Type[DomainEvent], List[EventHandler]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
        handlers = self._handlers.setdefault(event_type, [])
        if handler in handlers:
            return
        handlers.append(handler)
        logger.debug("Subscribed %s to %s", handler.__class__.__name__, event_type.__name__)

    def clear(self) -> None:
        """Drop every subscription."""
        self._handlers.clear()

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """
        event_type = type(event)
        handlers = self._handlers.get(event_type, [])

        if not handlers:
            logger.debug("No handlers registered for %s", event_type.__name__)
            return

        logger.debug("Publishing %s to %d handler(s)", event_type.__name__, len(handlers))

        tasks = [self._handle_event(handler, event) for handler in handlers]
        await asyncio.gather(*tasks, return_exceptions=True)

    async def _handle_event(self, handler: EventHandler, event: DomainEvent) -> None:
        """
        Handle an event with a specific handler.

        Args:
            handler: The handler to use
            event: The event to handle
        """
        try:
            await handler.handle(event)
        except Exception as e:
            logger.error(
                "Error handling %s with %s: %s",
                event.event_type,
                handler.__class__.__name__,
                e,
                exc_info=True,
            )
            raise


# Global event bus instance
event_bus = InMemoryEventBus()
