"""
Domain events base classes and infrastructure.

Domain events represent something that happened in the domain.
They are used for decoupling modules (audit logging, metrics)
from the handlers that change state.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict
from uuid import UUID, uuid4


@dataclass
class DomainEvent(ABC):
    """
    Base class for all domain events.

    Domain events represent something that happened in the domain
    and are never modified after publishing. Subclasses add their
    own attributes in __init__.
    """

    event_id: UUID
    occurred_at: datetime
    aggregate_id: str
    event_type: str

    def __init_subclass__(cls, **kwargs):
        """Automatically set event_type for subclasses."""
        super().__init_subclass__(**kwargs)
        cls.event_type = cls.__name__

    def __post_init__(self):
        """Set default values if not provided."""
        if self.event_id is None:
            self.event_id = uuid4()
        if self.occurred_at is None:
            self.occurred_at = datetime.now(timezone.utc)

    def payload(self) -> Dict[str, Any]:
        """Event-specific attributes; subclasses extend this."""
        return {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_id": str(self.event_id),
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "event_type": self.event_type,
            "data": self.payload(),
        }


class EventHandler(ABC):
    """
    Base class for event handlers.

    Event handlers process domain events asynchronously.
    """

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """
        Handle a domain event.

        Args:
            event: The domain event to handle
        """


class EventBus(ABC):
    """
    Abstract event bus for publishing and subscribing to domain events.
    """

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event.

        Args:
            event: The domain event to publish
        """

    @abstractmethod
    def subscribe(self, event_type: type, handler: EventHandler) -> None:
        """
        Subscribe to a domain event type.

        Args:
            event_type: The type of event to subscribe to
            handler: The handler to call when event is published
        """
