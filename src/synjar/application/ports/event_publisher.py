"""Domain event publisher port."""

from typing import Protocol

from synjar.domain.events import DomainEvent


class EventPublisher(Protocol):
    """Port for publishing domain events."""

    async def publish(self, event: DomainEvent) -> None: ...

    async def publish_all(self, events: list[DomainEvent]) -> None: ...
