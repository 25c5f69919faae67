"""In-process domain event publisher."""

import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable

from synjar.domain.events import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], Awaitable[None]]


class InProcessEventPublisher:
    """Dispatches events to handlers subscribed by event name, in order.

    A failing handler is logged and does not stop the remaining handlers.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        self._handlers[event_name].append(handler)

    async def publish(self, event: DomainEvent) -> None:
        handlers = self._handlers.get(event.event_name, [])
        logger.debug("Publishing %s (%s) to %d handlers", event.event_name, event.event_id, len(handlers))
        for handler in handlers:
            try:
                await handler(event)
            except Exception:
                logger.exception("Handler for %s failed", event.event_name)

    async def publish_all(self, events: list[DomainEvent]) -> None:
        for event in events:
            await self.publish(event)
