"""In-memory event bus.

Adapter for the IEventBus port. Handlers live in process memory and are
awaited one after another in subscription order.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Type, TypeVar

from domain.shared.events import DomainEvent

logger = logging.getLogger(__name__)

TEvent = TypeVar("TEvent", bound=DomainEvent)

Handler = Callable[[Any], Awaitable[None]]


def _handler_name(handler: Handler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class InMemoryEventBus:
    """
    In-memory implementation of IEventBus.

    Not thread-safe. A failing handler is logged and does not stop the
    handlers after it, nor does it fail the publishing request.

    Example:
        >>> bus = InMemoryEventBus()
        >>> bus.subscribe(MealPlanCreated, on_created)
        >>> await bus.publish(MealPlanCreated.create(plan_id, owner_id, 1))
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[Handler]] = {}

    def subscribe(self, event_type: Type[TEvent], handler: Callable[[TEvent], Awaitable[None]]) -> None:
        """Subscribe a handler; subscribing twice means being called twice."""
        self._handlers.setdefault(event_type, []).append(handler)

        logger.debug(
            "eventbus.subscribed",
            extra={"event_type": event_type.__name__, "handler": _handler_name(handler)},
        )

    async def publish(self, event: TEvent) -> None:
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logger.debug("eventbus.no_handlers", extra={"event_type": event_type.__name__})
            return

        for handler in handlers:
            try:
                await handler(event)
            except Exception as e:
                logger.error(
                    "eventbus.handler_failed",
                    extra={
                        "event_type": event_type.__name__,
                        "event_id": str(event.event_id),
                        "handler": _handler_name(handler),
                        "error": str(e),
                    },
                    exc_info=True,
                )
