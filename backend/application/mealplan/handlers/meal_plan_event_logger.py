"""Handlers for meal plan domain events.

Side effects only: structured logging of plan lifecycle changes.
"""

import logging

from domain.mealplan.core.events.meal_plan_events import (
    MealPlanCreated,
    MealPlanDeleted,
    MealPlanUpdated,
)
from domain.shared.ports.event_bus import IEventBus

logger = logging.getLogger(__name__)


class MealPlanEventLogger:
    """Logs MealPlanCreated, MealPlanUpdated and MealPlanDeleted events.

    Does NOT modify system state.
    """

    async def on_created(self, event: MealPlanCreated) -> None:
        logger.info(
            "mealplan.event.created",
            extra={
                "event_id": str(event.event_id),
                "occurred_at": event.occurred_at.isoformat(),
                "plan_id": str(event.plan_id),
                "owner_id": str(event.owner_id),
                "meal_count": event.meal_count,
            },
        )

    async def on_updated(self, event: MealPlanUpdated) -> None:
        logger.info(
            "mealplan.event.updated",
            extra={
                "event_id": str(event.event_id),
                "occurred_at": event.occurred_at.isoformat(),
                "plan_id": str(event.plan_id),
                "owner_id": str(event.owner_id),
                "meal_count": event.meal_count,
            },
        )

    async def on_deleted(self, event: MealPlanDeleted) -> None:
        logger.info(
            "mealplan.event.deleted",
            extra={
                "event_id": str(event.event_id),
                "occurred_at": event.occurred_at.isoformat(),
                "plan_id": str(event.plan_id),
                "owner_id": str(event.owner_id),
            },
        )

    def register(self, event_bus: IEventBus) -> None:
        """Subscribe all handlers on the given bus."""
        event_bus.subscribe(MealPlanCreated, self.on_created)
        event_bus.subscribe(MealPlanUpdated, self.on_updated)
        event_bus.subscribe(MealPlanDeleted, self.on_deleted)
