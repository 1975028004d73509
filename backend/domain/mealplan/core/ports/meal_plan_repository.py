"""IMealPlanRepository port - repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.meal_plan import MealPlan
from ..value_objects.meal_plan_id import MealPlanId
from ..value_objects.owner_id import OwnerId


class IMealPlanRepository(ABC):
    """Port for meal plan persistence.

    Defines the interface that infrastructure adapters must implement.
    Implementations must keep at most one plan per owner: an insert for an
    owner that already has a plan raises IntegrityFaultError.

    Failures of the underlying store surface as PersistenceFaultError.
    """

    @abstractmethod
    async def find_one_by_owner(self, owner_id: OwnerId) -> Optional[MealPlan]:
        """Find the plan of an owner.

        Args:
            owner_id: Owner identity

        Returns:
            Optional[MealPlan]: Plan if found, None otherwise

        Raises:
            IntegrityFaultError: If more than one plan exists for the owner
        """
        pass

    @abstractmethod
    async def find_by_id(self, plan_id: MealPlanId) -> Optional[MealPlan]:
        """Find plan by ID.

        Returns:
            Optional[MealPlan]: Plan if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_owner(self, owner_id: OwnerId) -> List[MealPlan]:
        """List every plan stored for an owner (normally zero or one)."""
        pass

    @abstractmethod
    async def insert(self, plan: MealPlan) -> MealPlan:
        """Insert a new plan.

        Args:
            plan: Plan to insert

        Returns:
            MealPlan: Plan as persisted

        Raises:
            IntegrityFaultError: If the owner already has a plan
        """
        pass

    @abstractmethod
    async def replace(self, plan: MealPlan) -> Optional[MealPlan]:
        """Overwrite the mutable fields of an existing plan by its id.

        Only name, description, meals, date_range and updated_at are written;
        id, owner and created_at of the stored record are left as they are.

        Args:
            plan: Plan carrying the new field values

        Returns:
            Optional[MealPlan]: Plan as persisted, None if no record has plan.plan_id
        """
        pass

    @abstractmethod
    async def delete_by_id(self, plan_id: MealPlanId) -> bool:
        """Delete plan by ID.

        Returns:
            bool: True if a plan was deleted, False if none had this id
        """
        pass
