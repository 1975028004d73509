"""IIdentityResolver port - resolves the caller's owner identity."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..value_objects.owner_id import OwnerId


@dataclass(frozen=True)
class RequestIdentityContext:
    """Authentication state of one request, as seen by identity resolvers.

    Attributes:
        auth_claims: Verified JWT claims (None if the request carried no token)
        session: Session data (empty if sessions are not enabled)
    """

    auth_claims: Optional[Dict[str, Any]] = None
    session: Dict[str, Any] = field(default_factory=dict)


class IIdentityResolver(ABC):
    """Port for resolving the caller's stable owner identity.

    Each implementation handles one upstream identity scheme and normalizes
    it into an OwnerId.
    """

    @abstractmethod
    async def resolve_owner_id(self, context: RequestIdentityContext) -> OwnerId:
        """Resolve the owner identity of the caller.

        Args:
            context: Authentication state of the request

        Returns:
            OwnerId: Normalized owner identity

        Raises:
            UnauthenticatedError: If no identity can be resolved
        """
        pass
