"""OwnerId value object."""

from dataclasses import dataclass

MAX_OWNER_ID_LENGTH = 255


@dataclass(frozen=True)
class OwnerId:
    """Identity of the user who owns a meal plan.

    Upstream identities come in several shapes (internal user UUID,
    Auth0 subject such as ``auth0|123``, OIDC session subject). The identity
    resolver normalizes whichever one is in use into this single opaque
    string, so the meal plan domain never needs to know which scheme is active.

    Examples:
        >>> OwnerId("auth0|123456").value
        'auth0|123456'

        >>> OwnerId("")
        Traceback (most recent call last):
        ...
        ValueError: Owner id cannot be empty

    Raises:
        ValueError: If the value is empty, blank or longer than 255 characters
    """

    value: str

    def __post_init__(self) -> None:
        """Validate owner identity."""
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Owner id cannot be empty")

        if len(self.value) > MAX_OWNER_ID_LENGTH:
            raise ValueError(
                f"Owner id too long ({len(self.value)} chars). "
                f"Maximum {MAX_OWNER_ID_LENGTH} characters allowed"
            )

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"OwnerId('{self.value}')"
