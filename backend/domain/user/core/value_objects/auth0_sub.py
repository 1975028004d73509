"""Auth0Sub value object."""

from dataclasses import dataclass

MAX_AUTH0_SUB_LENGTH = 255


@dataclass(frozen=True)
class Auth0Sub:
    """Auth0 subject identifier (``sub`` claim of a verified JWT).

    Accepted formats:
    - ``<provider>|<id>`` for end users (``auth0|123``, ``google-oauth2|456``)
    - ``<client_id>@clients`` for client-credentials (M2M) tokens

    Examples:
        >>> str(Auth0Sub("google-oauth2|987654321"))
        'google-oauth2|987654321'
        >>> Auth0Sub("abc123@clients").value
        'abc123@clients'

    Raises:
        ValueError: If the value is empty, malformed or too long
    """

    value: str

    def __post_init__(self) -> None:
        """Validate Auth0 sub format."""
        if not self.value:
            raise ValueError("Auth0 sub cannot be empty")

        if "|" not in self.value and not self.value.endswith("@clients"):
            raise ValueError(
                f"Invalid Auth0 sub format: {self.value}. "
                "Expected format: <provider>|<id> or <client_id>@clients"
            )

        if self.value.startswith("|") or self.value.endswith("|"):
            raise ValueError(f"Invalid Auth0 sub format: {self.value}. Provider and id are required")

        if len(self.value) > MAX_AUTH0_SUB_LENGTH:
            raise ValueError(
                f"Auth0 sub too long ({len(self.value)} chars). "
                f"Maximum {MAX_AUTH0_SUB_LENGTH} characters allowed"
            )

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Auth0Sub('{self.value}')"
