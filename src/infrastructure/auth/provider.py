"""Authentication provider protocol."""

from dataclasses import dataclass
from typing import Optional, Protocol

from domain.address import Address


@dataclass
class AuthenticatedKey:
    """A key whose control the caller has proven."""

    key: Address


class IAuthProvider(Protocol):
    """Protocol for authentication providers."""

    async def validate_token(self, token: str) -> Optional[AuthenticatedKey]:
        """
        Validate an authentication token.

        Args:
            token: The bearer token to validate

        Returns:
            AuthenticatedKey if valid, None if invalid
        """
        ...

    def create_token(self, key: Address) -> str:
        """
        Create an authentication token proving control of a key.

        Args:
            key: The key the token speaks for

        Returns:
            The generated token string
        """
        ...
