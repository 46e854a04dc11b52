"""JWT authentication provider implementation.

Tokens prove control of a 32-byte key. Payload structure:
    {
        "sub": "<64 hex chars>",
        "exp": 1234567890
    }
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt

from core.config import settings
from domain.address import Address
from infrastructure.auth.provider import AuthenticatedKey

logger = logging.getLogger(__name__)


class JWTAuthProvider:
    """JWT-based authentication provider (HS256 shared secret)."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[AuthenticatedKey]:
        """
        Validate a JWT and extract the proven key.

        Args:
            token: The JWT to validate

        Returns:
            AuthenticatedKey if valid, None if invalid, expired or if the
            subject is not a 32-byte hex key
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_aud": False},
            )
        except JWTError:
            return None

        subject = payload.get("sub")
        if not subject:
            return None

        try:
            key = Address.from_hex(subject)
        except ValueError:
            logger.debug("Rejected token with malformed subject")
            return None

        return AuthenticatedKey(key=key)

    def create_token(self, key: Address) -> str:
        """
        Create a JWT proving control of ``key``.

        Args:
            key: The key the token speaks for

        Returns:
            The generated JWT string
        """
        expire = datetime.utcnow() + timedelta(minutes=self._expire_minutes)

        payload: dict = {
            "sub": key.hex(),
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
