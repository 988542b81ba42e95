"""Owner identity: verification of bearer credentials.

Accounts and sessions live with an external identity provider. This module
only turns a bearer credential into the owner's user id.
"""

from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from forgekit_core.errors import AuthenticationError


class IdentityProvider(Protocol):
    """Resolves an opaque bearer credential to a user id."""

    def authenticate(self, credential: str) -> UUID:
        """Return the user id, or raise AuthenticationError."""
        ...


class JWTIdentityProvider:
    """
    Identity provider backed by HS256-signed JWTs.

    The user id is read from the ``sub`` claim, falling back to ``userId``
    for tokens issued by older clients.
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self._secret = secret
        self._algorithm = algorithm

    def authenticate(self, credential: str) -> UUID:
        try:
            claims = jwt.decode(credential, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError as exc:
            raise AuthenticationError("Token expired.") from exc
        except JWTError as exc:
            raise AuthenticationError("Invalid token.") from exc

        subject = claims.get("sub") or claims.get("userId")
        try:
            return UUID(str(subject))
        except ValueError as exc:
            raise AuthenticationError("Invalid token. User not found.") from exc

    def issue(self, user_id: UUID, expires_in: timedelta = timedelta(days=7)) -> str:
        """Sign a credential for ``user_id`` (development and tests)."""
        expires_at = datetime.now(UTC) + expires_in
        return jwt.encode(
            {"sub": str(user_id), "exp": expires_at},
            self._secret,
            algorithm=self._algorithm,
        )
