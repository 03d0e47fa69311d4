"""Token Codec — issues and verifies signed, expiring session tokens (JWT).

Invariants:
    - Tokens carry id, login, role, iat, exp — nothing else, never the password
    - decode() raises UnauthenticatedError for ANY failure (expired, tampered,
      malformed, missing claims) — callers cannot tell the cases apart
    - Pure computation, no IO: safe to call on the event loop

Design Decisions:
    - PyJWT with HS256 and a shared secret: stateless, no server-side session table
    - No revocation list: expiry is the only termination mechanism
    - exp is required on decode so a token minted without one is rejected
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt

from stockroom.core.domain_types import Identity, Role, UserRecord
from stockroom.core.enforce_access import identity_from_claims
from stockroom.core.errors import UnauthenticatedError

logger = logging.getLogger(__name__)


class TokenCodec:
    """Signs and verifies bearer tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_in: timedelta = timedelta(hours=24),
    ):
        self._secret = secret
        self._algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, user: UserRecord, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "id": int(user.id),
            "login": user.login,
            "role": user.role.value if isinstance(user.role, Role) else user.role,
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str | None) -> Identity:
        if not token:
            raise UnauthenticatedError()
        try:
            claims = jwt.decode(
                token, self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp"]},
            )
        except jwt.PyJWTError as e:
            logger.info(f"Token rejected: {type(e).__name__}")
            raise UnauthenticatedError() from e
        return identity_from_claims(claims)
