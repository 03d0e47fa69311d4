"""Authenticator — credential verification, token issuance and registration.

Invariants:
    - Unknown login, wrong password and corrupt stored hash all raise the SAME
      InvalidCredentialsError (no account enumeration)
    - An unknown login still pays for one bcrypt verification (constant effort)
    - Registered accounts always get Role.USER; escalation is unreachable here
    - Plaintext passwords are hashed before persistence and never logged

Design Decisions:
    - bcrypt runs in a worker thread (asyncio.to_thread): verification costs tens
      of ms and must not stall the event loop
    - Duplicate login is pre-checked AND mapped from the unique constraint, so
      two racing registrations still yield one DuplicateLoginError
"""

import asyncio
import logging
from dataclasses import dataclass

from stockroom.core.domain_types import NewUser, Role, UserSummary
from stockroom.core.enforce_credentials import (
    validate_login_input, validate_registration,
)
from stockroom.core.errors import DuplicateLoginError, InvalidCredentialsError
from stockroom.core.repository_protocols import UserRepository
from stockroom.infrastructure.password_hasher import PasswordHasher
from stockroom.infrastructure.token_codec import TokenCodec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: UserSummary


class Authenticator:
    """Login and registration against the credential store."""

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenCodec,
    ):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens

    async def login(self, login: object, password: object) -> LoginResult:
        """Verify credentials and issue a session token."""
        credentials = validate_login_input(login, password)
        user = await self.users.find_by_login(credentials.login)

        if user is None:
            await asyncio.to_thread(
                self.hasher.verify, credentials.password, self.hasher.dummy_hash,
            )
            logger.info("Login failed", extra={"login": credentials.login})
            raise InvalidCredentialsError()

        valid = await asyncio.to_thread(
            self.hasher.verify, credentials.password, user.password_hash,
        )
        if not valid:
            logger.info("Login failed", extra={"login": credentials.login})
            raise InvalidCredentialsError()

        token = self.tokens.issue(user)
        logger.info("Login succeeded", extra={"user_id": user.id})
        return LoginResult(token=token, user=UserSummary.from_record(user))

    async def register(
        self,
        login: object,
        password: object,
        name: str | None = None,
        email: str | None = None,
    ) -> UserSummary:
        """Create a regular user account."""
        data = validate_registration(login, password, name, email)
        if await self.users.find_by_login(data.login) is not None:
            logger.info("Registration rejected: duplicate login", extra={"login": data.login})
            raise DuplicateLoginError()

        password_hash = await asyncio.to_thread(self.hasher.hash, data.password)
        created = await self.users.create(NewUser(
            login=data.login,
            password_hash=password_hash,
            name=data.name,
            role=Role.USER,
            email=data.email,
        ))
        logger.info("User registered", extra={"user_id": created.id})
        return UserSummary.from_record(created)
