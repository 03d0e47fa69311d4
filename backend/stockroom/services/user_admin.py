"""User Administration — admin-only listing and deletion of accounts.

Invariants:
    - Listings never expose password hashes
    - An admin cannot delete their own account through this path
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from stockroom.core.domain_types import Identity, UserId, UserRecord
from stockroom.core.errors import BadRequestError, NotFoundError
from stockroom.core.repository_protocols import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UserListing:
    id: UserId
    login: str
    email: str | None
    name: str
    role: str
    created_at: datetime | None

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserListing":
        return cls(
            id=record.id, login=record.login, email=record.email,
            name=record.name, role=record.role, created_at=record.created_at,
        )


class UserAdmin:
    def __init__(self, users: UserRepository):
        self.users = users

    async def list_users(self) -> list[UserListing]:
        return [UserListing.from_record(u) for u in await self.users.list_all()]

    async def delete_user(self, actor: Identity, user_id: UserId) -> None:
        if actor.id == user_id:
            raise BadRequestError("You cannot delete your own user")
        target = await self.users.find_by_id(user_id)
        if target is None or not await self.users.delete(user_id):
            raise NotFoundError("User", str(user_id))
        logger.info(
            "User deleted",
            extra={"user_id": user_id, "login": target.login, "actor": actor.login},
        )
