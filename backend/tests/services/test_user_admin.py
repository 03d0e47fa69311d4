"""User Administration — listing and deletion rules."""

import logging

import pytest

from stockroom.core.domain_types import Identity, NewUser, PasswordHash, Role, UserId
from stockroom.core.errors import BadRequestError, NotFoundError
from stockroom.services.user_admin import UserAdmin
from tests.services.fakes import InMemoryUserRepository

_HASH = PasswordHash("$2b$04$" + "b" * 53)


@pytest.fixture
async def users():
    repo = InMemoryUserRepository()
    await repo.create(NewUser("admin", _HASH, "Administrador", Role.ADMIN))
    await repo.create(NewUser("maria", _HASH, "Maria", Role.USER, email="maria@example.com"))
    return repo


@pytest.fixture
def admin_identity():
    return Identity(id=UserId(1), login="admin", role="admin")


async def test_list_users_hides_password(users):
    listed = await UserAdmin(users).list_users()
    assert [u.login for u in listed] == ["admin", "maria"]
    assert listed[1].email == "maria@example.com"
    assert all(not hasattr(u, "password_hash") for u in listed)


async def test_delete_other_user(users, admin_identity):
    await UserAdmin(users).delete_user(admin_identity, UserId(2))
    assert await users.find_by_id(UserId(2)) is None


async def test_cannot_delete_self(users, admin_identity):
    with pytest.raises(BadRequestError):
        await UserAdmin(users).delete_user(admin_identity, UserId(1))
    assert await users.find_by_id(UserId(1)) is not None


async def test_delete_unknown_user(users, admin_identity):
    with pytest.raises(NotFoundError):
        await UserAdmin(users).delete_user(admin_identity, UserId(42))


async def test_delete_logs_the_removed_account(users, admin_identity, caplog):
    with caplog.at_level(logging.INFO, logger="stockroom.services.user_admin"):
        await UserAdmin(users).delete_user(admin_identity, UserId(2))
    record = next(r for r in caplog.records if r.getMessage() == "User deleted")
    assert (record.user_id, record.login, record.actor) == (2, "maria", "admin")


async def test_delete_unknown_user_leaves_others(users, admin_identity):
    with pytest.raises(NotFoundError) as exc:
        await UserAdmin(users).delete_user(admin_identity, UserId(2**63))
    assert exc.value.context.resource_id == str(2**63)
    assert len(await users.list_all()) == 2
