"""SQLAlchemy Repositories — persistence behavior against in-memory SQLite.

Tests cover:
    - Product create/find/update/delete/list/count round through domain records
    - compare_and_set_stock writes only when the expected value matches
    - Unique SKU and login violations surface as domain duplicate errors
    - User listing is ordered and carries hashes only as stored
"""

import pytest

from stockroom.core.domain_types import (
    NewUser, PasswordHash, ProductFields, ProductId, ProductRecord, Role, UserId,
)
from stockroom.core.errors import DuplicateLoginError, DuplicateSkuError
from stockroom.infrastructure.repositories import SqlProductRepository, SqlUserRepository


@pytest.fixture
def products(test_db):
    return SqlProductRepository(test_db)


@pytest.fixture
def users(test_db):
    return SqlUserRepository(test_db)


# ─── Products ────────────────────────────────────────────────────

async def test_create_returns_record(products):
    created = await products.create(ProductFields(sku="X1", name="Widget", stock=5))
    assert isinstance(created, ProductRecord)
    assert created.id >= 1
    assert (created.sku, created.name, created.stock) == ("X1", "Widget", 5)
    assert created.created_at is not None


async def test_find_by_id_and_sku(products):
    created = await products.create(ProductFields(sku="X1", name="Widget", stock=5))
    assert (await products.find_by_id(created.id)).sku == "X1"
    assert (await products.find_by_sku("X1")).id == created.id
    assert await products.find_by_id(ProductId(999)) is None
    assert await products.find_by_sku("x1") is None


async def test_create_duplicate_sku_raises(products):
    await products.create(ProductFields(sku="X1", name="Widget", stock=5))
    with pytest.raises(DuplicateSkuError):
        await products.create(ProductFields(sku="X1", name="Other", stock=1))
    assert await products.count() == 1


async def test_update_replaces_fields(products):
    created = await products.create(ProductFields(sku="X1", name="Widget", stock=5))
    updated = await products.update(
        created.id, ProductFields(sku="X2", name="Gadget", stock=9),
    )
    assert (updated.sku, updated.name, updated.stock) == ("X2", "Gadget", 9)
    assert await products.update(ProductId(999), ProductFields("a", "b", 1)) is None


async def test_update_to_taken_sku_raises(products):
    await products.create(ProductFields(sku="X1", name="Widget", stock=5))
    second = await products.create(ProductFields(sku="X2", name="Gadget", stock=1))
    with pytest.raises(DuplicateSkuError):
        await products.update(second.id, ProductFields(sku="X1", name="Gadget", stock=1))
    assert (await products.find_by_id(second.id)).sku == "X2"


async def test_set_stock(products):
    created = await products.create(ProductFields(sku="X1", name="Widget", stock=5))
    assert (await products.set_stock(created.id, 0)).stock == 0
    assert await products.set_stock(ProductId(999), 1) is None


async def test_compare_and_set_succeeds_on_expected_value(products):
    created = await products.create(ProductFields(sku="X1", name="Widget", stock=6))
    updated = await products.compare_and_set_stock(created.id, 6, 1)
    assert updated.stock == 1
    assert (await products.find_by_id(created.id)).stock == 1


async def test_compare_and_set_fails_on_stale_value(products):
    created = await products.create(ProductFields(sku="X1", name="Widget", stock=6))
    await products.set_stock(created.id, 3)
    assert await products.compare_and_set_stock(created.id, 6, 1) is None
    assert (await products.find_by_id(created.id)).stock == 3


async def test_compare_and_set_missing_product(products):
    assert await products.compare_and_set_stock(ProductId(999), 0, 1) is None


async def test_delete(products):
    created = await products.create(ProductFields(sku="X1", name="Widget", stock=5))
    assert await products.delete(created.id) is True
    assert await products.delete(created.id) is False
    assert await products.find_by_id(created.id) is None


async def test_list_all_ordered_by_id_and_count(products):
    for sku in ("B", "A", "C"):
        await products.create(ProductFields(sku=sku, name=sku, stock=1))
    listed = await products.list_all()
    assert [p.sku for p in listed] == ["B", "A", "C"]
    assert [p.id for p in listed] == sorted(p.id for p in listed)
    assert await products.count() == 3


# ─── Users ───────────────────────────────────────────────────────

def _new_user(login="maria", role=Role.USER):
    return NewUser(
        login=login, password_hash=PasswordHash("$2b$04$" + "a" * 53),
        name=login.title(), role=role,
    )


async def test_user_create_and_find(users):
    created = await users.create(_new_user())
    assert created.role == "user"
    found = await users.find_by_login("maria")
    assert found.id == created.id
    assert found.password_hash.startswith("$2b$")
    assert (await users.find_by_id(created.id)).login == "maria"


async def test_user_login_lookup_is_case_sensitive(users):
    await users.create(_new_user("maria"))
    assert await users.find_by_login("Maria") is None


async def test_user_duplicate_login_raises(users):
    await users.create(_new_user("maria"))
    with pytest.raises(DuplicateLoginError):
        await users.create(_new_user("maria"))


async def test_user_delete_and_list(users):
    admin = await users.create(_new_user("admin", Role.ADMIN))
    maria = await users.create(_new_user("maria"))
    assert [u.login for u in await users.list_all()] == ["admin", "maria"]
    assert await users.delete(maria.id) is True
    assert await users.delete(UserId(999)) is False
    assert [u.id for u in await users.list_all()] == [admin.id]
