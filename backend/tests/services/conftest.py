"""Service test fixtures — FastAPI test client, seeded accounts and auth headers.

Invariants:
    - get_db dependency overridden to use the test DB session factory
    - db_manager patched so the readiness probe sees the test engine
    - Seeded accounts are written through the real repositories and hasher

Design Decisions:
    - Tokens for fixtures are issued directly by the codec; the login route
      itself is covered in test_auth_routes.py
    - Lifespan is not run by ASGITransport: no startup seeding in route tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from stockroom.api.dependencies import get_password_hasher, get_token_codec
from stockroom.core.domain_types import NewUser, ProductFields, Role
from stockroom.infrastructure.database import get_db, DatabaseSessionManager
from stockroom.infrastructure.repositories import SqlProductRepository, SqlUserRepository
import stockroom.infrastructure.database as db_module
from stockroom.main import app

ADMIN_PASSWORD = "123"
USER_PASSWORD = "maria-pass"


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


async def _create_user(db, login, password, role, name):
    hasher = get_password_hasher()
    return await SqlUserRepository(db).create(NewUser(
        login=login, password_hash=hasher.hash(password), name=name, role=role,
    ))


@pytest.fixture
async def admin_user(test_db):
    return await _create_user(test_db, "admin", ADMIN_PASSWORD, Role.ADMIN, "Administrador")


@pytest.fixture
async def regular_user(test_db):
    return await _create_user(test_db, "maria", USER_PASSWORD, Role.USER, "Maria")


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {get_token_codec().issue(admin_user)}"}


@pytest.fixture
def user_headers(regular_user):
    return {"Authorization": f"Bearer {get_token_codec().issue(regular_user)}"}


@pytest.fixture
async def widget(test_db):
    """Product X1 with stock 5."""
    return await SqlProductRepository(test_db).create(
        ProductFields(sku="X1", name="Widget", stock=5),
    )
