"""Seeding — one-time bootstrap of the admin account and the starter catalog.

Invariants:
    - The admin account is created only when its login is absent
    - An existing admin with a corrupt password hash is reported, never deleted
      or recreated (it stays unauthenticatable until fixed by an operator)
    - Products are seeded only when the product store is empty

Design Decisions:
    - Runs from the FastAPI lifespan with its own session, after create_schema
"""

import asyncio
import logging

from stockroom.core.domain_types import NewUser, ProductFields, Role
from stockroom.core.repository_protocols import ProductRepository, UserRepository
from stockroom.infrastructure.password_hasher import PasswordHasher, is_hash_format

logger = logging.getLogger(__name__)

ADMIN_NAME = "Administrador"

STARTER_CATALOG: tuple[ProductFields, ...] = (
    ProductFields(sku="CASE-IPHN", name="Capinha para iPhone", stock=15),
    ProductFields(sku="IPHN-15-BLK", name="iPhone 15 Preto 128GB", stock=12),
    ProductFields(sku="IPHN-15-PNK", name="iPhone 15 Rosa 128GB", stock=7),
    ProductFields(sku="AIRP-3RD", name="AirPods (3ª geração)", stock=20),
    ProductFields(sku="APWT-S9", name="Apple Watch Series 9", stock=9),
    ProductFields(sku="MGSF-15W", name="Carregador MagSafe 15W", stock=30),
)


async def seed_admin_user(
    users: UserRepository,
    hasher: PasswordHasher,
    login: str = "admin",
    password: str = "123",
) -> bool:
    """Create the admin account if missing. Returns True if one was created."""
    existing = await users.find_by_login(login)
    if existing is not None:
        if not is_hash_format(existing.password_hash):
            logger.warning(
                "Admin account has a corrupt password hash and cannot log in",
                extra={"user_id": existing.id, "login": login},
            )
        return False

    password_hash = await asyncio.to_thread(hasher.hash, password)
    created = await users.create(NewUser(
        login=login, password_hash=password_hash,
        name=ADMIN_NAME, role=Role.ADMIN,
    ))
    logger.info("Admin account created", extra={"user_id": created.id, "login": login})
    return True


async def seed_products_if_empty(products: ProductRepository) -> int:
    """Insert the starter catalog into an empty store. Returns rows inserted."""
    if await products.count() > 0:
        return 0
    for fields in STARTER_CATALOG:
        await products.create(fields)
    logger.info(f"Seeded {len(STARTER_CATALOG)} products")
    return len(STARTER_CATALOG)
