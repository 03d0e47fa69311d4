"""SQLAlchemy Repositories — shell implementations of the core repository protocols.

Invariants:
    - ORM rows are converted to frozen domain records before leaving this module
    - Every write commits; unique-constraint violations surface as DuplicateSkuError /
      DuplicateLoginError, anything else propagates to the session manager
    - Reads always refresh from the database (populate_existing) so a retry loop
      never sees a stale identity-map value
    - compare_and_set_stock writes only if the stored stock still equals `expected`
    - An id outside the INTEGER column range matches no row; it never reaches the driver

Design Decisions:
    - One repository instance per request session: no shared mutable state
    - CAS as a single conditional UPDATE: atomic on SQLite and PostgreSQL alike,
      no explicit row locks needed
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from stockroom.core.domain_types import (
    NewUser, ProductFields, ProductId, ProductRecord, UserId, UserRecord,
)
from stockroom.core.errors import DuplicateLoginError, DuplicateSkuError
from stockroom.models.product import Product
from stockroom.models.user import User

logger = logging.getLogger(__name__)

MAX_ROW_ID = 2**31 - 1


def _storable_id(row_id: int) -> bool:
    return 1 <= row_id <= MAX_ROW_ID


def _product_record(row: Product) -> ProductRecord:
    return ProductRecord(
        id=ProductId(row.id), sku=row.sku, name=row.name, stock=row.stock,
        created_at=row.created_at, updated_at=row.updated_at,
    )


def _user_record(row: User) -> UserRecord:
    return UserRecord(
        id=UserId(row.id), login=row.login, password_hash=row.password,
        name=row.name, role=row.role, email=row.email,
        created_at=row.created_at,
    )


class SqlProductRepository:
    """Product store backed by the `products` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _get_row(self, product_id: ProductId) -> Product | None:
        if not _storable_id(product_id):
            return None
        return await self.db.get(Product, product_id, populate_existing=True)

    async def find_by_id(self, product_id: ProductId) -> ProductRecord | None:
        row = await self._get_row(product_id)
        return _product_record(row) if row else None

    async def find_by_sku(self, sku: str) -> ProductRecord | None:
        result = await self.db.execute(
            select(Product)
            .where(Product.sku == sku)
            .execution_options(populate_existing=True),
        )
        row = result.scalar_one_or_none()
        return _product_record(row) if row else None

    async def create(self, fields: ProductFields) -> ProductRecord:
        row = Product(sku=fields.sku, name=fields.name, stock=fields.stock)
        self.db.add(row)
        await self._commit_or_duplicate_sku(fields.sku)
        await self.db.refresh(row)
        return _product_record(row)

    async def update(
        self, product_id: ProductId, fields: ProductFields,
    ) -> ProductRecord | None:
        row = await self._get_row(product_id)
        if not row:
            return None
        row.sku = fields.sku
        row.name = fields.name
        row.stock = fields.stock
        await self._commit_or_duplicate_sku(fields.sku)
        await self.db.refresh(row)
        return _product_record(row)

    async def set_stock(
        self, product_id: ProductId, stock: int,
    ) -> ProductRecord | None:
        row = await self._get_row(product_id)
        if not row:
            return None
        row.stock = stock
        await self.db.commit()
        await self.db.refresh(row)
        return _product_record(row)

    async def compare_and_set_stock(
        self, product_id: ProductId, expected: int, new: int,
    ) -> ProductRecord | None:
        """Conditional write. None means the row changed (or vanished) since it was read."""
        if not _storable_id(product_id):
            return None
        result = await self.db.execute(
            update(Product)
            .where(Product.id == product_id)
            .where(Product.stock == expected)
            .values(stock=new, updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False),
        )
        await self.db.commit()
        if result.rowcount != 1:
            return None
        row = await self._get_row(product_id)
        return _product_record(row) if row else None

    async def delete(self, product_id: ProductId) -> bool:
        row = await self._get_row(product_id)
        if not row:
            return False
        await self.db.delete(row)
        await self.db.commit()
        return True

    async def list_all(self) -> list[ProductRecord]:
        result = await self.db.execute(select(Product).order_by(Product.id.asc()))
        return [_product_record(row) for row in result.scalars().all()]

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(Product))
        return int(result.scalar_one())

    async def _commit_or_duplicate_sku(self, sku: str) -> None:
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            if await self.find_by_sku(sku) is not None:
                logger.warning("SKU collision on commit", extra={"sku": sku})
                raise DuplicateSkuError(sku)
            raise


class SqlUserRepository:
    """Credential store backed by the `users` table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_login(self, login: str) -> UserRecord | None:
        result = await self.db.execute(
            select(User)
            .where(User.login == login)
            .execution_options(populate_existing=True),
        )
        row = result.scalar_one_or_none()
        return _user_record(row) if row else None

    async def _get_row(self, user_id: UserId) -> User | None:
        if not _storable_id(user_id):
            return None
        return await self.db.get(User, user_id, populate_existing=True)

    async def find_by_id(self, user_id: UserId) -> UserRecord | None:
        row = await self._get_row(user_id)
        return _user_record(row) if row else None

    async def create(self, user: NewUser) -> UserRecord:
        row = User(
            login=user.login,
            password=user.password_hash,
            name=user.name,
            role=user.role.value,
            email=user.email,
        )
        self.db.add(row)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            if await self.find_by_login(user.login) is not None:
                raise DuplicateLoginError()
            raise
        await self.db.refresh(row)
        return _user_record(row)

    async def delete(self, user_id: UserId) -> bool:
        row = await self._get_row(user_id)
        if not row:
            return False
        await self.db.delete(row)
        await self.db.commit()
        return True

    async def list_all(self) -> list[UserRecord]:
        result = await self.db.execute(select(User).order_by(User.id.asc()))
        return [_user_record(row) for row in result.scalars().all()]
