"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Repositories return domain records, never ORM instances

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass plain in-memory fakes
    - compare_and_set_stock is the only stock write that depends on prior state;
      apply_delta is built on it so two deltas can never both pass the
      non-negativity check against the same stale value
"""

from typing import Protocol

from stockroom.core.domain_types import (
    NewUser, ProductFields, ProductId, ProductRecord, UserId, UserRecord,
)


class UserRepository(Protocol):
    """Credential store — exclusively owns User records."""
    async def find_by_login(self, login: str) -> UserRecord | None: ...
    async def find_by_id(self, user_id: UserId) -> UserRecord | None: ...
    async def create(self, user: NewUser) -> UserRecord: ...
    async def delete(self, user_id: UserId) -> bool: ...
    async def list_all(self) -> list[UserRecord]: ...


class ProductRepository(Protocol):
    """Product store — exclusively owns Product records."""
    async def find_by_id(self, product_id: ProductId) -> ProductRecord | None: ...
    async def find_by_sku(self, sku: str) -> ProductRecord | None: ...
    async def create(self, fields: ProductFields) -> ProductRecord: ...
    async def update(
        self, product_id: ProductId, fields: ProductFields,
    ) -> ProductRecord | None: ...
    async def set_stock(
        self, product_id: ProductId, stock: int,
    ) -> ProductRecord | None: ...
    async def compare_and_set_stock(
        self, product_id: ProductId, expected: int, new: int,
    ) -> ProductRecord | None: ...
    async def delete(self, product_id: ProductId) -> bool: ...
    async def list_all(self) -> list[ProductRecord]: ...
    async def count(self) -> int: ...
