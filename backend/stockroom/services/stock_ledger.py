"""Stock Ledger — every operation that creates, mutates or deletes a product.

Invariants:
    - stock >= 0 after every operation; validation happens before any write
    - apply_delta is atomic per product: read, check, then compare-and-set on the
      value read; a lost race re-reads and re-checks (bounded by max_attempts)
    - A rejected delta (InsufficientStockError) leaves the record unchanged
    - SKU uniqueness is checked on create and on full replace (other ids only)

Design Decisions:
    - Compare-and-set over a process-local lock: also holds across workers and
      processes sharing the same database
    - set_absolute is a plain write: it does not depend on the prior value
    - No automatic retry of the whole operation: a caller re-sending a delta
      applies it again
"""

import logging

from stockroom.core.domain_types import ProductId, ProductRecord
from stockroom.core.enforce_stock import (
    compute_adjusted_stock, sku_taken_by_other,
    validate_delta, validate_product_fields, validate_stock_value,
)
from stockroom.core.errors import (
    ConcurrencyError, DuplicateSkuError, ErrorContext, NotFoundError,
)
from stockroom.core.repository_protocols import ProductRepository

logger = logging.getLogger(__name__)


class StockLedger:
    """Product mutations enforcing the non-negative stock invariant."""

    DEFAULT_MAX_ATTEMPTS = 5

    def __init__(
        self, products: ProductRepository, max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self.products = products
        self.max_attempts = max(1, max_attempts)

    async def set_absolute(self, product_id: ProductId, new_stock: object) -> ProductRecord:
        """Replace stock unconditionally."""
        stock = validate_stock_value(new_stock)
        updated = await self.products.set_stock(product_id, stock)
        if updated is None:
            raise NotFoundError("Product", str(product_id))
        logger.info(
            "Stock set",
            extra={"product_id": product_id, "stock": updated.stock},
        )
        return updated

    async def apply_delta(self, product_id: ProductId, delta: object) -> ProductRecord:
        """Add a signed delta to stock, refusing to go below zero."""
        amount = validate_delta(delta)

        for attempt in range(1, self.max_attempts + 1):
            current = await self.products.find_by_id(product_id)
            if current is None:
                raise NotFoundError("Product", str(product_id))

            new_stock = compute_adjusted_stock(product_id, current.stock, amount)
            updated = await self.products.compare_and_set_stock(
                product_id, current.stock, new_stock,
            )
            if updated is not None:
                logger.info(
                    "Stock adjusted",
                    extra={
                        "product_id": product_id, "delta": amount,
                        "stock": updated.stock, "attempt": attempt,
                    },
                )
                return updated

            logger.warning(
                "Stock changed concurrently, retrying",
                extra={"product_id": product_id, "attempt": attempt},
            )

        raise ConcurrencyError(
            f"Stock for product {product_id} kept changing; "
            f"gave up after {self.max_attempts} attempts",
            ErrorContext(resource_id=str(product_id)),
        )

    async def create(self, sku: object, name: object, initial_stock: object) -> ProductRecord:
        fields = validate_product_fields(sku, name, initial_stock)
        if await self.products.find_by_sku(fields.sku) is not None:
            raise DuplicateSkuError(fields.sku)
        created = await self.products.create(fields)
        logger.info(
            "Product created",
            extra={"product_id": created.id, "sku": created.sku},
        )
        return created

    async def replace(
        self, product_id: ProductId, sku: object, name: object, stock: object,
    ) -> ProductRecord:
        """Full replacement of sku, name and stock."""
        fields = validate_product_fields(sku, name, stock)
        if await self.products.find_by_id(product_id) is None:
            raise NotFoundError("Product", str(product_id))

        holder = await self.products.find_by_sku(fields.sku)
        if sku_taken_by_other(holder.id if holder else None, product_id):
            raise DuplicateSkuError(fields.sku)

        updated = await self.products.update(product_id, fields)
        if updated is None:
            raise NotFoundError("Product", str(product_id))
        logger.info(
            "Product replaced",
            extra={"product_id": product_id, "sku": updated.sku},
        )
        return updated

    async def delete(self, product_id: ProductId) -> None:
        if not await self.products.delete(product_id):
            raise NotFoundError("Product", str(product_id))
        logger.info("Product deleted", extra={"product_id": product_id})
