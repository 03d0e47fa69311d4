"""Product Queries — read-only lookups over the product store.

Invariants:
    - lookup_stock needs sku or id; sku wins when both are given
    - list_all is ordered by id ascending
"""

from stockroom.core.domain_types import ProductId, ProductRecord, StockLevel
from stockroom.core.errors import BadRequestError, NotFoundError
from stockroom.core.repository_protocols import ProductRepository


class ProductQueries:
    """Lookups by id or SKU, and the full catalog listing."""

    def __init__(self, products: ProductRepository):
        self.products = products

    async def find_by_id(self, product_id: ProductId) -> ProductRecord:
        product = await self.products.find_by_id(product_id)
        if product is None:
            raise NotFoundError("Product", str(product_id))
        return product

    async def find_by_sku(self, sku: str) -> ProductRecord:
        product = await self.products.find_by_sku(sku)
        if product is None:
            raise NotFoundError("Product", sku)
        return product

    async def list_all(self) -> list[ProductRecord]:
        return await self.products.list_all()

    async def lookup_stock(
        self, sku: str | None = None, product_id: ProductId | None = None,
    ) -> StockLevel:
        """Stock level by SKU or id."""
        if sku:
            return StockLevel.from_record(await self.find_by_sku(sku))
        if product_id is not None:
            return StockLevel.from_record(await self.find_by_id(product_id))
        raise BadRequestError("Provide sku or id")
