"""Stock Lookup Route — GET /api/stock?sku=...|id=...

Invariants:
    - Requires an authenticated identity (any role)
    - sku takes precedence over id; neither → 400 BAD_REQUEST
"""

from fastapi import APIRouter, Depends, Query

from stockroom.api.dependencies import get_current_identity, get_product_queries
from stockroom.core.domain_types import Identity, ProductId
from stockroom.schemas.product import StockLevelResponse
from stockroom.services.product_queries import ProductQueries

router = APIRouter(prefix="/api/stock", tags=["stock"])


@router.get("", response_model=StockLevelResponse)
async def get_stock(
    sku: str | None = Query(None),
    product_id: int | None = Query(None, alias="id"),
    _identity: Identity = Depends(get_current_identity),
    queries: ProductQueries = Depends(get_product_queries),
):
    level = await queries.lookup_stock(
        sku=sku,
        product_id=ProductId(product_id) if product_id is not None else None,
    )
    return StockLevelResponse.model_validate(level)
