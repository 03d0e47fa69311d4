"""Product Routes — catalog CRUD and the two stock mutation endpoints.

Invariants:
    - Reads require any authenticated identity; writes require role "admin"
    - PUT /{id}/stock sets an absolute value; PATCH /{id}/stock applies a delta
    - Stock endpoints answer the {id, sku, stock} projection
    - GET list answers HTML only when the client asks for text/html

Design Decisions:
    - Auth dependencies declared per route (not on the router) so the public
      surface of each endpoint is visible at its definition
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse

from stockroom.api.dependencies import (
    get_current_identity, get_product_queries, get_stock_ledger, require_admin,
)
from stockroom.api.render_products import render_product_table, wants_html
from stockroom.core.domain_types import Identity, ProductId
from stockroom.schemas.product import (
    DeletedResponse, ProductResponse, ProductWrite, StockDelta, StockLevelResponse,
    StockSet,
)
from stockroom.services.product_queries import ProductQueries
from stockroom.services.stock_ledger import StockLedger

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=list[ProductResponse])
async def list_products(
    request: Request,
    _identity: Identity = Depends(get_current_identity),
    queries: ProductQueries = Depends(get_product_queries),
):
    """List all products ordered by id."""
    products = await queries.list_all()
    if wants_html(request.headers.get("accept")):
        return HTMLResponse(render_product_table(products))
    return [ProductResponse.model_validate(p) for p in products]


@router.post(
    "", response_model=ProductResponse, status_code=status.HTTP_201_CREATED,
)
async def create_product(
    body: ProductWrite,
    _admin: Identity = Depends(require_admin),
    ledger: StockLedger = Depends(get_stock_ledger),
):
    product = await ledger.create(body.sku, body.name, body.stock)
    return ProductResponse.model_validate(product)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    _identity: Identity = Depends(get_current_identity),
    queries: ProductQueries = Depends(get_product_queries),
):
    product = await queries.find_by_id(ProductId(product_id))
    return ProductResponse.model_validate(product)


@router.put("/{product_id}", response_model=ProductResponse)
async def replace_product(
    product_id: int,
    body: ProductWrite,
    _admin: Identity = Depends(require_admin),
    ledger: StockLedger = Depends(get_stock_ledger),
):
    """Full replacement of sku, name and stock."""
    product = await ledger.replace(
        ProductId(product_id), body.sku, body.name, body.stock,
    )
    return ProductResponse.model_validate(product)


@router.put("/{product_id}/stock", response_model=StockLevelResponse)
async def set_stock(
    product_id: int,
    body: StockSet,
    _admin: Identity = Depends(require_admin),
    ledger: StockLedger = Depends(get_stock_ledger),
):
    """Set stock to an absolute value (>= 0)."""
    product = await ledger.set_absolute(ProductId(product_id), body.stock)
    return StockLevelResponse.model_validate(product)


@router.patch("/{product_id}/stock", response_model=StockLevelResponse)
async def adjust_stock(
    product_id: int,
    body: StockDelta,
    _admin: Identity = Depends(require_admin),
    ledger: StockLedger = Depends(get_stock_ledger),
):
    """Apply a signed delta; 400 INSUFFICIENT_STOCK if it would go negative."""
    product = await ledger.apply_delta(ProductId(product_id), body.delta)
    return StockLevelResponse.model_validate(product)


@router.delete("/{product_id}", response_model=DeletedResponse)
async def delete_product(
    product_id: int,
    _admin: Identity = Depends(require_admin),
    ledger: StockLedger = Depends(get_stock_ledger),
):
    await ledger.delete(ProductId(product_id))
    return DeletedResponse(message="Product deleted successfully", id=product_id)
