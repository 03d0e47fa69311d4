"""Product Schemas — catalog and stock payloads.

Invariants:
    - stock and delta are StrictInt: "5", 5.0 and true are rejected at the boundary
    - Range and length are NOT checked here; the ledger raises INVALID_INPUT so
      each rule has one home

Design Decisions:
    - StockLevelResponse mirrors the {id, sku, stock} projection of the stock endpoints
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, StrictInt


class ProductWrite(BaseModel):
    """Body for create and full replace."""
    sku: str
    name: str
    stock: StrictInt


class StockSet(BaseModel):
    stock: StrictInt


class StockDelta(BaseModel):
    delta: StrictInt


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sku: str
    name: str
    stock: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StockLevelResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    sku: str
    stock: int


class DeletedResponse(BaseModel):
    message: str
    id: int
