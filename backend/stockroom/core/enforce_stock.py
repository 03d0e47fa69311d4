"""Stock Enforcement — pure validation for every stock mutation point.

Invariants:
    - 0 <= stock <= MAX_STOCK after every operation (lower bound again by the DB CHECK)
    - |delta| <= MAX_STOCK; larger values could never produce a storable stock
    - bool is rejected wherever an int is expected (True is not a stock count)
    - compute_adjusted_stock raises BEFORE any write — the record stays unchanged
    - sku and name are stripped; empty after strip is invalid, and they must fit
      their columns (SKU_MAX_LENGTH, NAME_MAX_LENGTH)

Design Decisions:
    - Raise typed errors rather than return descriptors: callers are services that
      propagate straight to the global handler, there is no agent loop to feed back to
    - No IO: the ledger reads the current value and hands it in
"""

from stockroom.core.domain_types import ProductFields
from stockroom.core.errors import InsufficientStockError, InvalidInputError


MIN_STOCK: int = 0
MAX_STOCK: int = 2**31 - 1  # INTEGER column on every supported backend
SKU_MAX_LENGTH: int = 100
NAME_MAX_LENGTH: int = 255


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_stock_value(stock: object, field: str = "stock") -> int:
    """Absolute stock must be an integer in [MIN_STOCK, MAX_STOCK]."""
    if not _is_int(stock) or stock < MIN_STOCK:
        raise InvalidInputError("stock must be an integer >= 0", field)
    if stock > MAX_STOCK:
        raise InvalidInputError(f"stock must be <= {MAX_STOCK}", field)
    return stock


def validate_delta(delta: object) -> int:
    """Delta may be positive, negative or zero, within +/- MAX_STOCK."""
    if not _is_int(delta):
        raise InvalidInputError("delta must be an integer", "delta")
    if abs(delta) > MAX_STOCK:
        raise InvalidInputError(f"delta must be between -{MAX_STOCK} and {MAX_STOCK}", "delta")
    return delta


def compute_adjusted_stock(product_id: int, current: int, delta: int) -> int:
    """current + delta; InsufficientStockError below zero, InvalidInputError above MAX_STOCK."""
    new_stock = current + delta
    if new_stock < MIN_STOCK:
        raise InsufficientStockError(product_id)
    if new_stock > MAX_STOCK:
        raise InvalidInputError(f"stock would exceed {MAX_STOCK}", "delta")
    return new_stock


def _clean_text(value: object, field: str, max_length: int) -> str:
    clean = value.strip() if isinstance(value, str) else ""
    if not clean:
        raise InvalidInputError(f"{field} is required", field)
    if len(clean) > max_length:
        raise InvalidInputError(f"{field} must be at most {max_length} characters", field)
    return clean


def validate_product_fields(sku: object, name: object, stock: object) -> ProductFields:
    """Validate the sku/name/stock triple shared by create and full replace."""
    return ProductFields(
        sku=_clean_text(sku, "sku", SKU_MAX_LENGTH),
        name=_clean_text(name, "name", NAME_MAX_LENGTH),
        stock=validate_stock_value(stock),
    )


def sku_taken_by_other(
    existing_id: int | None, target_id: int | None,
) -> bool:
    """True if the SKU belongs to a product other than the one being written."""
    return existing_id is not None and existing_id != target_id
