"""Index Route — plain-text map of the API for humans hitting the root URL."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["index"])

ENDPOINTS = (
    "GET    /api/health",
    "GET    /api/products",
    "GET    /docs (OpenAPI)",
    "GET    /api/stock?sku=IPHN-15-PNK",
    "POST   /api/auth/login",
    "POST   /api/auth/register",
    "GET    /api/users (admin)",
    "DELETE /api/users/:id (admin)",
    'PUT    /api/products/:id/stock   { "stock": 10 } (admin)',
    'PATCH  /api/products/:id/stock   { "delta": -1 } (admin)',
)


@router.get("/", response_class=PlainTextResponse)
async def index():
    return "\n".join(("Stock API: use the endpoints below:", "", *ENDPOINTS))
