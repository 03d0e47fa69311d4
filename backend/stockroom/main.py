"""Stockroom API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map StockroomError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized, schema created and seed data applied on startup via lifespan
    - Missing tables are created; existing tables are never dropped

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Seeding uses its own session, outside any request
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockroom.api.dependencies import get_password_hasher
from stockroom.api.error_handlers import register_error_handlers
from stockroom.api.routes import auth, health, index, products, stock, users
from stockroom.config import get_settings
from stockroom.infrastructure.database import init_db
from stockroom.infrastructure.observability import setup_logging
from stockroom.infrastructure.repositories import SqlProductRepository, SqlUserRepository
from stockroom.services.seeding import seed_admin_user, seed_products_if_empty

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await manager.create_schema()
    if settings.seed_on_startup:
        async with manager.session() as db:
            await seed_products_if_empty(SqlProductRepository(db))
            await seed_admin_user(
                SqlUserRepository(db), get_password_hasher(),
                login=settings.seed_admin_login,
                password=settings.seed_admin_password,
            )
    logger.info("Stockroom API started")
    yield
    logger.info("Stockroom API shutting down")
    await manager.dispose()


app = FastAPI(
    title="Stockroom API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    expose_headers=["Authorization"],
)

# Routes, registered explicitly
app.include_router(index.router)
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(products.router)
app.include_router(stock.router)
app.include_router(users.router)

register_error_handlers(app)
