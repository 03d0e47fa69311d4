"""API Dependencies — per-request wiring of repositories, services and the access guard.

Invariants:
    - Repositories are bound to the request's AsyncSession (get_db)
    - Hasher and token codec are process-wide singletons built from settings
    - Missing header, non-Bearer scheme and undecodable token all raise the same
      UnauthenticatedError (401); role mismatch raises ForbiddenError (403)

Design Decisions:
    - HTTPBearer(auto_error=False): the default would answer 403 for a missing
      header, the contract here is 401
    - Explicit Depends chains instead of a container: overridable in tests via
      app.dependency_overrides
"""

from functools import lru_cache
from datetime import timedelta

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from stockroom.config import get_settings
from stockroom.core.domain_types import Identity, Role
from stockroom.core.enforce_access import require_role
from stockroom.core.errors import UnauthenticatedError
from stockroom.infrastructure.database import get_db
from stockroom.infrastructure.password_hasher import PasswordHasher
from stockroom.infrastructure.repositories import SqlProductRepository, SqlUserRepository
from stockroom.infrastructure.token_codec import TokenCodec
from stockroom.services.authenticator import Authenticator
from stockroom.services.product_queries import ProductQueries
from stockroom.services.stock_ledger import StockLedger
from stockroom.services.user_admin import UserAdmin

bearer_scheme = HTTPBearer(auto_error=False)


# ─── Singletons ─────────────────────────────────────────────────

@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().bcrypt_rounds)


@lru_cache
def get_token_codec() -> TokenCodec:
    settings = get_settings()
    return TokenCodec(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(minutes=settings.jwt_expires_minutes),
    )


# ─── Repositories & services ────────────────────────────────────

def get_product_repository(db: AsyncSession = Depends(get_db)) -> SqlProductRepository:
    return SqlProductRepository(db)


def get_user_repository(db: AsyncSession = Depends(get_db)) -> SqlUserRepository:
    return SqlUserRepository(db)


def get_stock_ledger(
    products: SqlProductRepository = Depends(get_product_repository),
) -> StockLedger:
    return StockLedger(products, max_attempts=get_settings().stock_cas_max_attempts)


def get_product_queries(
    products: SqlProductRepository = Depends(get_product_repository),
) -> ProductQueries:
    return ProductQueries(products)


def get_authenticator(
    users: SqlUserRepository = Depends(get_user_repository),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenCodec = Depends(get_token_codec),
) -> Authenticator:
    return Authenticator(users, hasher, tokens)


def get_user_admin(
    users: SqlUserRepository = Depends(get_user_repository),
) -> UserAdmin:
    return UserAdmin(users)


# ─── Access guard ───────────────────────────────────────────────

async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenCodec = Depends(get_token_codec),
) -> Identity:
    """Decode the bearer token into the caller's identity."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthenticatedError()
    return tokens.decode(credentials.credentials)


async def require_admin(
    identity: Identity = Depends(get_current_identity),
) -> Identity:
    return require_role(identity, Role.ADMIN)
