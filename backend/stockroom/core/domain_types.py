"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, ProductId wrap ints — never use bare int ids in domain logic
    - PasswordHash is only ever produced by the password hasher
    - Records crossing the core boundary are frozen dataclasses, never ORM objects
    - Role is the single source of truth for role names

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and into JWT claims without custom encoders
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
ProductId = NewType("ProductId", int)


# ─── Value Types ─────────────────────────────────────────────────

PasswordHash = NewType("PasswordHash", str)   # bcrypt, "$2b$..."


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Coarse authorization tag. Only ADMIN gates anything."""
    ADMIN = "admin"
    USER = "user"


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class UserRecord:
    """User as read from the credential store. Carries the stored hash."""
    id: UserId
    login: str
    password_hash: str | None
    name: str
    role: str
    email: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class NewUser:
    """Persistable user. password_hash must come from PasswordHasher.hash()."""
    login: str
    password_hash: PasswordHash
    name: str
    role: Role = Role.USER
    email: str | None = None


@dataclass(frozen=True)
class UserSummary:
    """Redacted user view — never includes the password."""
    id: UserId
    login: str
    name: str
    role: str

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserSummary":
        return cls(
            id=record.id, login=record.login,
            name=record.name, role=record.role,
        )


@dataclass(frozen=True)
class ProductRecord:
    id: ProductId
    sku: str
    name: str
    stock: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ProductFields:
    """Validated sku/name/stock triple for create and full replace."""
    sku: str
    name: str
    stock: int


@dataclass(frozen=True)
class StockLevel:
    """Stock projection returned by stock endpoints."""
    id: ProductId
    sku: str
    stock: int

    @classmethod
    def from_record(cls, record: ProductRecord) -> "StockLevel":
        return cls(id=record.id, sku=record.sku, stock=record.stock)


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, decoded from a session token."""
    id: UserId
    login: str
    role: str
