"""User ORM — persists login identities and their bcrypt password hashes.

Invariants:
    - login is unique, 3-50 chars (validated before insert, length bounded by column)
    - password always holds a bcrypt hash; writers receive PasswordHash from the hasher
    - role is "admin" or "user" (CHECK constraint), default "user"

Design Decisions:
    - No save hooks: hashing is an explicit step before constructing the row
    - email is optional and NOT unique (display-only)
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from stockroom.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Credential store row."""
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('admin', 'user')", name="ck_users_role"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    login: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True, index=True,
    )
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(10), nullable=False, default="user",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )
