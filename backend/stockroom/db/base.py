"""Declarative Base — metadata shared by the users and products tables.

Invariants:
    - Index, unique, foreign-key and primary-key names are deterministic so
      Alembic batch migrations on SQLite can address them
    - CHECK constraints are named explicitly on each model
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
