"""ORM Models — SQLAlchemy declarative models for users and products.

Invariants:
    - All models inherit from Base (db/base.py)
    - ORM objects never leave infrastructure/repositories.py

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
"""

from stockroom.models.user import User  # noqa: F401
from stockroom.models.product import Product  # noqa: F401
