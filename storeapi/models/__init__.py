"""ORM Models — SQLAlchemy declarative models for persisted resources.

Invariants:
    - All models inherit from Base (db/base.py)
    - Only products are persisted; users live in memory

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all / alembic run
"""

from storeapi.models.product import Product  # noqa: F401
