"""Product Repository — persisted Resource Store over the products table.

Invariants:
    - Identifiers are checked against the 24-hex pattern BEFORE any query runs
    - Every write is validated against the product schema before touching the session
    - replace resets every column not present in the payload (full overwrite)
    - merge validates the merged record, so required fields can never be dropped
    - Unique-title violations surface as RecordValidationError, other SQLAlchemy
      failures as StoreInternalError; the session is rolled back in both cases
    - Unwrapped driver failures (OSError, timeouts) also surface as StoreInternalError
    - Records are returned with wire names (_id, discountPercentage, createdAt, updatedAt)
      and optional fields that are NULL are omitted
"""

import asyncio
import logging
from collections.abc import Mapping
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncIterator

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storeapi.core.domain_types import (
    ID_FIELD, PRODUCTS, ListingStyle, ObjectIdHex, Record,
)
from storeapi.core.errors import (
    MalformedIdentifierError, RecordNotFoundError, RecordValidationError,
    StoreInternalError,
)
from storeapi.core.identifiers import is_object_id, new_object_id
from storeapi.core.record_ops import merge_record, strip_identity
from storeapi.core.record_schema import RecordSchema
from storeapi.models.product import Product
from storeapi.schemas.product import product_schema

logger = logging.getLogger(__name__)

# wire name -> column attribute, for every client-writable field
_COLUMNS: dict[str, str] = {
    "title": "title",
    "description": "description",
    "price": "price",
    "discountPercentage": "discount_percentage",
    "rating": "rating",
    "brand": "brand",
    "category": "category",
    "thumbnail": "thumbnail",
    "images": "images",
}


class ProductRepository:
    """Resource Store for products backed by an AsyncSession."""

    resource = PRODUCTS
    listing_style = ListingStyle.ENVELOPE

    def __init__(self, db: AsyncSession, schema: RecordSchema = product_schema):
        self._db = db
        self._schema = schema

    async def create(self, payload: Mapping[str, Any]) -> Record:
        fields = self._schema.validate(strip_identity(payload))
        row = Product(id=new_object_id())
        _apply_fields(row, fields)
        async with self._guard("create product"):
            self._db.add(row)
            await self._db.commit()
        logger.info(f"Created product {row.id}")
        return to_record(row)

    async def list_all(self) -> list[Record]:
        async with self._guard("list products"):
            result = await self._db.execute(
                select(Product).order_by(Product.created_at, Product.id),
            )
            rows = result.scalars().all()
        return [to_record(r) for r in rows]

    async def get_by_id(self, raw_id: str) -> Record:
        return to_record(await self._load(raw_id))

    async def replace(self, raw_id: str, payload: Mapping[str, Any]) -> Record:
        row = await self._load(raw_id)
        fields = self._schema.validate(strip_identity(payload))
        _apply_fields(row, fields)
        row.updated_at = datetime.now(timezone.utc)
        async with self._guard("replace product"):
            await self._db.commit()
        return to_record(row)

    async def merge(self, raw_id: str, partial: Mapping[str, Any]) -> Record:
        row = await self._load(raw_id)
        merged = merge_record(to_record(row), partial)
        fields = self._schema.validate(strip_identity(merged))
        _apply_fields(row, fields)
        row.updated_at = datetime.now(timezone.utc)
        async with self._guard("edit product"):
            await self._db.commit()
        return to_record(row)

    async def remove(self, raw_id: str) -> Record:
        row = await self._load(raw_id)
        snapshot = to_record(row)
        async with self._guard("delete product"):
            await self._db.delete(row)
            await self._db.commit()
        logger.info(f"Deleted product {snapshot[ID_FIELD]}")
        return snapshot

    async def count(self) -> int:
        async with self._guard("count products"):
            result = await self._db.execute(select(func.count(Product.id)))
            return result.scalar_one()

    # ─── Helpers ─────────────────────────────────────────────────

    def parse_id(self, raw_id: str) -> ObjectIdHex:
        if not is_object_id(raw_id):
            raise MalformedIdentifierError(self.resource.singular, str(raw_id))
        return ObjectIdHex(raw_id.lower())

    async def _load(self, raw_id: str) -> Product:
        product_id = self.parse_id(raw_id)
        async with self._guard("load product"):
            row = await self._db.get(Product, product_id)
        if row is None:
            raise RecordNotFoundError(self.resource.singular, product_id)
        return row

    @asynccontextmanager
    async def _guard(self, operation: str) -> AsyncIterator[None]:
        """Map SQLAlchemy and driver failures to store errors."""
        try:
            yield
        except IntegrityError as e:
            await self._db.rollback()
            logger.warning(f"Integrity error during {operation}: {e.orig}")
            raise RecordValidationError(
                "Product with the same title already exists",
                "title must be unique",
            ) from e
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(f"Database error during {operation}: {e}")
            raise StoreInternalError(operation) from e
        except (OSError, asyncio.TimeoutError) as e:
            logger.error(f"Driver error during {operation}: {e!r}")
            raise StoreInternalError(operation) from e


def _apply_fields(row: Product, fields: Mapping[str, Any]) -> None:
    """Overwrite every writable column; absent optional fields become NULL / []."""
    for wire_name, attr in _COLUMNS.items():
        default = [] if attr == "images" else None
        setattr(row, attr, fields.get(wire_name, default))


def to_record(row: Product) -> Record:
    """Serialize a Product row into its wire-level record."""
    record: Record = {ID_FIELD: row.id}
    for wire_name, attr in _COLUMNS.items():
        value = getattr(row, attr)
        if value is not None:
            record[wire_name] = value
    record["createdAt"] = _isoformat(row.created_at)
    record["updatedAt"] = _isoformat(row.updated_at)
    return record


def _isoformat(value: datetime | None) -> str | None:
    if value is None:
        return None
    # SQLite hands back naive datetimes; stored values are always UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()
