"""In-memory Resource Store — CRUD semantics over a list of dict records.

Invariants:
    - get_by_id(create(p)._id) == create(p)
    - replace leaves exactly payload + original id
    - merge overwrites only keys in the partial payload
    - remove then get_by_id → NotFound
    - failed operations leave the store unchanged
"""

import pytest

from storeapi.core.domain_types import PRODUCTS, USERS, ListingStyle
from storeapi.core.errors import (
    ErrorKind, MalformedIdentifierError, RecordNotFoundError, RecordValidationError,
)
from storeapi.core.record_schema import PermissiveSchema
from storeapi.infrastructure.memory_store import InMemoryResourceStore
from storeapi.schemas.product import product_schema


NIKE = {
    "title": "Nike Air Max", "price": 120, "brand": "Nike",
    "category": "Shoes", "thumbnail": "url",
}


@pytest.fixture
def users():
    return InMemoryResourceStore(USERS, PermissiveSchema())


@pytest.fixture
def products():
    return InMemoryResourceStore(PRODUCTS, product_schema)


async def test_create_then_get_returns_equal_record(users):
    created = await users.create({"name": "Ada", "age": 36})
    fetched = await users.get_by_id(str(created["_id"]))
    assert fetched == created
    assert created["name"] == "Ada"


async def test_create_assigns_increasing_unique_ids(users):
    a = await users.create({"n": 1})
    b = await users.create({"n": 2})
    c = await users.create({"n": 3})
    assert a["_id"] < b["_id"] < c["_id"]


async def test_create_ignores_client_identifier(users):
    created = await users.create({"_id": 42, "name": "Ada"})
    assert created["_id"] != 42


async def test_list_all_preserves_insertion_order(users):
    await users.create({"n": 1})
    await users.create({"n": 2})
    assert [r["n"] for r in await users.list_all()] == [1, 2]


async def test_list_all_empty_is_not_an_error(users):
    assert await users.list_all() == []


async def test_replace_drops_previous_fields(users):
    created = await users.create({"name": "Ada", "age": 36, "city": "London"})
    replaced = await users.replace(str(created["_id"]), {"name": "Grace"})
    assert replaced == {"_id": created["_id"], "name": "Grace"}
    assert await users.get_by_id(str(created["_id"])) == replaced


async def test_replace_keeps_store_identifier(users):
    created = await users.create({"name": "Ada"})
    replaced = await users.replace(str(created["_id"]), {"_id": 1, "name": "Grace"})
    assert replaced["_id"] == created["_id"]


async def test_merge_overlays_partial(users):
    created = await users.create({"name": "Ada", "age": 36})
    merged = await users.merge(str(created["_id"]), {"age": 37, "city": "London"})
    assert merged == {"_id": created["_id"], "name": "Ada", "age": 37, "city": "London"}
    assert await users.get_by_id(str(created["_id"])) == merged


async def test_remove_returns_snapshot_then_not_found(users):
    created = await users.create({"name": "Ada"})
    removed = await users.remove(str(created["_id"]))
    assert removed == created
    with pytest.raises(RecordNotFoundError):
        await users.get_by_id(str(created["_id"]))


@pytest.mark.parametrize("operation", ["get_by_id", "replace", "merge", "remove"])
async def test_missing_id_is_not_found_and_store_unchanged(users, operation):
    await users.create({"name": "Ada"})
    before = await users.list_all()
    method = getattr(users, operation)
    args = ("12345",) if operation in ("get_by_id", "remove") else ("12345", {"x": 1})
    with pytest.raises(RecordNotFoundError) as exc_info:
        await method(*args)
    assert exc_info.value.kind is ErrorKind.NOT_FOUND
    assert await users.list_all() == before


async def test_non_integer_id_is_malformed(users):
    with pytest.raises(MalformedIdentifierError) as exc_info:
        await users.get_by_id("abc")
    assert exc_info.value.http_status == 400


async def test_returned_records_are_copies(users):
    created = await users.create({"name": "Ada"})
    created["name"] = "Mutated"
    fetched = await users.get_by_id(str(created["_id"]))
    assert fetched["name"] == "Ada"


async def test_seed_records_keep_ids_and_new_ids_exceed_them():
    store = InMemoryResourceStore(
        USERS, PermissiveSchema(), [{"_id": 9_999_999_999_999, "name": "Seed"}],
    )
    created = await store.create({"name": "New"})
    assert created["_id"] > 9_999_999_999_999
    assert (await store.get_by_id("9999999999999"))["name"] == "Seed"


def test_seed_records_without_ids_get_one():
    store = InMemoryResourceStore(
        USERS, PermissiveSchema(), [{"name": "A"}, {"name": "B"}],
        clock=lambda: 1.0,
    )
    ids = [r["_id"] for r in store._records]
    assert ids == [1000, 1001]


def test_duplicate_seed_ids_rejected():
    with pytest.raises(ValueError):
        InMemoryResourceStore(
            USERS, PermissiveSchema(), [{"_id": 1}, {"_id": 1}],
        )


def test_listing_style_is_bare():
    assert InMemoryResourceStore(USERS, PermissiveSchema()).listing_style is ListingStyle.BARE


# ─── Validating schema ───────────────────────────────────────────

async def test_product_create_missing_price_leaves_store_unchanged(products):
    payload = {k: v for k, v in NIKE.items() if k != "price"}
    with pytest.raises(RecordValidationError):
        await products.create(payload)
    assert await products.count() == 0


async def test_product_merge_cannot_break_schema(products):
    created = await products.create(NIKE)
    with pytest.raises(RecordValidationError):
        await products.merge(str(created["_id"]), {"price": -1})
    assert (await products.get_by_id(str(created["_id"])))["price"] == 120


async def test_product_replace_drops_optional_fields(products):
    created = await products.create({**NIKE, "discountPercentage": 10, "rating": 4})
    replaced = await products.replace(str(created["_id"]), {
        "title": "X", "price": 10, "brand": "Y", "category": "Z", "thumbnail": "u2",
    })
    assert "discountPercentage" not in replaced
    assert "rating" not in replaced
    assert replaced["title"] == "X"


@pytest.mark.parametrize("raw_id", [
    "1_700_000_000_101", "+1700000000101", " 1700000000101 ", "1700000000101\n", "١٢٣",
])
async def test_non_canonical_integer_ids_are_malformed(raw_id):
    store = InMemoryResourceStore(USERS, PermissiveSchema(), [{"_id": 1700000000101}])
    with pytest.raises(MalformedIdentifierError):
        await store.get_by_id(raw_id)


async def test_unique_fields_checked_before_write():
    titled = InMemoryResourceStore(PRODUCTS, product_schema, unique_fields=("title",))
    await titled.create(NIKE)
    with pytest.raises(RecordValidationError) as exc_info:
        await titled.create({**NIKE, "price": 1})
    assert exc_info.value.detail == "title must be unique"
    assert await titled.count() == 1


async def test_non_finite_numbers_rejected_by_permissive_schema(users):
    with pytest.raises(RecordValidationError):
        await users.create({"score": float("nan")})
    assert await users.count() == 0
