"""Tests for replace/merge record semantics — pure dict transforms, no IO."""

from storeapi.core.record_ops import (
    merge_record, replace_record, strip_identity, with_identity,
)


OLD = {
    "_id": 7, "title": "Nike Air Max", "price": 120,
    "discountPercentage": 10, "rating": 4.5,
}


def test_replace_drops_fields_not_in_payload():
    result = replace_record(7, {"title": "X", "price": 10})
    assert result == {"_id": 7, "title": "X", "price": 10}


def test_replace_keeps_store_identifier_over_payload_identifier():
    result = replace_record(7, {"_id": 999, "title": "X"})
    assert result["_id"] == 7


def test_merge_overlays_partial_and_keeps_other_keys():
    result = merge_record(OLD, {"price": 100})
    assert result == {**OLD, "price": 100}


def test_merge_cannot_change_identifier():
    result = merge_record(OLD, {"_id": 1, "rating": 5})
    assert result["_id"] == 7
    assert result["rating"] == 5


def test_merge_adds_new_keys():
    result = merge_record(OLD, {"stock": 3})
    assert result["stock"] == 3
    assert result["title"] == "Nike Air Max"


def test_inputs_are_not_mutated():
    partial = {"price": 1}
    before = dict(OLD)
    merge_record(OLD, partial)
    replace_record(7, partial)
    assert OLD == before
    assert partial == {"price": 1}


def test_identifier_is_first_key():
    assert list(with_identity(3, {"a": 1, "_id": 9}))[0] == "_id"


def test_strip_identity():
    assert strip_identity({"_id": 1, "a": 2}) == {"a": 2}
