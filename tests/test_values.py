"""Tests for value descriptions and equality."""

from __future__ import annotations

from outliners.constants import UNREADABLE_PLACEHOLDER
from outliners.values import (
    SlotValue,
    describe,
    describe_slot_value,
    kind_of,
    same_value,
    title_for,
    value_key,
)
from tests.conftest import Record


class BrokenRepr:
    def __repr__(self) -> str:
        raise RuntimeError("no repr")


def test_same_value_uses_identity_for_objects():
    first = Record()
    assert same_value(first, first)
    assert not same_value(first, Record())
    assert not same_value([1], [1])


def test_same_value_compares_primitives_strictly():
    assert same_value("a", "a")
    assert same_value(3, 3)
    assert not same_value(1, True)
    assert not same_value(1, 1.0)
    assert same_value(None, None)


def test_value_key_matches_same_value():
    assert value_key(7) == value_key(7)
    assert value_key(7) != value_key(7.0)
    items = [1, 2]
    assert value_key(items) == value_key(items)
    assert value_key(items) != value_key([1, 2])


def test_describe_is_short_and_safe():
    assert describe("x") == "'x'"
    assert describe({"a": 1}) == "{'a': 1}"
    long_text = describe(list(range(100)))
    assert len(long_text) == 40
    assert long_text.endswith("…")
    assert describe("a   b") == "'a b'"
    assert describe(BrokenRepr()) == UNREADABLE_PLACEHOLDER


def test_describe_slot_value_for_failures():
    assert describe_slot_value(SlotValue.of(5)) == "5"
    failure = SlotValue.failure(KeyError("k"))
    assert failure.failed
    assert describe_slot_value(failure) == f"{UNREADABLE_PLACEHOLDER} KeyError"


def test_kind_of():
    assert kind_of(3) == "primitive"
    assert kind_of(None) == "primitive"
    assert kind_of(ValueError()) == "error"
    assert kind_of(len) == "function"
    assert kind_of(Record) == "function"
    assert kind_of(Record()) == "object"


def test_title_for():
    assert title_for([]) == "a list"
    assert title_for(Record()) == "a Record"
    assert title_for(object()) == "an object"
    assert title_for("hi") == "'hi'"
    assert title_for(KeyError()) == "KeyError"
    assert title_for(len) == "builtin_function_or_method len"
    assert title_for(Record) == "type Record"
