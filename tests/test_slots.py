"""Tests for field accessors."""

from __future__ import annotations

from outliners.slots import (
    CLASS_SELECTOR,
    AttributeSlot,
    ClassSlot,
    IndexSlot,
    KeySlot,
    slots_for,
)
from tests.conftest import Record


class Account:
    def __init__(self) -> None:
        self.owner = "ann"
        self._balance = 10

    @property
    def balance(self) -> int:
        return self._balance

    @balance.setter
    def balance(self, value: int) -> None:
        if value < 0:
            raise ValueError("negative balance")
        self._balance = value

    @property
    def frozen(self) -> bool:
        return False


def test_primitives_have_no_fields():
    assert slots_for(3) == []
    assert slots_for("text") == []
    assert slots_for(None) == []


def test_mapping_fields_are_keys():
    slots = slots_for({"a": 1, 2: "b"})
    assert [type(slot) for slot in slots] == [KeySlot, KeySlot, ClassSlot]
    assert [slot.name() for slot in slots] == ["'a'", "2", "[[Class]]"]


def test_sequence_fields_are_indexes():
    slots = slots_for(["x", "y"])
    assert [type(slot) for slot in slots] == [IndexSlot, IndexSlot, ClassSlot]
    assert slots[1].name() == "[1]"
    assert slots[1].current_value().value == "y"


def test_object_fields_are_attributes_then_properties():
    slots = slots_for(Account())
    assert [slot.selector for slot in slots] == ["owner", "_balance", "balance", "frozen", CLASS_SELECTOR]
    assert all(isinstance(slot, AttributeSlot) for slot in slots[:-1])
    assert slots[-1].internal


def test_assign_reports_errors_instead_of_raising():
    account = Account()
    slot = AttributeSlot(account, "balance")
    assert slot.assign(-5).failed
    assert isinstance(slot.assign(-5).error, ValueError)
    assert account.balance == 10
    result = slot.assign(25)
    assert not result.failed
    assert account.balance == 25


def test_read_only_property_cannot_be_assigned():
    slot = AttributeSlot(Account(), "frozen")
    assert isinstance(slot.assign(True).error, AttributeError)


def test_tuple_index_cannot_be_assigned():
    slot = IndexSlot((1, 2), 0)
    assert isinstance(slot.assign(9).error, TypeError)
    assert slot.current_value().value == 1


def test_presence_tracks_live_value():
    data = {"a": 1}
    key = KeySlot(data, "a")
    assert key.is_present()
    del data["a"]
    assert not key.is_present()
    assert key.current_value().failed

    items = [1]
    index = IndexSlot(items, 0)
    items.clear()
    assert not index.is_present()

    record = Record(child=1)
    attribute = AttributeSlot(record, "child")
    del record.child
    assert not attribute.is_present()
    assert AttributeSlot(Account(), "balance").is_present()


def test_class_slot_reads_type_and_rejects_bad_class():
    record = Record()
    slot = ClassSlot(record)
    assert slot.current_value().value is Record
    assert slot.name() == "[[Class]]"
    assert slot.assign(int).failed
    assert type(record) is Record


def test_class_slot_can_switch_compatible_class():
    class Other:
        pass

    value = Other()
    assert not ClassSlot(value).assign(Record).failed
    assert type(value) is Record


def test_value_text_uses_placeholder_for_failures():
    data = {"a": 1}
    slot = KeySlot(data, "a")
    assert slot.value_text() == "1"
    del data["a"]
    assert slot.value_text() == "<unreadable> KeyError"
