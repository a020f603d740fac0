from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Hashable

from .elements import SlotHandle
from .values import SlotValue, describe_slot_value, is_primitive

if TYPE_CHECKING:
    from .panels import Panel

logger = logging.getLogger(__name__)


class InternalSelector:
    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"[[{self.name}]]"


CLASS_SELECTOR = InternalSelector("Class")


class Slot:
    internal = False

    def __init__(self, owner: object, selector: Hashable) -> None:
        self.owner = owner
        self.selector = selector
        self.panel: Panel | None = None
        self.handle = SlotHandle(self)

    def name(self) -> str:
        return str(self.selector)

    def current_value(self) -> SlotValue:
        try:
            return SlotValue.of(self._read())
        except Exception as exc:
            logger.debug("Reading %s failed: %r", self.name(), exc)
            return SlotValue.failure(exc)

    def assign(self, new_value: object) -> SlotValue:
        try:
            self._write(new_value)
        except Exception as exc:
            logger.info("Assigning %s failed: %r", self.name(), exc)
            return SlotValue.failure(exc)
        return SlotValue.of(new_value)

    def is_present(self) -> bool:
        try:
            return self._present()
        except Exception:
            return False

    def value_text(self) -> str:
        return describe_slot_value(self.current_value())

    def _read(self) -> object:
        raise NotImplementedError

    def _write(self, new_value: object) -> None:
        raise NotImplementedError

    def _present(self) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name()}>"


class KeySlot(Slot):
    def name(self) -> str:
        return repr(self.selector)

    def _read(self) -> object:
        return self.owner[self.selector]

    def _write(self, new_value: object) -> None:
        self.owner[self.selector] = new_value

    def _present(self) -> bool:
        return self.selector in self.owner


class IndexSlot(Slot):
    def name(self) -> str:
        return f"[{self.selector}]"

    def _read(self) -> object:
        return self.owner[self.selector]

    def _write(self, new_value: object) -> None:
        self.owner[self.selector] = new_value

    def _present(self) -> bool:
        return 0 <= self.selector < len(self.owner)


class AttributeSlot(Slot):
    def _read(self) -> object:
        return getattr(self.owner, self.selector)

    def _write(self, new_value: object) -> None:
        setattr(self.owner, self.selector, new_value)

    def _present(self) -> bool:
        if self.selector in _instance_attributes(self.owner):
            return True
        return self.selector in _class_properties(self.owner)


class ClassSlot(Slot):
    internal = True

    def __init__(self, owner: object) -> None:
        super().__init__(owner, CLASS_SELECTOR)

    def name(self) -> str:
        return repr(CLASS_SELECTOR)

    def _read(self) -> object:
        return type(self.owner)

    def _write(self, new_value: object) -> None:
        self.owner.__class__ = new_value

    def _present(self) -> bool:
        return True


def _instance_attributes(value: object) -> list[str]:
    try:
        return list(vars(value))
    except TypeError:
        return []


def _class_properties(value: object) -> list[str]:
    names = []
    for klass in type(value).__mro__:
        for name, attribute in vars(klass).items():
            if isinstance(attribute, property) and name not in names:
                names.append(name)
    return names


def slots_for(value: object) -> list[Slot]:
    if is_primitive(value):
        return []
    fields: list[Slot] = []
    if isinstance(value, Mapping):
        fields.extend(KeySlot(value, key) for key in list(value.keys()))
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        fields.extend(IndexSlot(value, index) for index in range(len(value)))
    else:
        attributes = _instance_attributes(value)
        fields.extend(AttributeSlot(value, name) for name in attributes)
        fields.extend(
            AttributeSlot(value, name)
            for name in _class_properties(value)
            if name not in attributes
        )
    fields.append(ClassSlot(value))
    return fields

