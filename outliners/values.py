from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Hashable

from .constants import DESCRIPTION_MAX_LENGTH, UNREADABLE_PLACEHOLDER

PRIMITIVE_TYPES = (type(None), bool, int, float, complex, str, bytes)


def is_primitive(value: object) -> bool:
    return isinstance(value, PRIMITIVE_TYPES)


def same_value(first: object, second: object) -> bool:
    if first is second:
        return True
    if not (is_primitive(first) and is_primitive(second)):
        return False
    if type(first) is not type(second):
        return False
    return first == second


def value_key(value: object) -> Hashable:
    if is_primitive(value):
        return ("primitive", type(value), value)
    return ("object", id(value))


@dataclass(frozen=True)
class SlotValue:
    """Outcome of reading or writing a field: a value or the error raised."""

    value: Any = None
    error: BaseException | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @staticmethod
    def of(value: object) -> SlotValue:
        return SlotValue(value=value)

    @staticmethod
    def failure(error: BaseException) -> SlotValue:
        return SlotValue(error=error)


def describe(value: object) -> str:
    try:
        text = repr(value)
    except Exception:
        return UNREADABLE_PLACEHOLDER
    text = " ".join(text.split())
    if len(text) > DESCRIPTION_MAX_LENGTH:
        return text[: DESCRIPTION_MAX_LENGTH - 1] + "…"
    return text


def describe_slot_value(result: SlotValue) -> str:
    if result.failed:
        return f"{UNREADABLE_PLACEHOLDER} {type(result.error).__name__}"
    return describe(result.value)


def kind_of(value: object) -> str:
    if is_primitive(value):
        return "primitive"
    if isinstance(value, BaseException):
        return "error"
    if inspect.isroutine(value) or inspect.isclass(value):
        return "function"
    return "object"


def article(noun: str) -> str:
    if not noun:
        return ""
    return "an" if noun[0].lower() in "aeiou" else "a"


def title_for(value: object) -> str:
    if is_primitive(value):
        return describe(value)
    if isinstance(value, BaseException):
        message = str(value)
        name = type(value).__name__
        return f"{name}: {message}" if message else name
    if inspect.isroutine(value) or inspect.isclass(value):
        name = getattr(value, "__qualname__", None) or getattr(value, "__name__", "")
        return f"{type(value).__name__} {name}".strip()
    noun = type(value).__name__
    return f"{article(noun)} {noun}"
