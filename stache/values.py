"""
Value model for rendering contexts.

Host data (dicts, lists, strings, numbers, booleans, None and arbitrary
objects) is wrapped into a small closed set of Value types so the renderer can
ask every value the same questions: look up a key, is it falsey, what text does
it render as. Wrapping is shallow; containers wrap their members on access.
"""
from __future__ import annotations

import numbers
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Sequence


class Value:
    """Base class of every wrapped context value."""

    __slots__ = ()

    def lookup(self, key: str) -> Optional["Value"]:
        # None means "not bound here"; a bound None is NullValue.
        return None

    def is_falsey(self) -> bool:
        return False

    def to_text(self) -> str:
        return ""


@dataclass(frozen=True)
class StringValue(Value):
    text: str

    def is_falsey(self) -> bool:
        return self.text == ""

    def to_text(self) -> str:
        return self.text


@dataclass(frozen=True)
class NumberValue(Value):
    number: Any

    def to_text(self) -> str:
        return str(self.number)


@dataclass(frozen=True)
class BoolValue(Value):
    flag: bool

    def is_falsey(self) -> bool:
        return not self.flag

    def to_text(self) -> str:
        return "true" if self.flag else "false"


@dataclass(frozen=True)
class NullValue(Value):
    def is_falsey(self) -> bool:
        return True


@dataclass(frozen=True)
class ListValue(Value):
    elements: Sequence[Any]

    def lookup(self, key: str) -> Optional[Value]:
        # items.0 addresses the first element
        if key.isdecimal():
            idx = int(key)
            if idx < len(self.elements):
                return wrap(self.elements[idx])
        return None

    def items(self) -> Iterator[Value]:
        for element in self.elements:
            yield wrap(element)

    def is_falsey(self) -> bool:
        return len(self.elements) == 0

    def to_text(self) -> str:
        return str(self.elements)


@dataclass(frozen=True)
class MapValue(Value):
    mapping: Mapping

    def lookup(self, key: str) -> Optional[Value]:
        if key in self.mapping:
            return wrap(self.mapping[key])
        return None

    def is_falsey(self) -> bool:
        return len(self.mapping) == 0

    def to_text(self) -> str:
        return str(self.mapping)


@dataclass(frozen=True)
class RecordValue(Value):
    """
    An object whose public, non-callable attributes act as keys.

    A missing attribute (AttributeError) is "not found"; any other exception
    raised by a property is the host's error and propagates out of render.
    """

    obj: Any

    def lookup(self, key: str) -> Optional[Value]:
        if not key or key.startswith("_"):
            return None
        try:
            attr = getattr(self.obj, key)
        except AttributeError:
            return None
        if callable(attr):
            return None
        return wrap(attr)

    def to_text(self) -> str:
        return str(self.obj)


NULL = NullValue()


def wrap(obj: Any) -> Value:
    """Wrap a host object into the matching Value type."""
    if isinstance(obj, Value):
        return obj
    if obj is None:
        return NULL
    # bool is a subclass of int, so it must be checked first
    if isinstance(obj, bool):
        return BoolValue(obj)
    if isinstance(obj, numbers.Number):
        return NumberValue(obj)
    if isinstance(obj, str):
        return StringValue(obj)
    if isinstance(obj, Mapping):
        return MapValue(obj)
    if isinstance(obj, (list, tuple, range)):
        return ListValue(obj)
    return RecordValue(obj)
