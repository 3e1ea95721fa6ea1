"""
Attribute Values

A small closed set of value kinds that resource attributes can hold.
Values are immutable; parsing from wire text is always directed by the
attribute's declared kind, never inferred from the text itself.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ral.domain import Ok, Result, error

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
# Wire text for an array holding a single empty item; empty text is the empty array
_SINGLE_EMPTY_ITEM = "\\"


class ValueKind(StrEnum):
    """Variant tag for a Value"""

    ABSENT = "absent"
    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    ARRAY = "array"


_PY_TYPES: dict[type, ValueKind] = {
    str: ValueKind.STRING,
    bool: ValueKind.BOOLEAN,
    int: ValueKind.INTEGER,
    list: ValueKind.ARRAY,
    tuple: ValueKind.ARRAY,
}


@dataclass(frozen=True, slots=True)
class Value:
    """Tagged attribute value

    Arrays are stored as tuples so that every Value is hashable.
    """

    kind: ValueKind
    payload: Any = None

    @classmethod
    def string(cls, text: str) -> Value:
        return cls(ValueKind.STRING, str(text))

    @classmethod
    def boolean(cls, flag: bool) -> Value:
        return cls(ValueKind.BOOLEAN, bool(flag))

    @classmethod
    def integer(cls, number: int) -> Value:
        return cls(ValueKind.INTEGER, int(number))

    @classmethod
    def array(cls, items: list[str] | tuple[str, ...]) -> Value:
        return cls(ValueKind.ARRAY, tuple(str(item) for item in items))

    @classmethod
    def of(cls, obj: Any) -> Value:
        """Build a Value from a plain Python literal (None means absent)."""
        if obj is None:
            return ABSENT
        if isinstance(obj, Value):
            return obj
        if isinstance(obj, bool):
            return cls.boolean(obj)
        if isinstance(obj, int):
            return cls.integer(obj)
        if isinstance(obj, str):
            return cls.string(obj)
        if isinstance(obj, (list, tuple)):
            return cls.array(obj)
        raise TypeError(f"cannot build a Value from {type(obj).__name__}")

    @classmethod
    def parse(cls, kind: ValueKind, text: str) -> Result[Value]:
        """Parse wire text as a value of ``kind``.

        Inverse of ``to_string`` for every kind.
        """
        if kind == ValueKind.STRING:
            return Ok(cls.string(text))
        if kind == ValueKind.BOOLEAN:
            if text == "true":
                return Ok(cls.boolean(True))
            if text == "false":
                return Ok(cls.boolean(False))
            return error(f"expected 'true' or 'false' but got '{text}'")
        if kind == ValueKind.INTEGER:
            if not _INTEGER_RE.fullmatch(text):
                return error(f"expected an integer but got '{text}'")
            return Ok(cls.integer(int(text)))
        if kind == ValueKind.ARRAY:
            return Ok(cls.array(_split_array(text)))
        if kind == ValueKind.ABSENT:
            if text:
                return error(f"expected no value but got '{text}'")
            return Ok(ABSENT)
        return error(f"unknown value kind '{kind}'")

    def is_present(self) -> bool:
        return self.kind != ValueKind.ABSENT

    def as_(self, py_type: type) -> Any:
        """Return the payload if this value is of ``py_type``'s kind, else None."""
        if self.kind == _PY_TYPES.get(py_type):
            if self.kind == ValueKind.ARRAY:
                return list(self.payload)
            return self.payload
        return None

    def to_string(self) -> str:
        if self.kind == ValueKind.ABSENT:
            return ""
        if self.kind == ValueKind.BOOLEAN:
            return "true" if self.payload else "false"
        if self.kind == ValueKind.INTEGER:
            return str(self.payload)
        if self.kind == ValueKind.ARRAY:
            if self.payload == ("",):
                return _SINGLE_EMPTY_ITEM
            return ",".join(_escape_item(item) for item in self.payload)
        return self.payload

    def to_python(self) -> Any:
        """JSON-ready rendering (arrays become lists, absent becomes None)."""
        if self.kind == ValueKind.ARRAY:
            return list(self.payload)
        return self.payload

    def __str__(self) -> str:
        return self.to_string()


ABSENT = Value(ValueKind.ABSENT)


def _escape_item(item: str) -> str:
    return item.replace("\\", "\\\\").replace(",", "\\,")


def _split_array(text: str) -> list[str]:
    # Empty text is the empty array; "\," and "\\" escape the separator.
    if text == "":
        return []
    if text == _SINGLE_EMPTY_ITEM:
        return [""]
    items: list[str] = []
    current: list[str] = []
    chars = iter(text)
    for ch in chars:
        if ch == "\\":
            current.append(next(chars, "\\"))
        elif ch == ",":
            items.append("".join(current))
            current = []
        else:
            current.append(ch)
    items.append("".join(current))
    return items
