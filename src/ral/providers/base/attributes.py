"""
Attribute Map

Ordered mapping from attribute name to Value. Reads are total: a missing
key yields ABSENT rather than raising.
"""

from __future__ import annotations

from typing import Any, TypeVar

from .values import ABSENT, Value

T = TypeVar("T")


class AttrMap(dict[str, Value]):
    """Insertion-ordered attribute name -> Value mapping"""

    def __init__(self, initial: dict[str, Any] | None = None, **attrs: Any) -> None:
        super().__init__()
        for key, value in {**(initial or {}), **attrs}.items():
            self[key] = value

    def __missing__(self, key: str) -> Value:
        return ABSENT

    def __setitem__(self, key: str, value: Any) -> None:
        super().__setitem__(key, Value.of(value))

    def get(self, key: str, default: Any = ABSENT) -> Any:  # type: ignore[override]
        return super().get(key, default)

    def lookup(self, key: str, py_type: type[T], default: T) -> T:
        """Typed read: the payload if the stored value has ``py_type``'s kind, else ``default``."""
        found = self[key].as_(py_type)
        return default if found is None else found

    def lookup_optional(self, key: str, py_type: type[T]) -> T | None:
        """Typed read that reports absence (or a kind mismatch) as None."""
        return self[key].as_(py_type)

    def copy(self) -> AttrMap:
        return AttrMap(dict(self))

    def to_dict(self) -> dict[str, Any]:
        return {key: value.to_python() for key, value in self.items()}
