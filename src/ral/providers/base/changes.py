"""
Changes

A Change records one attribute's transition; a ChangeSet is the ordered
result of reconciling a resource.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .values import Value


@dataclass(frozen=True, slots=True)
class Change:
    """One attribute transition"""

    attr: str
    is_: Value
    was: Value

    def __str__(self) -> str:
        return f"{self.attr}({self.was.to_string()}->{self.is_.to_string()})"


class ChangeSet:
    """Ordered collection of changes, in discovery order"""

    def __init__(self, changes: list[Change] | None = None) -> None:
        self._changes: list[Change] = list(changes or [])

    def add(self, attr: str, is_: Any, was: Any) -> None:
        self._changes.append(Change(attr, Value.of(is_), Value.of(was)))

    def exists(self, attr: str) -> bool:
        return any(change.attr == attr for change in self._changes)

    def get(self, attr: str) -> Change | None:
        for change in self._changes:
            if change.attr == attr:
                return change
        return None

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {
            change.attr: {"is": change.is_.to_python(), "was": change.was.to_python()}
            for change in self._changes
        }

    def __iter__(self) -> Iterator[Change]:
        return iter(self._changes)

    def __len__(self) -> int:
        return len(self._changes)

    def __getitem__(self, index: int) -> Change:
        return self._changes[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ChangeSet):
            return self._changes == other._changes
        if isinstance(other, list):
            return self._changes == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"ChangeSet({self._changes!r})"

    def __str__(self) -> str:
        return "".join(f"{change}\n" for change in self._changes)
