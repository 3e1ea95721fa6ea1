"""
Resource

One named instance of a provider's managed entity. The identity attribute
lives outside the attribute map and has its own accessor.
"""

from __future__ import annotations

import weakref
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, TypeVar

from ral.domain import ContractViolationError, Result

from .attributes import AttrMap
from .changes import ChangeSet
from .values import Value

if TYPE_CHECKING:
    from .provider import Provider

T = TypeVar("T")

IDENTITY_ATTRIBUTE = "name"


def is_name(key: str) -> bool:
    return key == IDENTITY_ATTRIBUTE


class Resource:
    """Provider-owned resource handle

    Holds a weak reference to its provider: the handle routes ``update`` and
    ``flush`` but never keeps the provider alive.
    """

    def __init__(self, provider: Provider, name: str) -> None:
        self._provider_ref = weakref.ref(provider)
        self._name = name
        self._attrs = AttrMap()

    @property
    def name(self) -> str:
        return self._name

    @property
    def provider(self) -> Provider:
        provider = self._provider_ref()
        if provider is None:
            raise ContractViolationError(f"provider of resource '{self._name}' no longer exists")
        return provider

    def __getitem__(self, key: str) -> Value:
        if is_name(key):
            raise ContractViolationError("The name can not be accessed with operator[]")
        return self._attrs[key]

    def __setitem__(self, key: str, value: Any) -> None:
        if is_name(key):
            raise ContractViolationError("The name can not be accessed with operator[]")
        self._attrs[key] = value

    def lookup(self, key: str, py_type: type[T], default: T) -> T:
        return self._attrs.lookup(key, py_type, default)

    def lookup_optional(self, key: str, py_type: type[T]) -> T | None:
        return self._attrs.lookup_optional(key, py_type)

    def attributes(self) -> AttrMap:
        """Copy of every non-identity attribute."""
        return self._attrs.copy()

    def check(self, changes: ChangeSet, desired: AttrMap, properties: Iterable[str]) -> None:
        """Append a Change for every listed property whose desired value differs.

        Properties the desired map does not mention are left alone.
        """
        for prop in properties:
            want = desired[prop]
            if want.is_present() and self[prop] != want:
                changes.add(prop, self[prop], want)

    def update(self, desired: AttrMap) -> Result[ChangeSet]:
        return self.provider.update(self, desired)

    def flush(self) -> None:
        self.provider.flush()

    def to_dict(self) -> dict[str, Any]:
        return {IDENTITY_ATTRIBUTE: self._name, **self._attrs.to_dict()}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, attrs={dict(self._attrs)!r})"
