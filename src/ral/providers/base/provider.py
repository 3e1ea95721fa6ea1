"""
Base Provider Interface

Defines the contract that all resource providers must implement, whether
they keep their state in-process or delegate to an external program.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ral.domain import Ok, Result, error

from .attributes import AttrMap
from .changes import ChangeSet
from .resource import Resource
from .spec import ProviderSpec
from .values import Value

BUILTIN_SOURCE = "builtin"


class Provider(ABC):
    """Main Provider interface

    ``prepare()`` must succeed before any operation that needs ``self.spec``.
    """

    def __init__(self) -> None:
        self._spec: ProviderSpec | None = None

    @abstractmethod
    def describe(self) -> Result[ProviderSpec]:
        """Parse and validate this provider's metadata"""

    @abstractmethod
    def suitable(self) -> Result[bool]:
        """Whether the provider can operate on this host (inspection only)"""

    @abstractmethod
    def instances(self) -> list[Resource]:
        """All resources the provider currently sees, computed afresh on each call"""

    @abstractmethod
    def create(self, name: str) -> Resource:
        """A new resource handle for ``name`` with no attributes and no side effects"""

    @abstractmethod
    def update(self, resource: Resource, desired: AttrMap) -> Result[ChangeSet]:
        """Reconcile ``resource`` toward ``desired`` and report what changed"""

    @abstractmethod
    def flush(self) -> None:
        """Commit buffered changes"""

    def find(self, name: str) -> Resource | None:
        """Locate one resource by name.

        Scans ``instances()`` linearly; providers with a cheaper lookup override this.
        """
        for resource in self.instances():
            if resource.name == name:
                return resource
        return None

    def try_find(self, name: str) -> Result[Resource | None]:
        """Like ``find`` but able to report why a lookup failed."""
        return Ok(self.find(name))

    def try_instances(self) -> Result[list[Resource]]:
        """Like ``instances`` but able to report why enumeration failed."""
        return Ok(self.instances())

    def prepare(self) -> Result[bool]:
        described = self.describe()
        if described.is_err():
            return described
        self._spec = described.unwrap()
        return Ok(True)

    @property
    def spec(self) -> ProviderSpec | None:
        return self._spec

    @property
    def name(self) -> str:
        """Qualified provider name; only meaningful after ``prepare()``."""
        if self._spec is None:
            return type(self).__name__
        return self._spec.name

    def source(self) -> str:
        return BUILTIN_SOURCE

    def parse(self, attr_name: str, text: str) -> Result[Value]:
        """Type-directed parse of ``text`` for attribute ``attr_name``."""
        if self._spec is None:
            return error("internal error: spec was not initialized")
        attr_spec = self._spec.attr(attr_name)
        if attr_spec is None:
            return error(f"there is no attribute '{attr_name}'")
        return attr_spec.read_string(text)

    def parse_attrs(self, raw: dict[str, str]) -> Result[AttrMap]:
        """Parse a mapping of wire text into an AttrMap, failing on the first bad entry."""
        attrs = AttrMap()
        for attr_name, text in raw.items():
            parsed = self.parse(attr_name, text)
            if parsed.is_err():
                return parsed
            attrs[attr_name] = parsed.unwrap()
        return Ok(attrs)
