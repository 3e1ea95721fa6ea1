"""
In-Process Memory Provider

Keeps its "real world" in a dictionary. Useful as a reference for the
provider contract and as a stand-in backend in tests.
"""

from __future__ import annotations

import logging
from typing import Any

from ral.domain import Ok, Result, error

from ..base.attributes import AttrMap
from ..base.changes import ChangeSet
from ..base.provider import Provider
from ..base.resource import IDENTITY_ATTRIBUTE, Resource
from ..base.spec import ProviderSpec

logger = logging.getLogger(__name__)

ENSURE = "ensure"
PRESENT = "present"
ABSENT_STATE = "absent"


class MemoryProvider(Provider):
    """Provider whose records live in memory

    Args:
        type_name: Provider type, used for the qualified name ``<type>::memory``
        attributes: Attribute declarations, as in provider metadata
        records: Initial records keyed by resource name
        suitable: Value reported by ``suitable()``
    """

    def __init__(
        self,
        type_name: str,
        attributes: dict[str, dict[str, Any]] | None = None,
        records: dict[str, dict[str, Any]] | None = None,
        suitable: bool = True,
    ) -> None:
        super().__init__()
        self.metadata: dict[str, Any] = {
            "provider": {
                "type": type_name,
                "invoke": "memory",
                "actions": ["list", "find", "update"],
                "suitable": suitable,
                "attributes": {
                    ENSURE: {"type": f"enum[{PRESENT}, {ABSENT_STATE}]"},
                    **(attributes or {}),
                },
            }
        }
        self.records: dict[str, AttrMap] = {
            name: AttrMap({ENSURE: PRESENT, **attrs}) for name, attrs in (records or {}).items()
        }

    def describe(self) -> Result[ProviderSpec]:
        return ProviderSpec.read("memory", self.metadata)

    def suitable(self) -> Result[bool]:
        if self.spec is None:
            return error("internal error: spec was not initialized")
        return Ok(bool(self.spec.suitable))

    def create(self, name: str) -> Resource:
        return Resource(self, name)

    def instances(self) -> list[Resource]:
        return [self._materialize(name) for name in self.records]

    def find(self, name: str) -> Resource | None:
        if name not in self.records:
            return None
        return self._materialize(name)

    def update(self, resource: Resource, desired: AttrMap) -> Result[ChangeSet]:
        if self.spec is None:
            return error("internal error: spec was not initialized")
        for attr in desired:
            if self.spec.attr(attr) is None:
                return error(f"there is no attribute '{attr}'")

        current = self._materialize(resource.name) if resource.name in self.records else None
        observed = current if current is not None else self.create(resource.name)
        if current is None:
            observed[ENSURE] = ABSENT_STATE

        changes = ChangeSet()
        if desired[ENSURE].as_(str) == ABSENT_STATE:
            observed.check(changes, desired, [ENSURE])
            self.records.pop(resource.name, None)
        else:
            observed.check(changes, desired, self.spec.properties())
            if changes:
                record = self.records.setdefault(resource.name, AttrMap({ENSURE: PRESENT}))
                for change in changes:
                    record[change.attr] = change.was

        for attr, value in desired.items():
            if attr != IDENTITY_ATTRIBUTE:
                resource[attr] = value
        logger.debug("%s: updated '%s' (%d changes)", self.name, resource.name, len(changes))
        return Ok(changes)

    def flush(self) -> None:
        pass

    def _materialize(self, name: str) -> Resource:
        resource = self.create(name)
        for attr, value in self.records[name].items():
            resource[attr] = value
        return resource
