"""
External-Process Provider

Implements the provider contract by running an external executable once
per action and exchanging JSON documents over its standard streams.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ral.domain import BackendError, Ok, Result, error

from ..base.attributes import AttrMap
from ..base.changes import ChangeSet
from ..base.executor import ExecutionConfig, ProcessExecutor
from ..base.provider import Provider
from ..base.resource import IDENTITY_ATTRIBUTE, Resource
from ..base.spec import ProviderSpec
from ..base.values import ABSENT, Value
from . import protocol

logger = logging.getLogger(__name__)


class ExternalResource(Resource):
    """Resource whose provider is an external program"""


class ExternalProvider(Provider):
    """Provider backed by an executable speaking the JSON protocol

    Args:
        path: Executable implementing the provider
        metadata: Parsed output of the provider's ``describe`` action
        config: Timeout and noop settings for every invocation
        executor: Process runner (injectable for tests)
    """

    def __init__(
        self,
        path: str | Path,
        metadata: dict[str, Any],
        config: ExecutionConfig | None = None,
        executor: ProcessExecutor | None = None,
    ) -> None:
        super().__init__()
        self.path = Path(path)
        self.metadata = metadata
        self.config = config or ExecutionConfig()
        self.executor = executor or ProcessExecutor()

    def source(self) -> str:
        return str(self.path)

    def describe(self) -> Result[ProviderSpec]:
        return ProviderSpec.read(self.path, self.metadata)

    def suitable(self) -> Result[bool]:
        """Metadata's ``suitable`` flag wins; otherwise ask the program."""
        if self.spec is None:
            return error("internal error: spec was not initialized")
        if self.spec.suitable is not None:
            return Ok(self.spec.suitable)

        out = self.run_action(protocol.SUITABLE, {})
        if out.is_err():
            logger.error("provider[%s]: %s", self.path, out.err().detail)
            return out
        document = out.unwrap()
        envelope = protocol.extract_error(document)
        if envelope is not None:
            return envelope.failure("suitable failed: ")
        flag = document.get("suitable")
        if not isinstance(flag, bool):
            return error(
                f"provider {self.path}: 'suitable' reply must contain a boolean 'suitable' entry"
            )
        return Ok(flag)

    def flush(self) -> None:
        # Every update is applied immediately by the external program
        pass

    def create(self, name: str) -> ExternalResource:
        return ExternalResource(self, name)

    def find(self, name: str) -> Resource | None:
        found = self.try_find(name)
        if found.is_err():
            failure = found.err()
            # Errors the program reports about itself are only warnings
            level = logging.WARNING if isinstance(failure, BackendError) else logging.ERROR
            logger.log(level, "provider[%s]: %s", self.path, failure.detail)
            return None
        return found.unwrap()

    def try_find(self, name: str) -> Result[Resource | None]:
        out = self.run_action(protocol.FIND, protocol.find_request(name))
        if out.is_err():
            return out
        document = out.unwrap()

        envelope = protocol.extract_error(document)
        if envelope is not None:
            if envelope.is_unknown:
                return Ok(None)
            return envelope.failure(f"find for name '{name}' failed with error ")

        if "resource" not in document:
            return error(f"find of '{name}' did not produce a 'resource' entry")
        converted = self.resource_from_json(document["resource"])
        if converted.is_err():
            return error(f"find of '{name}': {converted.err().detail}")
        resource = converted.unwrap()
        if resource.name != name:
            # A misbehaving backend, not a normal absence
            logger.error(
                "provider[%s]: find of name '%s' returned resource named '%s'",
                self.path,
                name,
                resource.name,
            )
            return Ok(None)
        return Ok(resource)

    def instances(self) -> list[Resource]:
        listed = self.try_instances()
        if listed.is_err():
            logger.error("provider[%s]: %s", self.path, listed.err().detail)
            return []
        return listed.unwrap()

    def try_instances(self) -> Result[list[Resource]]:
        out = self.run_action(protocol.LIST, protocol.list_request())
        if out.is_err():
            return out
        document = out.unwrap()

        envelope = protocol.extract_error(document)
        if envelope is not None:
            return envelope.failure("list failed with error ")
        if "resources" not in document:
            return error("list did not produce a 'resources' entry")
        if not isinstance(document["resources"], list):
            return error("list produced a 'resources' entry that is not an array")

        resources: list[Resource] = []
        for entry in document["resources"]:
            converted = self.resource_from_json(entry)
            if converted.is_err():
                return error(f"list failed: {converted.err().detail}")
            resources.append(converted.unwrap())
        return Ok(resources)

    def update(self, resource: Resource, desired: AttrMap) -> Result[ChangeSet]:
        request = protocol.update_request(resource.name, desired, noop=self.config.noop)
        out = self.run_action(protocol.UPDATE, request)
        if out.is_err():
            logger.error("provider[%s]: %s", self.path, out.err().detail)
            return out
        document = out.unwrap()

        envelope = protocol.extract_error(document)
        if envelope is not None:
            return envelope.failure("update failed: ")

        changes = ChangeSet()
        reported = document.get("changes", {})
        if not isinstance(reported, dict):
            return error("malformed changes: 'changes' must be an object")

        for attr, entry in reported.items():
            if not isinstance(entry, dict) or "is" not in entry:
                return error(f"malformed change: entry for {attr} does not contain 'is'")
            if "was" not in entry:
                return error(f"malformed change: entry for {attr} does not contain 'was'")
            is_ = self.change_value(attr, entry["is"])
            was = self.change_value(attr, entry["was"])
            changes.add(attr, is_, was)

        for attr, value in desired.items():
            if attr != IDENTITY_ATTRIBUTE:
                resource[attr] = value
        return Ok(changes)

    def change_value(self, attr: str, raw: Any) -> Value:
        """Read one side of a reported change.

        The program has already applied the change, so text that does not
        fit the declared type is kept as a string rather than failing the
        update. Empty text means the attribute was (or is now) unset.
        """
        text = protocol.wire_text(raw)
        if text == "":
            return ABSENT
        parsed = self.parse(attr, text)
        if parsed.is_err():
            logger.debug(
                "provider[%s]: keeping change for %s as text: %s", self.path, attr, parsed.err()
            )
            return Value.string(text)
        return parsed.unwrap()

    def run_action(self, action: str, request: dict[str, Any]) -> Result[dict[str, Any]]:
        """Invoke the program for ``action`` and return its parsed reply."""
        outcome = self.executor.execute(
            self.path,
            args=[f"{protocol.ACTION_VARIABLE}={action}"],
            stdin=json.dumps(request),
            timeout=self.config.timeout_seconds,
            environment={protocol.ACTION_VARIABLE: action},
        )
        if outcome.is_err():
            return outcome
        return protocol.classify_outcome(action, outcome.unwrap())

    def resource_from_json(self, document: Any) -> Result[ExternalResource]:
        """Build a resource from a reply object; every key but ``name`` is parsed by type."""
        if not isinstance(document, dict):
            return error("resource entry is not an object")
        if IDENTITY_ATTRIBUTE not in document:
            return error("resource does not have a name")

        resource = self.create(str(document[IDENTITY_ATTRIBUTE]))
        for attr, raw in document.items():
            if attr == IDENTITY_ATTRIBUTE:
                continue
            parsed = self.parse(attr, protocol.wire_text(raw))
            if parsed.is_err():
                return parsed
            resource[attr] = parsed.unwrap()
        return Ok(resource)
