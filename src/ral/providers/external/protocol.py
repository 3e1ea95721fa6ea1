"""
External Provider Wire Protocol

Request documents go to the program's stdin; replies come back on stdout.
The action travels out of band in the ``ral_action`` environment variable.
stderr is reserved for error text: any stderr output is a failure.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from ral.domain import BackendError, Err, Ok, Result, error

from ..base.attributes import AttrMap
from ..base.executor import ExecutionOutcome
from ..base.resource import IDENTITY_ATTRIBUTE
from ..base.values import Value

ACTION_VARIABLE = "ral_action"

DESCRIBE = "describe"
SUITABLE = "suitable"
FIND = "find"
LIST = "list"
UPDATE = "update"

DEFAULT_ERROR_KIND = "failed"
UNKNOWN_KIND = "unknown"


@dataclass(frozen=True, slots=True)
class ErrorEnvelope:
    """Logical error reported by a provider that exited successfully"""

    message: str
    kind: str = DEFAULT_ERROR_KIND

    @property
    def is_unknown(self) -> bool:
        """The resource does not exist (a normal outcome for ``find``)"""
        return self.kind == UNKNOWN_KIND

    def failure(self, prefix: str) -> Err:
        """Wrap the envelope as an ``Err`` whose detail is ``prefix`` plus the message"""
        return Err(BackendError(f"{prefix}{self.message}", kind=self.kind))


def find_request(name: str) -> dict[str, Any]:
    return {"resource": {IDENTITY_ATTRIBUTE: name}}


def list_request() -> dict[str, Any]:
    return {}


def update_request(name: str, should: AttrMap, noop: bool = False) -> dict[str, Any]:
    """Desired attributes go over the wire as strings; absent values are omitted."""
    resource: dict[str, Any] = {IDENTITY_ATTRIBUTE: name}
    for attr, value in should.items():
        if attr == IDENTITY_ATTRIBUTE or not value.is_present():
            continue
        resource[attr] = value.to_string()
    return {"ral": {"noop": noop}, "resource": resource}


def classify_outcome(action: str, outcome: ExecutionOutcome) -> Result[dict[str, Any]]:
    """Turn a finished invocation into a parsed reply document or an Err."""
    if not outcome.success:
        message = f"action '{action}' exited with status {outcome.exit_code}"
        if outcome.output:
            message += f". Output was '{outcome.output}'"
        if outcome.error:
            message += f". stderr was '{outcome.error}'"
        return error(message)
    if outcome.error:
        return error(f"action '{action}' produced stderr '{outcome.error}'")

    try:
        document = json.loads(outcome.output)
    except json.JSONDecodeError as e:
        return error(f"action '{action}' produced invalid JSON: {e}")
    if not isinstance(document, dict):
        return error(f"action '{action}' produced JSON that is not an object")
    return Ok(document)


def extract_error(document: dict[str, Any]) -> ErrorEnvelope | None:
    """Return the embedded error envelope, if the reply carries one."""
    if "error" not in document:
        return None
    payload = document["error"]
    if not isinstance(payload, dict):
        return ErrorEnvelope(message=str(payload))
    return ErrorEnvelope(
        message=str(payload.get("message", "")),
        kind=str(payload.get("kind", DEFAULT_ERROR_KIND)),
    )


def wire_text(value: Any) -> str:
    """Render a JSON scalar (or list of strings) as protocol text."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return Value.array(value).to_string()
    if value is None:
        return ""
    return str(value)
