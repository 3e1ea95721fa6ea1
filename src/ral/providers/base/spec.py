"""
Provider Spec

Parsed schema of a provider: its attributes and their types, the identity
attribute, and suitability metadata. Every text-to-Value conversion goes
through an AttrSpec looked up here.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from ral.domain import Ok, Result, error

from .resource import IDENTITY_ATTRIBUTE
from .values import Value, ValueKind

_ENUM_RE = re.compile(r"^enum\[(.*)\]$")

_SIMPLE_TYPES: dict[str, ValueKind] = {
    "string": ValueKind.STRING,
    "boolean": ValueKind.BOOLEAN,
    "integer": ValueKind.INTEGER,
    "array[string]": ValueKind.ARRAY,
}


class AttrSpec(BaseModel):
    """Declared type and role of one attribute"""

    name: str
    type: str = "string"  # string, boolean, integer, array[string], enum[a, b]
    desc: str | None = None
    kind: Literal["r", "w", "rw"] = "rw"

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: str) -> str:
        value = value.strip()
        if value not in _SIMPLE_TYPES and not _ENUM_RE.match(value):
            raise ValueError(f"unknown attribute type '{value}'")
        return value

    @property
    def value_kind(self) -> ValueKind:
        return _SIMPLE_TYPES.get(self.type, ValueKind.STRING)

    @property
    def enum_values(self) -> list[str] | None:
        match = _ENUM_RE.match(self.type)
        if match is None:
            return None
        return [member.strip() for member in match.group(1).split(",") if member.strip()]

    def read_string(self, text: str) -> Result[Value]:
        """Type-directed parse of wire text into a Value."""
        members = self.enum_values
        if members is not None and text not in members:
            return error(
                f"invalid value '{text}' for attribute '{self.name}': "
                f"expected one of {', '.join(members)}"
            )
        parsed = Value.parse(self.value_kind, text)
        if parsed.is_err():
            return error(f"attribute '{self.name}': {parsed.err().detail}")
        return parsed


class _ProviderNode(BaseModel):
    """Shape of the ``provider`` section in provider metadata"""

    type: str
    invoke: str = "json"
    actions: list[str] = Field(default_factory=list)
    suitable: bool | None = None
    desc: str | None = None
    attributes: dict[str, dict[str, Any] | None] = Field(default_factory=dict)

    @field_validator("suitable", mode="before")
    @classmethod
    def _suitable_flag(cls, value: Any) -> Any:
        if value is None or isinstance(value, bool):
            return value
        if value in ("true", "false"):
            return value == "true"
        raise ValueError(f"metadata 'suitable' must be either 'true' or 'false' but was '{value}'")


class ProviderSpec(BaseModel):
    """Parsed provider metadata"""

    name: str  # qualified name, e.g. 'host::hosts'
    type: str
    source: str
    invoke: str = "json"
    actions: list[str] = Field(default_factory=list)
    suitable: bool | None = None
    desc: str | None = None
    attributes: dict[str, AttrSpec] = Field(default_factory=dict)

    @property
    def identity(self) -> str:
        return IDENTITY_ATTRIBUTE

    def attr(self, name: str) -> AttrSpec | None:
        return self.attributes.get(name)

    def properties(self) -> list[str]:
        """Non-identity attribute names in declaration order."""
        return [name for name in self.attributes if name != IDENTITY_ATTRIBUTE]

    @classmethod
    def read(cls, path: str | Path, node: Any) -> Result[ProviderSpec]:
        """Build a spec from a provider's path and its parsed metadata node."""
        if not isinstance(node, dict):
            return error(f"provider {path}: metadata must be a map")
        meta = node.get("provider")
        if not isinstance(meta, dict):
            return error(f"provider {path}: expected 'provider' key in metadata to contain a map")

        try:
            parsed = _ProviderNode.model_validate(meta)
            attributes: dict[str, AttrSpec] = {
                IDENTITY_ATTRIBUTE: AttrSpec(name=IDENTITY_ATTRIBUTE, kind="r")
            }
            for attr_name, attr_node in parsed.attributes.items():
                attributes[attr_name] = AttrSpec.model_validate(
                    {**(attr_node or {}), "name": attr_name}
                )
        except ValidationError as e:
            details = "; ".join(_format_validation_error(err) for err in e.errors())
            return error(f"provider {path}: invalid metadata: {details}")

        return Ok(
            cls(
                name=f"{parsed.type}::{Path(path).stem}",
                type=parsed.type,
                source=str(path),
                invoke=parsed.invoke,
                actions=parsed.actions,
                suitable=parsed.suitable,
                desc=parsed.desc,
                attributes=attributes,
            )
        )


def _format_validation_error(err: Any) -> str:
    location = ".".join(str(part) for part in err.get("loc", ()))
    message = err.get("msg", "invalid")
    return f"{location}: {message}" if location else message
