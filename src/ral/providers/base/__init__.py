"""Building blocks shared by every provider implementation."""

from .attributes import AttrMap
from .changes import Change, ChangeSet
from .executor import ExecutionConfig, ExecutionOption, ExecutionOutcome, ProcessExecutor
from .provider import BUILTIN_SOURCE, Provider
from .resource import IDENTITY_ATTRIBUTE, Resource
from .spec import AttrSpec, ProviderSpec
from .values import ABSENT, Value, ValueKind

__all__ = [
    "ABSENT",
    "AttrMap",
    "AttrSpec",
    "BUILTIN_SOURCE",
    "Change",
    "ChangeSet",
    "ExecutionConfig",
    "ExecutionOption",
    "ExecutionOutcome",
    "IDENTITY_ATTRIBUTE",
    "ProcessExecutor",
    "Provider",
    "ProviderSpec",
    "Resource",
    "Value",
    "ValueKind",
]
