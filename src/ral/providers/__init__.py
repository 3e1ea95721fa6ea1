"""
Provider System for ral

A provider knows how to discover, describe and reconcile one category of
resource. Providers run in-process (``MemoryProvider``) or delegate to an
external executable (``ExternalProvider``); both honour the same contract.
"""

from .base import (
    ABSENT,
    AttrMap,
    AttrSpec,
    Change,
    ChangeSet,
    ExecutionConfig,
    ProcessExecutor,
    Provider,
    ProviderSpec,
    Resource,
    Value,
    ValueKind,
)
from .external import ExternalProvider, ExternalResource
from .memory import MemoryProvider
from .registry import ProviderRegistry

__all__ = [
    "ABSENT",
    "AttrMap",
    "AttrSpec",
    "Change",
    "ChangeSet",
    "ExecutionConfig",
    "ExternalProvider",
    "ExternalResource",
    "MemoryProvider",
    "ProcessExecutor",
    "Provider",
    "ProviderRegistry",
    "ProviderSpec",
    "Resource",
    "Value",
    "ValueKind",
]
