"""
ral: resource abstraction layer

Declarative description of system resources (files, packages, services,
hosts, ...) and a pluggable provider contract that inspects real state,
computes the difference against desired state and applies changes.
"""

__version__ = "0.1.0"

from .domain import (
    BackendError,
    ContractViolationError,
    Err,
    Error,
    Ok,
    Result,
    UnimplementedError,
    error,
)
from .providers import (
    ABSENT,
    AttrMap,
    Change,
    ChangeSet,
    ExecutionConfig,
    ExternalProvider,
    MemoryProvider,
    Provider,
    ProviderRegistry,
    ProviderSpec,
    Resource,
    Value,
    ValueKind,
)

__all__ = [
    "__version__",
    "ABSENT",
    "AttrMap",
    "BackendError",
    "Change",
    "ChangeSet",
    "ContractViolationError",
    "Err",
    "Error",
    "ExecutionConfig",
    "ExternalProvider",
    "MemoryProvider",
    "Ok",
    "Provider",
    "ProviderRegistry",
    "ProviderSpec",
    "Resource",
    "Result",
    "UnimplementedError",
    "Value",
    "ValueKind",
    "error",
]
